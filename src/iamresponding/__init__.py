"""Async client for the IamResponding responder-coordination API."""

from .auth import HandshakeOutcome, HandshakeResult, HandshakeState, LoginHandshake
from .client import IamRespondingClient
from .config import Credentials, LoginStrategy, ServiceConfig
from .errors import (
    AuthenticationError,
    DecodeError,
    HandshakeError,
    HTTPStatusError,
    IamRespondingError,
    TransportError,
)
from .models import (
    Apparatus,
    Dispatcher,
    Dispatchers,
    Incident,
    IncidentSearchRequest,
    MemberInfo,
    Message,
    OnDutyAtCode,
    Responder,
    ResponderCode,
    ResponderCodes,
    SubscriberInfo,
)
from .tokens import extract_token

__version__ = "0.1.0"

__all__ = [
    "Apparatus",
    "AuthenticationError",
    "Credentials",
    "DecodeError",
    "Dispatcher",
    "Dispatchers",
    "HTTPStatusError",
    "HandshakeError",
    "HandshakeOutcome",
    "HandshakeResult",
    "HandshakeState",
    "IamRespondingClient",
    "IamRespondingError",
    "Incident",
    "IncidentSearchRequest",
    "LoginHandshake",
    "LoginStrategy",
    "MemberInfo",
    "Message",
    "OnDutyAtCode",
    "Responder",
    "ResponderCode",
    "ResponderCodes",
    "ServiceConfig",
    "SubscriberInfo",
    "TransportError",
    "extract_token",
]
