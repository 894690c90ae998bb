"""IamResponding API client."""

from __future__ import annotations

from types import TracebackType
from typing import TypeVar

import httpx
from loguru import logger
from pydantic import SecretStr

from .api import ApiSession
from .auth import HandshakeOutcome, HandshakeResult, LoginHandshake
from .config import Credentials, ServiceConfig
from .errors import IamRespondingError
from .models import (
    ApparatusList,
    Dispatchers,
    IncidentList,
    IncidentSearchRequest,
    MemberInfo,
    MessageList,
    OnDutyAtCodeList,
    ResponderCodes,
    ResponderList,
    SubscriberInfo,
)
from .tokens import TokenExtractor
from .transport import SessionTransport

T = TypeVar("T")


class IamRespondingClient:
    """Authenticated access to the read-only IamResponding API.

    Build one with ``await IamRespondingClient.connect(...)``. The session is
    never refreshed: once it expires, API calls start failing with
    ``HTTPStatusError`` or ``DecodeError`` and a new client has to be connected.
    """

    def __init__(
        self,
        transport: SessionTransport,
        config: ServiceConfig,
        handshake: HandshakeResult,
    ) -> None:
        self._transport = transport
        self._config = config
        self._api = ApiSession(transport, config)
        self._handshake = handshake
        self._outcome = handshake.outcome

    @classmethod
    async def connect(
        cls,
        agency: str,
        username: str,
        password: str,
        *,
        config: ServiceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        extractor: TokenExtractor | None = None,
    ) -> IamRespondingClient:
        credentials = Credentials(agency=agency, username=username, password=SecretStr(password))
        return await cls.connect_with(
            credentials, config=config, transport=transport, extractor=extractor
        )

    @classmethod
    async def connect_with(
        cls,
        credentials: Credentials,
        *,
        config: ServiceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        extractor: TokenExtractor | None = None,
    ) -> IamRespondingClient:
        """Log in and return a client holding the resulting session.

        The HTTP session is closed again if the login fails.
        """
        config = config or ServiceConfig()
        session = SessionTransport(config, transport=transport)
        try:
            result = await LoginHandshake(session, config, extractor).run(credentials)
        except BaseException:
            await session.aclose()
            raise
        return cls(session, config, result)

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def handshake(self) -> HandshakeResult:
        return self._handshake

    @property
    def outcome(self) -> HandshakeOutcome:
        """``UNVERIFIED`` until an API call succeeds on a form-token session."""
        return self._outcome

    @property
    def cookies(self) -> httpx.Cookies:
        return self._transport.cookies

    async def _get(self, operation: str, path: str, shape: type[T]) -> T:
        try:
            result = await self._api.get(path, shape)
        except IamRespondingError as exc:
            exc.context.setdefault("operation", operation)
            raise
        self._confirm()
        return result

    def _confirm(self) -> None:
        if self._outcome is HandshakeOutcome.UNVERIFIED:
            self._outcome = HandshakeOutcome.AUTHENTICATED
            logger.info("IamResponding session confirmed by first successful API call")

    # =========================================================================
    # Endpoint catalog
    # =========================================================================

    async def subscriber(self) -> SubscriberInfo:
        return await self._get("subscriber", "/Subscriber", SubscriberInfo)

    async def member(self) -> MemberInfo:
        return await self._get("member", "/Member", MemberInfo)

    async def incidents(self) -> IncidentList:
        return await self._get("incidents", "/IncidentList", IncidentList)

    async def messages(self) -> MessageList:
        return await self._get("messages", "/MessageList", MessageList)

    async def dispatchers(self) -> Dispatchers:
        return await self._get("dispatchers", "/DispatcherContent/AssociatedDispatchers", Dispatchers)

    async def responder_codes(self) -> ResponderCodes:
        return await self._get("responder_codes", "/ResponderCodes", ResponderCodes)

    async def on_duty_at_codes(self) -> OnDutyAtCodeList:
        return await self._get("on_duty_at_codes", "/OnDutyAtCodes", OnDutyAtCodeList)

    async def responder_list(self) -> ResponderList:
        return await self._get("responder_list", "/ResponderList", ResponderList)

    async def apparatus_list(self) -> ApparatusList:
        return await self._get("apparatus_list", "/ApparatusList", ApparatusList)

    async def search_incidents(self, request: IncidentSearchRequest) -> IncidentList:
        """Fetch one page of incidents between ``request.start_time`` and ``end_time``."""
        url = self._config.api_url("/SearchIncidents")
        try:
            result = await self._api.post(url, request, IncidentList)
        except IamRespondingError as exc:
            exc.context.setdefault("operation", "search_incidents")
            raise
        self._confirm()
        return result

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> IamRespondingClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
