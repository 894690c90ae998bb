"""Login handshake for the IamResponding member site.

Two protocols are supported, selected by ``ServiceConfig.strategy``:

``LEGACY_JSON``
    A single JSON POST. The vendor replies ``{"d": "<message>"}`` and the
    login succeeded only if the message mentions ``iamresponding.com/``.

``FORM_TOKEN``
    ``FETCH_TOKEN`` -> ``SUBMIT_CREDENTIALS`` -> ``AUTHORIZE``. The vendor
    gives no success signal in this flow, so it ends ``UNVERIFIED``; the first
    API call made with the session is the real confirmation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlencode

from loguru import logger

from .api import ApiSession
from .config import Credentials, LoginStrategy, ServiceConfig
from .errors import AuthenticationError, HandshakeError, IamRespondingError
from .models import LoginReply, LoginRequest
from .tokens import TOKEN_FIELD, TokenExtractor, extract_token
from .transport import SessionTransport

SUCCESS_MARKER = "iamresponding.com/"
CONSENT_COOKIE = "CookieConsent"
CONSENT_VALUE = "yes"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HandshakeState(str, Enum):
    FETCH_TOKEN = "fetch_token"
    SUBMIT_CREDENTIALS = "submit_credentials"
    AUTHORIZE = "authorize"
    AUTHENTICATED = "authenticated"
    UNVERIFIED = "unverified"
    FAILED = "failed"


class HandshakeOutcome(str, Enum):
    """How much the handshake knows about the session it produced."""

    AUTHENTICATED = "authenticated"
    UNVERIFIED = "unverified"


@dataclass(slots=True)
class HandshakeResult:
    outcome: HandshakeOutcome
    strategy: LoginStrategy
    states: tuple[HandshakeState, ...] = field(default_factory=tuple)
    token_found: bool = False


class LoginHandshake:
    """Run one login against the vendor and leave the cookies in ``transport``.

    Credentials are only read inside ``run()``; nothing here keeps them.
    """

    def __init__(
        self,
        transport: SessionTransport,
        config: ServiceConfig,
        extractor: TokenExtractor | None = None,
    ) -> None:
        self._transport = transport
        self._config = config
        self._extractor = extractor
        self._api = ApiSession(transport, config)
        self._trace: list[HandshakeState] = []

    @property
    def states(self) -> tuple[HandshakeState, ...]:
        return tuple(self._trace)

    def _enter(self, state: HandshakeState) -> None:
        self._trace.append(state)
        logger.debug(f"Login handshake state -> {state.value}")

    async def run(self, credentials: Credentials) -> HandshakeResult:
        self._trace = []
        try:
            if self._config.strategy is LoginStrategy.LEGACY_JSON:
                return await self._run_legacy_json(credentials)
            return await self._run_form_token(credentials)
        except BaseException:
            self._enter(HandshakeState.FAILED)
            raise

    async def _run_legacy_json(self, credentials: Credentials) -> HandshakeResult:
        url = self._config.legacy_login_url
        self._enter(HandshakeState.SUBMIT_CREDENTIALS)
        request = LoginRequest(
            member_login=True,
            agency=credentials.agency,
            user=credentials.username,
            password=credentials.password.get_secret_value(),
        )
        try:
            reply = await self._api.post(url, request, LoginReply)
        except IamRespondingError as exc:
            exc.context.setdefault("operation", "login")
            raise

        if SUCCESS_MARKER not in reply.message:
            raise AuthenticationError(reply.message, {"operation": "login", "url": url})

        self._enter(HandshakeState.AUTHENTICATED)
        logger.info("Logged in to IamResponding (JSON login confirmed)")
        return HandshakeResult(
            outcome=HandshakeOutcome.AUTHENTICATED,
            strategy=LoginStrategy.LEGACY_JSON,
            states=self.states,
        )

    async def _run_form_token(self, credentials: Credentials) -> HandshakeResult:
        token = await self._fetch_token()
        await self._submit_credentials(credentials, token or "")
        await self._authorize()

        self._enter(HandshakeState.UNVERIFIED)
        logger.warning(
            "IamResponding login finished without a success signal; "
            "the first API call will confirm the session"
        )
        return HandshakeResult(
            outcome=HandshakeOutcome.UNVERIFIED,
            strategy=LoginStrategy.FORM_TOKEN,
            states=self.states,
            token_found=token is not None,
        )

    async def _fetch_token(self) -> str | None:
        self._enter(HandshakeState.FETCH_TOKEN)
        url = self._config.login_page_url
        response = await self._transport.get(url, headers={"Accept": "text/html"})

        try:
            token = extract_token(response.content, self._config.login_form_class, self._extractor)
        except ValueError as exc:
            raise HandshakeError(
                f"Could not parse login page: {exc}",
                HandshakeState.FETCH_TOKEN.value,
                {"operation": "login", "url": url, "status": response.status_code},
            ) from exc

        if token is None:
            logger.warning(f"No {TOKEN_FIELD} found on login page; submitting an empty token")
        return token

    async def _submit_credentials(self, credentials: Credentials, token: str) -> None:
        self._enter(HandshakeState.SUBMIT_CREDENTIALS)
        for url in self._config.vendor_urls:
            self._transport.set_cookie(CONSENT_COOKIE, CONSENT_VALUE, url)

        form = [
            ("Input.Agency", credentials.agency),
            ("Input.Username", credentials.username),
            ("Input.Password", credentials.password.get_secret_value()),
            (TOKEN_FIELD, token),
            ("Input.RememberLogin", "false"),
            ("Input.button", "login"),
            ("Input.ReturnUrl", ""),
        ]
        await self._transport.post(
            self._config.login_url,
            content_type=FORM_CONTENT_TYPE,
            body=urlencode(form),
        )

    async def _authorize(self) -> None:
        self._enter(HandshakeState.AUTHORIZE)
        await self._transport.get(self._config.authorize_url)
