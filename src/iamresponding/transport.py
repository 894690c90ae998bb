"""Cookie-carrying HTTP session shared by the handshake and the API layer."""

from __future__ import annotations

from http.cookiejar import Cookie, CookieJar, DefaultCookiePolicy
from types import TracebackType
from typing import Any
from urllib.parse import urlsplit
from urllib.request import Request

import httpx
from loguru import logger
from publicsuffixlist import PublicSuffixList

from .config import ServiceConfig
from .errors import TransportError

_PSL = PublicSuffixList()


class PublicSuffixCookiePolicy(DefaultCookiePolicy):
    """Refuse cookies scoped to a public suffix such as ``.com`` or ``.co.uk``.

    Cookies scoped to the vendor's registrable domain are accepted and shared
    between its subdomains; host-only cookies stay on their host.
    """

    def set_ok_domain(self, cookie: Cookie, request: Request) -> bool:
        if not super().set_ok_domain(cookie, request):
            return False
        if not cookie.domain_specified:
            return True
        domain = cookie.domain.lstrip(".").lower()
        if _PSL.is_public(domain):
            logger.debug(f"Rejected cookie {cookie.name!r} scoped to public suffix {domain!r}")
            return False
        return True


class SessionTransport:
    """Thin async wrapper over ``httpx.AsyncClient`` with a public-suffix aware jar.

    One transport backs one client for its whole lifetime; cookies are never
    rotated. ``http.cookiejar.CookieJar`` guards its state with a lock, so the
    jar tolerates concurrent requests from several tasks.
    """

    def __init__(
        self,
        config: ServiceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._jar = CookieJar(policy=PublicSuffixCookiePolicy())
        self._client = httpx.AsyncClient(
            cookies=self._jar,
            follow_redirects=True,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def set_cookie(self, name: str, value: str, url: str) -> None:
        """Attach ``name=value`` to every later request sent to the host of ``url``."""
        host = urlsplit(url).hostname
        if not host:
            raise ValueError(f"Cannot scope a cookie to URL without host: {url}")
        self._client.cookies.set(name, value, domain=host)

    async def get(self, url: str, *, headers: dict[str, str] | None = None) -> httpx.Response:
        return await self._send("GET", url, headers=headers)

    async def post(
        self,
        url: str,
        *,
        content_type: str,
        body: bytes | str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged = {"Content-Type": content_type, **(headers or {})}
        return await self._send("POST", url, headers=merged, content=body)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(
                f"{method} {url} failed: {exc.__class__.__name__}: {exc}",
                {"method": method, "url": url},
            ) from exc
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> SessionTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
