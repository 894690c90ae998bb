"""Pytest configuration and a stub IamResponding vendor.

This file ensures that:
- `src/` is importable
- tests talk to an in-process `httpx.MockTransport` instead of the network
"""

from __future__ import annotations

import json
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

# Ensure src directory is in path for imports
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from iamresponding.config import ServiceConfig  # noqa: E402

SESSION_COOKIE = "idsrv.session"

LOGIN_PAGE = """<!DOCTYPE html>
<html>
  <head><title>IamResponding - Member Login</title></head>
  <body>
    <form class="form-horizontal login-form" method="post" action="/login/member">
      <input type="text" name="Input.Agency" />
      <input type="text" name="Input.Username" />
      <input type="password" name="Input.Password" />
      <input type="hidden" name="__RequestVerificationToken" value="abc123" />
      <button type="submit" name="Input.button" value="login">Login</button>
    </form>
  </body>
</html>
"""

API_PAYLOADS: dict[str, Any] = {
    "/Subscriber": {"subscriberId": 0, "statusID": 1, "name": "TestSubscriber", "isActive": True},
    "/Member": {
        "memberId": 123456,
        "subscriberId": 654321,
        "firstName": "Test",
        "lastName": "User",
    },
    "/IncidentList": [{"id": 12345678, "subscriberId": 654321, "arrivedOn": "today"}],
    "/MessageList": [
        {
            "id": "87654321",
            "messageId": 1098765,
            "subscriberId": 654321,
            "message": "HelloWorld!",
            "createdDate": "2024-01-05T10:30:00Z",
        }
    ],
    "/DispatcherContent/AssociatedDispatchers": {
        "subscriberId": 654321,
        "dispatchers": [{"dispatcherId": 555, "dispatcherName": "Test Dispatcher"}],
    },
    "/ResponderCodes": {
        "responseCodes": [
            {"id": 1, "subscriberId": 654321, "isTelephoneKey": False, "isDefaultKey": True}
        ],
        "telephoneKeys": [
            {"id": 11, "subscriberId": 654321, "isTelephoneKey": True, "isDefaultKey": True}
        ],
    },
    "/OnDutyAtCodes": [{"id": "444", "subscriberId": 654321, "keyEntry": "11"}],
    "/ResponderList": [{"id": "321", "subscriberId": 654321, "respondingTo": "station"}],
    "/ApparatusList": [{}],
    "/SearchIncidents": [{"id": 12345678, "subscriberId": 654321, "arrivedOn": "today"}],
}

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


def _session_cookie(value: str) -> str:
    return f"{SESSION_COOKIE}={value}; Domain=.iamresponding.com; Path=/"


class VendorStub:
    """Routes requests for the auth host, the dashboard and the API.

    Every request is recorded in ``requests``. Individual routes can be
    replaced with ``route()`` to simulate failures.
    """

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self.config = config or ServiceConfig()
        self.requests: list[httpx.Request] = []
        self.login_page: str = LOGIN_PAGE
        self.legacy_reply: str = "Login to iamresponding.com/ successful"
        self.payloads: dict[str, Any] = dict(API_PAYLOADS)
        self._routes: dict[tuple[str, str], Handler] = {}

    def route(self, method: str, url: str, handler: Handler) -> None:
        parsed = httpx.URL(url)
        self._routes[(method, f"{parsed.host}{parsed.path}")] = handler

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        override = self._routes.get((request.method, f"{request.url.host}{request.url.path}"))
        if override is not None:
            response = override(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response
        return self._default(request)

    def _default(self, request: httpx.Request) -> httpx.Response:
        config = self.config
        url = str(request.url.copy_with(query=None))
        api_base = httpx.URL(config.api_base_url)

        if request.method == "GET" and url == config.login_page_url:
            return httpx.Response(200, html=self.login_page)
        if request.method == "POST" and url == config.login_url:
            return httpx.Response(
                200,
                headers={"Set-Cookie": _session_cookie("form-session")},
                html="<html><body>ok</body></html>",
            )
        if request.method == "POST" and url == config.legacy_login_url:
            body = json.loads(request.content)
            reply = self.legacy_reply if body.get("memberpwd") == "good" else "invalid credentials"
            return httpx.Response(
                200,
                headers={"Set-Cookie": _session_cookie("json-session")},
                json={"d": reply},
            )
        if request.method == "GET" and request.url.host == httpx.URL(config.authorize_url).host:
            if request.url.path == "/system/login":
                return httpx.Response(200, html="<html><body>dashboard</body></html>")
        if request.url.host == api_base.host and request.url.path.startswith(api_base.path):
            if SESSION_COOKIE not in request.headers.get("cookie", ""):
                return httpx.Response(401)
            endpoint = request.url.path[len(api_base.path.rstrip("/")) :]
            if endpoint in self.payloads:
                return httpx.Response(
                    200,
                    content=json.dumps(self.payloads[endpoint]),
                    headers={"Content-Type": "application/json"},
                )
        return httpx.Response(404)


@pytest.fixture
def vendor() -> VendorStub:
    return VendorStub()


@pytest.fixture
def legacy_vendor() -> VendorStub:
    return VendorStub(ServiceConfig.legacy())
