"""JSON request/response plumbing on top of the session transport."""

from __future__ import annotations

import json
from typing import Any, TypeVar, cast

import httpx
from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import LoginStrategy, ServiceConfig
from .errors import DecodeError, HTTPStatusError
from .transport import SessionTransport

T = TypeVar("T")

ACCEPT = "text/plain,application/json"
JSON_CONTENT_TYPE = "application/json"


class ApiSession:
    """Issue JSON calls and decode the 200 response into a typed shape.

    ``shape`` is a pydantic model class or anything ``TypeAdapter`` accepts,
    such as ``list[Incident]``. Non-200 responses are never decoded.
    """

    def __init__(self, transport: SessionTransport, config: ServiceConfig) -> None:
        self._transport = transport
        self._config = config

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": ACCEPT}
        if self._config.strategy is LoginStrategy.FORM_TOKEN:
            headers["X-CSRF"] = "1"
        return headers

    async def get(self, path: str, shape: type[T]) -> T:
        """GET ``api_base_url + path`` and decode it as ``shape``."""
        url = self._config.api_url(path)
        response = await self._transport.get(url, headers=self._headers())
        return self._decode(response, url, shape)

    async def post(self, url: str, payload: Any, shape: type[T]) -> T:
        """POST ``payload`` as JSON to an absolute ``url`` and decode the reply."""
        if isinstance(payload, BaseModel):
            data = payload.model_dump(mode="json", by_alias=True)
        else:
            data = payload
        body = json.dumps(data)
        response = await self._transport.post(
            url,
            content_type=JSON_CONTENT_TYPE,
            body=body,
            headers=self._headers(),
        )
        return self._decode(response, url, shape)

    @staticmethod
    def _decode(response: httpx.Response, url: str, shape: type[T]) -> T:
        if response.status_code != httpx.codes.OK:
            raise HTTPStatusError(response.status_code, url)

        try:
            data = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.debug(f"Undecodable body from {url}: {response.text[:200]!r}")
            raise DecodeError(f"Invalid JSON response from {url}: {exc}", url) from exc

        try:
            if data is None:
                return _zero_value(shape)
            if _is_model(shape):
                return cast(T, cast(type[BaseModel], shape).model_validate(data))
            return TypeAdapter(shape).validate_python(data)
        except ValidationError as exc:
            raise DecodeError(
                f"Response from {url} does not match {_shape_name(shape)}: "
                f"{exc.error_count()} validation error(s)",
                url,
            ) from exc


def _is_model(shape: Any) -> bool:
    try:
        return issubclass(shape, BaseModel)
    except TypeError:
        return False


def _zero_value(shape: Any) -> Any:
    if _is_model(shape):
        return shape.model_validate({})
    return TypeAdapter(shape).validate_python([])


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)
