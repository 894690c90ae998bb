"""Configuration primitives for the IamResponding client."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from omegaconf import OmegaConf
from pydantic import BaseModel, ConfigDict, Field, SecretStr


class LoginStrategy(str, Enum):
    """Login protocol spoken by the vendor's auth host."""

    FORM_TOKEN = "form_token"
    LEGACY_JSON = "legacy_json"


def _load_mapping(location: Path) -> dict[str, Any]:
    raw_config = OmegaConf.load(location)
    config = OmegaConf.to_container(raw_config, resolve=True)
    if not isinstance(config, dict):
        raise ValueError(f"{location} must contain a mapping.")
    return {str(key): value for key, value in config.items()}


class Credentials(BaseModel):
    """Login input for one agency member.

    Handed to the login handshake and discarded afterwards; the client only
    keeps the resulting cookies.
    """

    model_config = ConfigDict(frozen=True)

    agency: str = Field(description="Agency (subscriber) name used at login", examples=["Station 9"])
    username: str = Field(description="Member login name", examples=["jdoe"])
    password: SecretStr = Field(description="Member password")


class ServiceConfig(BaseModel):
    """Vendor endpoints and login protocol selection.

    The defaults target the current form-and-token login on the auth host.
    ``ServiceConfig.legacy()`` gives the older JSON login against the
    coordinator API host.

    ``timeout`` is handed to httpx unchanged as the limit for each single
    request (connect, read, write, pool); ``None`` disables it. The client
    adds no deadline of its own on top: bound a whole call or the login with
    ``asyncio.timeout`` or ``asyncio.wait_for``.
    """

    model_config = ConfigDict(frozen=True)

    login_page_url: str = "https://auth.iamresponding.com/login/member"
    login_url: str = "https://auth.iamresponding.com/login/member"
    legacy_login_url: str = (
        "https://iamresponding.com/v3/Pages/memberlogin.aspx/ValidateLoginInfo"
    )
    api_base_url: str = "https://dashboard.iamresponding.com/api"
    dashboard_url: str = "https://dashboard.iamresponding.com"
    authorize_path: str = "/system/login?returnUrl=/"
    login_form_class: str = "login-form"
    strategy: LoginStrategy = LoginStrategy.FORM_TOKEN
    timeout: float | None = Field(default=30.0, gt=0)

    @classmethod
    def legacy(cls, **overrides: Any) -> ServiceConfig:
        """Configuration for the historical JSON login protocol."""
        values: dict[str, Any] = {
            "api_base_url": "https://coordinator.iamresponding.com/api",
            "strategy": LoginStrategy.LEGACY_JSON,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_file(cls, path: Path | str) -> ServiceConfig:
        """Load overrides from the ``service`` mapping of a YAML file."""
        location = Path(path).expanduser()
        if not location.is_file():
            raise FileNotFoundError(f"Service config file not found: {location}")
        section = _load_mapping(location).get("service") or {}
        if not isinstance(section, dict):
            raise ValueError(f"`service` in {location} must be a mapping.")
        return cls(**section)

    def api_url(self, path: str) -> str:
        return f"{self.api_base_url.rstrip('/')}{path}"

    @property
    def authorize_url(self) -> str:
        return f"{self.dashboard_url.rstrip('/')}{self.authorize_path}"

    @property
    def vendor_urls(self) -> tuple[str, ...]:
        """Every URL the client may talk to, in handshake order."""
        return (
            self.login_page_url,
            self.login_url,
            self.dashboard_url,
            self.api_base_url,
        )
