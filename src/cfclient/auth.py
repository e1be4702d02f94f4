"""Authentication handling for the Cloud Foundry client."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from .config import CF_ACCESS_TOKEN_ENV, CF_CONFIG_PATH
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class Credentials(BaseModel):
    """Credentials read from the cf CLI config file."""

    access_token: str = Field(..., description="OAuth access token, without scheme")
    token_type: str = Field(default="Bearer", description="Token type")
    target: str | None = Field(None, description="Cloud Controller API URL")


def _split_token(raw: str) -> tuple[str, str]:
    """Split ``"bearer abc"`` into ``("Bearer", "abc")``."""
    scheme, _, token = raw.strip().partition(" ")
    if token:
        return scheme.capitalize(), token.strip()
    return "Bearer", scheme


def load_credentials_from_file(path: Path) -> Credentials | None:
    """Load credentials from a cf CLI ``config.json``.

    The cf CLI stores the token as ``"AccessToken": "bearer eyJ..."``; a plain
    ``access_token`` key is accepted too.

    Args:
        path: Path to the config file.

    Returns:
        Credentials if found and valid, None otherwise.
    """
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.debug(f"Ignoring unreadable cf config {path}: {e}")
        return None

    raw = data.get("AccessToken") or data.get("access_token")
    if not raw:
        return None

    token_type, token = _split_token(raw)
    return Credentials(
        access_token=token,
        token_type=token_type,
        target=data.get("Target") or data.get("target"),
    )


def get_access_token(
    token: str | None = None,
    config_path: Path | None = None,
) -> str | None:
    """Get the access token from various sources.

    Checks in order of priority:
    1. Explicitly provided token parameter
    2. CF_ACCESS_TOKEN environment variable
    3. ~/.cf/config.json written by the cf CLI

    Args:
        token: Explicitly provided token (with or without ``bearer`` prefix).
        config_path: Path to the cf config file.

    Returns:
        The bare token if found, None otherwise.
    """
    if token:
        return _split_token(token)[1]

    env_token = os.environ.get(CF_ACCESS_TOKEN_ENV)
    if env_token:
        return _split_token(env_token)[1]

    creds = load_credentials_from_file(config_path or CF_CONFIG_PATH)
    if creds:
        return creds.access_token

    return None


def get_api_url(api_url: str | None = None, config_path: Path | None = None) -> str | None:
    """Resolve the API URL from the argument, then the cf config ``Target``."""
    if api_url:
        return api_url

    creds = load_credentials_from_file(config_path or CF_CONFIG_PATH)
    if creds and creds.target:
        return creds.target

    return None


class AuthProvider:
    """Provider for authentication headers.

    Token refresh is out of scope: the token is resolved once and reused
    until ``refresh()`` is called.
    """

    def __init__(
        self,
        token: str | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._token = token
        self._config_path = config_path
        self._resolved_token: str | None = None

    @property
    def token(self) -> str | None:
        """Get the resolved access token."""
        if self._resolved_token is None:
            self._resolved_token = get_access_token(
                token=self._token,
                config_path=self._config_path,
            )
        return self._resolved_token

    def get_headers(self) -> dict[str, str]:
        """Get authorization headers for requests.

        Raises:
            AuthenticationError: If no access token is available.
        """
        token = self.token
        if not token:
            raise AuthenticationError(
                f"No access token found. Set {CF_ACCESS_TOKEN_ENV}, pass token=..., "
                "or log in with the cf CLI"
            )

        return {"Authorization": f"Bearer {token}"}

    def refresh(self) -> None:
        """Clear cached token and re-resolve on next access."""
        self._resolved_token = None

    def is_authenticated(self) -> bool:
        return self.token is not None
