"""
Service Account Credentials Module

This module loads the bot's service account key and turns it into scoped,
token-bearing credentials for the Google Chat API.

The key is read once at startup. SERVICE_ACCOUNT_KEY_JSON (an inline JSON
blob, convenient for serverless deployments) takes precedence; when it is
unset the key file at SERVICE_ACCOUNT_KEY_FILE is read instead.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Sequence

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2 import service_account
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from chat_relay.exceptions import ConfigError, RemoteError
from chat_relay.utils.config import DEFAULT_CHAT_SCOPES, DEFAULT_KEY_FILE
from chat_relay.utils.logger import get_logger

logger = get_logger(__name__)


class ServiceAccountKey(BaseModel):
    """
    Schema for a Google service account key file.

    Only the fields needed to sign token requests are required. Anything else
    Google adds to the key file is kept and passed through.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    type: Literal["service_account"]
    private_key: str = Field(min_length=1)
    client_email: str = Field(min_length=1)
    token_uri: str = Field(min_length=1)
    project_id: Optional[str] = None
    private_key_id: Optional[str] = None
    client_id: Optional[str] = None
    auth_uri: Optional[str] = None
    auth_provider_x509_cert_url: Optional[str] = None
    client_x509_cert_url: Optional[str] = None
    universe_domain: Optional[str] = None

    def to_info(self) -> Dict[str, Any]:
        """Return the key as the dict google-auth expects."""
        return self.model_dump(exclude_none=True)


def _parse_key(raw: str, source: str) -> ServiceAccountKey:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Service account key from {source} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Service account key from {source} must be a JSON object")

    try:
        return ServiceAccountKey.model_validate(data)
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise ConfigError(f"Service account key from {source} is malformed: {fields}") from e


def load_service_account_key(
    key_json: Optional[str] = None,
    key_file: Optional[str] = None,
) -> ServiceAccountKey:
    """
    Load the service account key.

    Args:
        key_json (Optional[str]): Inline key JSON. Used exclusively when non-empty.
        key_file (Optional[str]): Path of the key file used when key_json is empty.

    Returns:
        ServiceAccountKey: The validated key.

    Raises:
        ConfigError: If the selected source is missing, unreadable or malformed.
    """
    if key_json and key_json.strip():
        logger.debug("Loading service account key from SERVICE_ACCOUNT_KEY_JSON")
        return _parse_key(key_json, "SERVICE_ACCOUNT_KEY_JSON")

    path = Path(key_file or DEFAULT_KEY_FILE).expanduser()
    logger.debug(f"Loading service account key from {path}")
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"No SERVICE_ACCOUNT_KEY_JSON set and could not read key file {path}: {e}"
        ) from e

    return _parse_key(raw, str(path))


class CredentialProvider:
    """
    Hands out authorized service account credentials.

    Built once at startup and shared by every request. The underlying
    google-auth credentials cache their bearer token until it expires, so a
    token request is only made when none is held or the held one is stale.
    """

    def __init__(self, key: ServiceAccountKey, scopes: Sequence[str]) -> None:
        self._key = key
        self._scopes: List[str] = list(scopes)
        try:
            self._credentials = service_account.Credentials.from_service_account_info(
                key.to_info(), scopes=self._scopes
            )
        except (ValueError, KeyError) as e:
            raise ConfigError(f"Service account key could not be used: {e}") from e
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "CredentialProvider":
        """
        Build a provider from the application configuration.

        Args:
            config (Dict[str, Any]): The dict returned by get_config().

        Returns:
            CredentialProvider: The provider.

        Raises:
            ConfigError: If the key cannot be loaded.
        """
        key = load_service_account_key(
            config.get("service_account_key_json", ""),
            config.get("service_account_key_file", DEFAULT_KEY_FILE),
        )
        return cls(key, config.get("chat_api_scopes") or DEFAULT_CHAT_SCOPES)

    @property
    def service_account_email(self) -> str:
        return self._key.client_email

    @property
    def scopes(self) -> List[str]:
        return list(self._scopes)

    def get_authorized_client(self) -> service_account.Credentials:
        """
        Get credentials holding a valid bearer token.

        Returns:
            service_account.Credentials: The authorized credentials.

        Raises:
            RemoteError: If the token endpoint rejects the request or is unreachable.
        """
        with self._lock:
            if not self._credentials.valid:
                logger.debug(f"Requesting access token for {self._key.client_email}")
                try:
                    self._credentials.refresh(GoogleRequest())
                except GoogleAuthError as e:
                    logger.error(f"Failed to obtain access token: {e}")
                    raise RemoteError(f"Failed to obtain access token: {e}") from e
            return self._credentials

    def get_access_token(self) -> str:
        """Return the current bearer token, fetching one if needed."""
        return self.get_authorized_client().token
