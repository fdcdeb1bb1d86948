"""
Frontend — Backend API 客戶端（人格清單、設定單例）。
讀取失敗一律轉為 LoadError，儲存失敗轉為 SaveError（附帶後端 message）。
"""

import logging

import requests
from pydantic import ValidationError

from frontend.config import (
    API_GET_TIMEOUT,
    API_POST_TIMEOUT,
    BACKEND_URL,
    PERSONAS_PATH,
    SETTINGS_PATH,
)
from frontend.models import Persona, Settings

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """Fetching personas or settings failed (transport, non-2xx or malformed body)."""

    def __init__(self, resource: str, message: str):
        super().__init__(f"Failed to fetch {resource}: {message}")
        self.resource = resource


class SaveError(Exception):
    """Saving settings failed. ``message`` is the server-provided text when present."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: requests.Response) -> str:
    """Pull ``message`` out of an error body, falling back to the status line."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}"


class SettingsApi:
    """Thin wrapper over the settings service HTTP contract."""

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        session: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()

    def _get_json(self, resource: str, path: str):
        try:
            resp = self._session.get(f"{self._base_url}{path}", timeout=API_GET_TIMEOUT)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise LoadError(resource, str(e)) from e
        except ValueError as e:
            raise LoadError(resource, "invalid JSON body") from e

    def fetch_personas(self) -> list[Persona]:
        """GET the persona list, preserving server order."""
        data = self._get_json("personas", PERSONAS_PATH)
        try:
            return [Persona.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise LoadError("personas", "malformed persona list") from e

    def fetch_settings(self) -> Settings:
        """GET the settings singleton as a complete record."""
        data = self._get_json("settings", SETTINGS_PATH)
        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            raise LoadError("settings", "malformed settings record") from e

    def save_settings(self, settings: Settings) -> None:
        """POST the full record. The response body is ignored on success."""
        try:
            resp = self._session.post(
                f"{self._base_url}{SETTINGS_PATH}",
                json=settings.to_api(),
                timeout=API_POST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise SaveError(str(e)) from e
        if not resp.ok:
            raise SaveError(_error_message(resp), resp.status_code)
