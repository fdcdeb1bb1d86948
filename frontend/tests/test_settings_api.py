"""Tests for frontend.api.SettingsApi — HTTP contract and error mapping (requests mocked)."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from frontend.api import LoadError, SaveError, SettingsApi
from frontend.config import API_GET_TIMEOUT, API_POST_TIMEOUT
from frontend.models import DEFAULT_SETTINGS, Persona

_BASE = "http://backend.test"

_SETTINGS_BODY = {
    "id": "1",
    "temperature": 0.3,
    "maxTokens": 500,
    "rotationInterval": 15,
    "selectedPersonaId": "p2",
    "modelName": "gpt-4",
}


def _response(status: int, body=None, raw: bytes | None = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.url = _BASE
    if raw is not None:
        resp._content = raw
    else:
        resp._content = json.dumps(body).encode()
    return resp


def _api(session: MagicMock) -> SettingsApi:
    return SettingsApi(base_url=f"{_BASE}/", session=session)


class TestFetchPersonas:
    def test_returns_personas_in_server_order(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value = _response(
            200,
            [
                {"id": "p1", "name": "A", "systemPrompt": "x", "isActive": False},
                {"id": "p2", "name": "B", "systemPrompt": "y", "isActive": True},
            ],
        )

        personas = _api(session).fetch_personas()

        assert [p.id for p in personas] == ["p1", "p2"]
        assert personas[1] == Persona(id="p2", name="B", system_prompt="y", is_active=True)
        session.get.assert_called_once_with(
            f"{_BASE}/api/personas", timeout=API_GET_TIMEOUT
        )

    def test_non_2xx_raises_load_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value = _response(503, {"message": "down"})

        with pytest.raises(LoadError) as exc_info:
            _api(session).fetch_personas()
        assert exc_info.value.resource == "personas"

    def test_transport_error_raises_load_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(LoadError):
            _api(session).fetch_personas()

    def test_malformed_body_raises_load_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value = _response(200, {"not": "a list"})

        with pytest.raises(LoadError):
            _api(session).fetch_personas()


class TestFetchSettings:
    def test_returns_complete_record(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value = _response(200, _SETTINGS_BODY)

        settings = _api(session).fetch_settings()

        assert settings.selected_persona_id == "p2"
        assert settings.rotation_interval == 15
        assert settings.to_api() == _SETTINGS_BODY

    def test_invalid_json_raises_load_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value = _response(200, raw=b"<html>")

        with pytest.raises(LoadError) as exc_info:
            _api(session).fetch_settings()
        assert exc_info.value.resource == "settings"

    def test_incomplete_record_raises_load_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value = _response(200, {"id": "1"})

        with pytest.raises(LoadError):
            _api(session).fetch_settings()


class TestSaveSettings:
    def test_posts_full_record_in_camel_case(self):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = _response(200, _SETTINGS_BODY)

        _api(session).save_settings(DEFAULT_SETTINGS)

        session.post.assert_called_once_with(
            f"{_BASE}/api/settings",
            json=DEFAULT_SETTINGS.to_api(),
            timeout=API_POST_TIMEOUT,
        )
        sent = session.post.call_args.kwargs["json"]
        assert set(sent) == set(_SETTINGS_BODY)

    def test_server_message_is_surfaced(self):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = _response(
            422, {"error_code": "SETTINGS_INVALID", "message": "maxTokens: too small"}
        )

        with pytest.raises(SaveError) as exc_info:
            _api(session).save_settings(DEFAULT_SETTINGS)
        assert exc_info.value.message == "maxTokens: too small"
        assert exc_info.value.status_code == 422

    def test_missing_message_falls_back_to_status(self):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = _response(502, raw=b"Bad Gateway")

        with pytest.raises(SaveError) as exc_info:
            _api(session).save_settings(DEFAULT_SETTINGS)
        assert exc_info.value.message == "HTTP 502"

    def test_transport_error_raises_save_error(self):
        session = MagicMock(spec=requests.Session)
        session.post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(SaveError) as exc_info:
            _api(session).save_settings(DEFAULT_SETTINGS)
        assert exc_info.value.status_code is None
