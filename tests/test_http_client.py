"""Tests for the shared HTTP helpers."""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from common.http_client import download_file, get_json, safe_get
from common.logging_utils import extra_context, safe_url
from errors import DownloadError, TransportError


def _response(status_code=200, text="", chunks=None):
    res = MagicMock()
    res.status_code = status_code
    res.text = text
    res.headers = {"Content-Type": "application/json"}
    res.iter_content.return_value = iter(chunks or [])
    return res


class TestSafeGet:
    """safe_get() converts transport failures into TransportError."""

    @patch("common.http_client.requests.get")
    def test_returns_response(self, mock_get):
        mock_get.return_value = _response(404)
        assert safe_get("https://example.invalid/x", context="test").status_code == 404

    @patch("common.http_client.requests.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        with pytest.raises(TransportError):
            safe_get("https://example.invalid/x", context="test")

    @patch("common.http_client.requests.get")
    def test_connection_error_uses_error_cls(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(DownloadError):
            safe_get("https://example.invalid/x", context="test", error_cls=DownloadError)

    @patch("common.http_client.requests.get")
    def test_single_attempt(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TransportError):
            safe_get("https://example.invalid/x", context="test")
        assert mock_get.call_count == 1


class TestGetJson:
    """get_json() requires a 200 with a JSON body."""

    @patch("common.http_client.requests.get")
    def test_parses(self, mock_get):
        mock_get.return_value = _response(200, '{"1.20.1": ["47.1.0"]}')
        status, headers, data = get_json("https://example.invalid/meta.json")
        assert status == 200
        assert data == {"1.20.1": ["47.1.0"]}

    @patch("common.http_client.requests.get")
    def test_non_200(self, mock_get):
        mock_get.return_value = _response(503, "down")
        with pytest.raises(TransportError) as exc_info:
            get_json("https://example.invalid/meta.json")
        assert exc_info.value.status_code == 503

    @patch("common.http_client.requests.get")
    def test_bad_json(self, mock_get):
        mock_get.return_value = _response(200, "<html>")
        with pytest.raises(TransportError):
            get_json("https://example.invalid/meta.json")


class TestDownloadFile:
    """download_file() streams to disk."""

    @patch("common.http_client.requests.get")
    def test_writes_chunks(self, mock_get, tmp_path):
        mock_get.return_value = _response(200, chunks=[b"PK", b"", b"\x03\x04"])
        dest = str(tmp_path / "installer.jar")

        assert download_file("https://example.invalid/i.jar", dest) == dest
        with open(dest, "rb") as f:
            assert f.read() == b"PK\x03\x04"
        assert mock_get.call_args.kwargs["stream"] is True

    @patch("common.http_client.requests.get")
    def test_non_200_is_fatal(self, mock_get, tmp_path):
        mock_get.return_value = _response(404)
        dest = str(tmp_path / "installer.jar")
        with pytest.raises(DownloadError) as exc_info:
            download_file("https://example.invalid/i.jar", dest, error_cls=DownloadError)
        assert exc_info.value.status_code == 404
        assert not os.path.exists(dest)

    @patch("common.http_client.requests.get")
    def test_partial_file_removed(self, mock_get, tmp_path):
        res = _response(200)

        def _broken(chunk_size):
            yield b"PK"
            raise requests.ConnectionError("reset")

        res.iter_content.side_effect = _broken
        mock_get.return_value = res
        dest = str(tmp_path / "installer.jar")

        with pytest.raises(TransportError):
            download_file("https://example.invalid/i.jar", dest)
        assert not os.path.exists(dest)


class TestLoggingHelpers:
    """Small logging utilities used by the HTTP client."""

    def test_safe_url_strips_secrets(self):
        assert safe_url("https://user:pw@host.example:8443/p/meta.json?token=x#frag") == (
            "https://host.example:8443/p/meta.json"
        )

    def test_extra_context_drops_none(self):
        assert extra_context(event="x", target=None) == {"event": "x"}
