# ============================================================================
# CATALOG SOURCE TESTS
# ============================================================================
# STATUS: Tests - HTTP and file catalog sources
# PURPOSE: Verify fetch results and error mapping
# ============================================================================
"""
Catalog Source Tests

Uses unittest.mock to patch httpx.AsyncClient (no real HTTP traffic)
and pytest's tmp_path for file sources.

Run with:
    pytest tests/test_catalog_source.py -v
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from core.errors import FormatError, LoadError
from infrastructure.catalog_source import (
    FileCatalogSource,
    HttpCatalogSource,
    create_catalog_source,
)

URL = "https://example.org/data/catalog.json"


# ============================================================================
# HTTP SOURCE
# ============================================================================

class TestHttpCatalogSource:
    """Tests for HttpCatalogSource.fetch with a mocked client."""

    def _mock_response(self, status_code=200, json_data=None, bad_json=False):
        """Create a mock httpx.Response."""
        resp = MagicMock()
        resp.status_code = status_code
        resp.is_success = 200 <= status_code < 300
        if bad_json:
            resp.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        else:
            resp.json.return_value = json_data
        return resp

    def _mock_client(self, mock_client_cls, response=None, error=None):
        mock_client = MagicMock()
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        mock_client.get = AsyncMock(return_value=response, side_effect=error)
        mock_client_cls.return_value = mock_client
        return mock_client

    @patch("infrastructure.catalog_source.httpx.AsyncClient")
    def test_fetch_happy_path(self, mock_client_cls):
        doc = {"datasets": [], "attributes": []}
        client = self._mock_client(mock_client_cls, self._mock_response(200, doc))

        result = asyncio.run(HttpCatalogSource(URL).fetch())

        assert result == doc
        client.get.assert_awaited_once_with(URL)

    @patch("infrastructure.catalog_source.httpx.AsyncClient")
    def test_non_success_status(self, mock_client_cls):
        self._mock_client(mock_client_cls, self._mock_response(404))

        with pytest.raises(LoadError) as exc_info:
            asyncio.run(HttpCatalogSource(URL).fetch())

        assert exc_info.value.status == 404
        assert exc_info.value.location == URL

    @patch("infrastructure.catalog_source.httpx.AsyncClient")
    def test_connection_error(self, mock_client_cls):
        self._mock_client(mock_client_cls, error=httpx.ConnectError("Connection refused"))

        with pytest.raises(LoadError) as exc_info:
            asyncio.run(HttpCatalogSource(URL).fetch())

        assert exc_info.value.status is None

    @patch("infrastructure.catalog_source.httpx.AsyncClient")
    def test_timeout(self, mock_client_cls):
        self._mock_client(mock_client_cls, error=httpx.ReadTimeout("timed out"))

        with pytest.raises(LoadError) as exc_info:
            asyncio.run(HttpCatalogSource(URL, timeout=1.0).fetch())

        assert exc_info.value.detail == "timeout"

    @patch("infrastructure.catalog_source.httpx.AsyncClient")
    def test_invalid_json(self, mock_client_cls):
        self._mock_client(mock_client_cls, self._mock_response(200, bad_json=True))

        with pytest.raises(FormatError):
            asyncio.run(HttpCatalogSource(URL).fetch())


# ============================================================================
# FILE SOURCE
# ============================================================================

class TestFileCatalogSource:

    def test_reads_document(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"id": "a"}]), encoding="utf-8")

        assert asyncio.run(FileCatalogSource(str(path)).fetch()) == [{"id": "a"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            asyncio.run(FileCatalogSource(str(tmp_path / "nope.json")).fetch())
        assert exc_info.value.status == 404

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(FormatError):
            asyncio.run(FileCatalogSource(str(path)).fetch())


class TestCreateCatalogSource:

    def test_url_gives_http_source(self):
        assert isinstance(create_catalog_source(URL), HttpCatalogSource)

    def test_path_gives_file_source(self):
        source = create_catalog_source("data/catalog.json")
        assert isinstance(source, FileCatalogSource)
        assert source.location == "data/catalog.json"
