"""Tests for catalog loading."""

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from cardranker.config import Settings
from cardranker.models.failure import CatalogLoadError, FailureKind
from cardranker.services.catalog import (
    fetch_catalog,
    load_catalog,
    load_catalog_file,
    parse_catalog,
)

CATALOG_URL = "https://cards.test/sets/tst/tst.json"


def _write_catalog(sets_dir: Path, set_code: str, records: Any) -> Path:
    path = sets_dir / set_code / f"{set_code}.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


class TestParseCatalog:
    def test_keeps_document_order(self, catalog_records: list[dict[str, Any]]) -> None:
        catalog = parse_catalog(catalog_records, "test")

        assert [card.id for card in catalog] == [record["id"] for record in catalog_records]

    def test_lookup_by_id(self, catalog_records: list[dict[str, Any]]) -> None:
        catalog = parse_catalog(catalog_records, "test", set_code="tst")

        assert catalog.get("delta").name == "Delta Accord"
        assert catalog.get("missing") is None
        assert "alpha" in catalog
        assert len(catalog) == 6
        assert catalog.set_code == "tst"

    def test_empty_list_is_valid(self) -> None:
        assert len(parse_catalog([], "test")) == 0

    def test_not_a_list(self) -> None:
        with pytest.raises(CatalogLoadError, match="Failed to load card data from test"):
            parse_catalog({"data": []}, "test")

    def test_record_not_an_object(self) -> None:
        with pytest.raises(CatalogLoadError) as exc_info:
            parse_catalog([{"id": "a", "name": "A"}, "b"], "test")

        assert exc_info.value.detail == "Record 1 is not an object"

    def test_record_without_name(self) -> None:
        with pytest.raises(CatalogLoadError):
            parse_catalog([{"id": "a"}], "test")

    def test_face_not_an_object(self) -> None:
        records = [{"id": "a", "name": "A", "card_faces": ["oops"]}]

        with pytest.raises(CatalogLoadError) as exc_info:
            parse_catalog(records, "test")

        assert "card_faces[0] is not an object" in exc_info.value.detail

    def test_image_uris_not_an_object(self) -> None:
        records = [{"id": "a", "name": "A", "image_uris": "https://img.test/a.jpg"}]

        with pytest.raises(CatalogLoadError) as exc_info:
            parse_catalog(records, "test")

        assert "image_uris is a str" in exc_info.value.detail

    def test_face_image_uris_not_an_object(self) -> None:
        records = [{"id": "a", "name": "A", "card_faces": [{"name": "A", "image_uris": ["x"]}]}]

        with pytest.raises(CatalogLoadError):
            parse_catalog(records, "test")

    def test_duplicate_ids(self) -> None:
        records = [{"id": "a", "name": "A"}, {"id": "a", "name": "Also A"}]

        with pytest.raises(CatalogLoadError, match="Failed to load") as exc_info:
            parse_catalog(records, "test")

        assert "Duplicate card id a" in exc_info.value.detail

    def test_error_is_fatal_kind(self) -> None:
        with pytest.raises(CatalogLoadError) as exc_info:
            parse_catalog("nope", "test")

        assert exc_info.value.kind == FailureKind.CATALOG_UNAVAILABLE
        assert exc_info.value.status_code == 503


class TestLoadCatalogFile:
    def test_loads_file(self, tmp_path: Path, catalog_records: list[dict[str, Any]]) -> None:
        path = _write_catalog(tmp_path, "tst", catalog_records)

        catalog = load_catalog_file(path, "tst")

        assert len(catalog) == len(catalog_records)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogLoadError) as exc_info:
            load_catalog_file(tmp_path / "tst" / "tst.json")

        assert "Could not find tst.json" in exc_info.value.detail

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            load_catalog_file(path)


class TestFetchCatalog:
    @respx.mock
    async def test_fetches_catalog(self, catalog_records: list[dict[str, Any]]) -> None:
        """Catalog can be served over HTTP."""
        respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, json=catalog_records))

        catalog = await fetch_catalog(CATALOG_URL, "tst")

        assert len(catalog) == 6

    @respx.mock
    async def test_http_error(self) -> None:
        respx.get(CATALOG_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(CatalogLoadError) as exc_info:
            await fetch_catalog(CATALOG_URL)

        assert exc_info.value.source == CATALOG_URL

    @respx.mock
    async def test_not_json(self) -> None:
        respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(CatalogLoadError, match="Failed to load"):
            await fetch_catalog(CATALOG_URL)

    @respx.mock
    async def test_connection_error(self) -> None:
        respx.get(CATALOG_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(CatalogLoadError):
            await fetch_catalog(CATALOG_URL)


class TestLoadCatalog:
    async def test_uses_sets_dir(
        self, tmp_path: Path, catalog_records: list[dict[str, Any]]
    ) -> None:
        _write_catalog(tmp_path, "tst", catalog_records)
        app_settings = Settings(set_code="tst", sets_dir=tmp_path, catalog_url="")

        catalog = await load_catalog(app_settings)

        assert catalog.set_code == "tst"
        assert len(catalog) == 6

    @respx.mock
    async def test_prefers_catalog_url(
        self, tmp_path: Path, catalog_records: list[dict[str, Any]]
    ) -> None:
        respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, json=catalog_records[:2]))
        app_settings = Settings(set_code="tst", sets_dir=tmp_path, catalog_url=CATALOG_URL)

        catalog = await load_catalog(app_settings)

        assert [card.id for card in catalog] == ["zeta", "alpha"]
