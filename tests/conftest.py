from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from cardranker.api.state import AppPhase, AppState
from cardranker.main import app
from cardranker.models.card import Card
from cardranker.models.grade_store import GradeStore
from cardranker.services.blob_store import MemoryBlobStore
from cardranker.services.catalog import Catalog, parse_catalog
from cardranker.services.grade_store import GradeStoreRepository
from cardranker.services.ranking import RankingSession

STORAGE_KEY = "rankings-tst"


@pytest.fixture
def catalog_records() -> list[dict[str, Any]]:
    """Sample catalog document in Scryfall card shape, in set order."""
    return [
        {
            "id": "zeta",
            "name": "Zeta Golem",
            "type_line": "Artifact Creature — Golem",
            "cmc": 2.0,
            "rarity": "common",
            "color_identity": [],
            "colors": [],
            "image_uris": {"normal": "https://img.test/zeta.jpg"},
        },
        {
            "id": "alpha",
            "name": "Alpha Dragon",
            "type_line": "Creature — Dragon",
            "cmc": 5.0,
            "rarity": "mythic",
            "color_identity": ["R"],
            "colors": ["R"],
            "image_uris": {"normal": "https://img.test/alpha.jpg"},
        },
        {
            "id": "gamma",
            "name": "Gamma Strike",
            "type_line": "Instant",
            "cmc": 1.0,
            "rarity": "uncommon",
            "color_identity": ["R"],
            "colors": ["R"],
        },
        {
            "id": "delta",
            "name": "Delta Accord",
            "type_line": "Enchantment",
            "cmc": 3.0,
            "rarity": "rare",
            "color_identity": ["W", "U"],
            "colors": ["W", "U"],
        },
        {
            "id": "omega",
            "name": "Omega Turn // Omega Return",
            "type_line": "Sorcery // Sorcery",
            "cmc": 4.0,
            "rarity": "special",
            "card_faces": [
                {
                    "name": "Omega Turn",
                    "colors": ["G"],
                    "image_uris": {"normal": "https://img.test/omega-front.jpg"},
                },
                {
                    "name": "Omega Return",
                    "colors": ["B"],
                    "image_uris": {"normal": "https://img.test/omega-back.jpg"},
                },
            ],
        },
        {
            "id": "beta",
            "name": "beta Scout",
            "type_line": "Creature — Human Scout",
            "cmc": 1.0,
            "rarity": "common",
            "color_identity": ["U"],
            "colors": ["U"],
            "localImagePaths": ["images/beta.png"],
        },
    ]


@pytest.fixture
def catalog(catalog_records: list[dict[str, Any]]) -> Catalog:
    return parse_catalog(catalog_records, "test", set_code="tst")


@pytest.fixture
def cards(catalog: Catalog) -> list[Card]:
    return list(catalog.cards)


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def repository(blob_store: MemoryBlobStore) -> GradeStoreRepository:
    return GradeStoreRepository(blob_store, STORAGE_KEY)


@pytest.fixture
def session(catalog: Catalog, repository: GradeStoreRepository) -> RankingSession:
    return RankingSession(catalog, GradeStore(), repository)


@pytest.fixture
async def client(session: RankingSession) -> AsyncIterator[AsyncClient]:
    """API client against an app whose catalog finished loading."""
    app.state.ranker = AppState(phase=AppPhase.READY, session=session)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.state.ranker = AppState()
