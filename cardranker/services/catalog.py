"""
Card catalog service.

Loads a set's card list once at startup, from a local JSON document or
over HTTP. A catalog that is missing or malformed is fatal: nothing can
be browsed or graded without it, so every failure surfaces as
CatalogLoadError and is never retried.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx

from cardranker.config import Settings
from cardranker.models.card import Card
from cardranker.models.failure import CatalogLoadError

logger = logging.getLogger(__name__)


class Catalog:
    """
    Immutable, ordered list of the cards in a set.

    Catalog order is the document order and is the tie-breaker for
    every sort.
    """

    __slots__ = ("_by_id", "cards", "set_code")

    def __init__(self, cards: tuple[Card, ...], set_code: str = "") -> None:
        self.cards = cards
        self.set_code = set_code
        self._by_id = {card.id: card for card in cards}

    def get(self, card_id: str) -> Card | None:
        """Get a card by id, or None if the set has no such card."""
        return self._by_id.get(card_id)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._by_id

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)


def parse_catalog(data: Any, source: str, set_code: str = "") -> Catalog:
    """
    Build a Catalog from a decoded catalog document.

    Args:
        data: Decoded JSON; must be a list of card objects
        source: Where the document came from (for error messages)
        set_code: Set the catalog belongs to

    Raises:
        CatalogLoadError: If the document is not a list, a record is
            unusable, or two records share an id
    """
    if not isinstance(data, list):
        raise CatalogLoadError(source, f"Expected a list of cards, got {type(data).__name__}")

    cards: list[Card] = []
    seen: set[str] = set()
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise CatalogLoadError(source, f"Record {index} is not an object")
        try:
            card = Card.from_scryfall(record)
        except (TypeError, ValueError) as e:
            raise CatalogLoadError(source, f"Record {index}: {e}") from e
        if card.id in seen:
            raise CatalogLoadError(source, f"Duplicate card id {card.id}")
        seen.add(card.id)
        cards.append(card)

    return Catalog(tuple(cards), set_code=set_code)


def load_catalog_file(path: Path, set_code: str = "") -> Catalog:
    """
    Load a catalog from a local JSON file.

    Raises:
        CatalogLoadError: If the file is missing, unreadable or malformed
    """
    if not path.exists():
        raise CatalogLoadError(
            str(path),
            f"Could not find {path.name}. "
            "Run `python -m cardranker.jobs.download_set` first.",
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogLoadError(str(path), str(e)) from e

    return parse_catalog(data, str(path), set_code)


async def fetch_catalog(
    url: str,
    set_code: str = "",
    client: httpx.AsyncClient | None = None,
) -> Catalog:
    """
    Fetch a catalog document over HTTP.

    Raises:
        CatalogLoadError: On any HTTP error or malformed content
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=30.0) as owned_client:
                response = await owned_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise CatalogLoadError(url, str(e)) from e
    except ValueError as e:
        raise CatalogLoadError(url, f"Response is not JSON: {e}") from e

    return parse_catalog(data, url, set_code)


async def load_catalog(app_settings: Settings) -> Catalog:
    """
    Load the configured set's catalog.

    Uses `catalog_url` when set, otherwise the per-set file under
    `sets_dir`.
    """
    if app_settings.catalog_url:
        catalog = await fetch_catalog(app_settings.catalog_url, app_settings.set_code)
        source = app_settings.catalog_url
    else:
        catalog = load_catalog_file(app_settings.catalog_path, app_settings.set_code)
        source = str(app_settings.catalog_path)

    logger.info(
        "catalog_loaded",
        extra={"set_code": app_settings.set_code, "source": source, "cards": len(catalog)},
    )
    return catalog
