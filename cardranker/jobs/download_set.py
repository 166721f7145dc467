"""Download a set's card list from Scryfall.

Writes the catalog document the ranker loads at startup:
{sets_dir}/{set_code}/{set_code}.json

Usage:
    python -m cardranker.jobs.download_set --set tla
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from cardranker.config import SCRYFALL_REQUEST_DELAY_SECONDS, SCRYFALL_SEARCH_API, settings

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "CardRanker/1.0", "Accept": "application/json"}


class DownloadError(Exception):
    """Raised when a download fails."""

    pass


def catalog_path_for(set_code: str, sets_dir: Path) -> Path:
    """Catalog file location for a set."""
    set_code = set_code.lower()
    return sets_dir / set_code / f"{set_code}.json"


async def fetch_set_cards(
    set_code: str,
    client: httpx.AsyncClient,
    *,
    delay: float = SCRYFALL_REQUEST_DELAY_SECONDS,
) -> list[dict[str, Any]]:
    """Fetch every card of a set, following Scryfall's pagination.

    Args:
        set_code: Set code (e.g., "tla")
        client: HTTP client to use
        delay: Pause between page requests, in seconds

    Returns:
        Card objects in Scryfall's set order

    Raises:
        DownloadError: On HTTP errors or unexpected responses
    """
    cards: list[dict[str, Any]] = []
    url: str | None = SCRYFALL_SEARCH_API
    params: dict[str, str] | None = {
        "q": f"set:{set_code.lower()}",
        "unique": "prints",
        "order": "set",
    }

    while url:
        try:
            response = await client.get(url, params=params, headers=HEADERS)
            response.raise_for_status()
            page = response.json()
        except httpx.HTTPStatusError as e:
            raise DownloadError(
                f"Failed to download set {set_code}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise DownloadError(f"Failed to download set {set_code}: {e}") from e
        except ValueError as e:
            raise DownloadError(f"Scryfall returned invalid JSON for set {set_code}") from e

        if not isinstance(page, dict) or not isinstance(page.get("data"), list):
            raise DownloadError(f"Unexpected Scryfall response for set {set_code}")

        cards.extend(page["data"])

        # next_page already carries the query string
        url = page.get("next_page") if page.get("has_more") else None
        params = None
        if url and delay > 0:
            await asyncio.sleep(delay)

    return cards


async def download_set(
    set_code: str,
    sets_dir: Path,
    *,
    force: bool = False,
    client: httpx.AsyncClient | None = None,
) -> Path:
    """Download a set and write its catalog document.

    Args:
        set_code: Set code
        sets_dir: Root directory for per-set catalogs
        force: Re-download even if the catalog already exists
        client: HTTP client (a new one is created if omitted)

    Returns:
        Path to the catalog file
    """
    output_path = catalog_path_for(set_code, sets_dir)
    if output_path.exists() and not force:
        logger.info("Catalog for %s already exists at %s", set_code, output_path)
        return output_path

    if client is None:
        async with httpx.AsyncClient(timeout=30.0) as owned_client:
            cards = await fetch_set_cards(set_code, owned_client)
    else:
        cards = await fetch_set_cards(set_code, client)

    if not cards:
        raise DownloadError(f"Scryfall returned no cards for set {set_code}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(cards, f, ensure_ascii=False)

    logger.info("Downloaded %d cards for %s to %s", len(cards), set_code, output_path)
    return output_path


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Download a set's cards from Scryfall")
    parser.add_argument(
        "--set",
        dest="set_code",
        default=settings.set_code,
        help=f"Set code to download (default: {settings.set_code})",
    )
    parser.add_argument(
        "--sets-dir",
        type=Path,
        default=settings.sets_dir,
        help=f"Root directory for catalogs (default: {settings.sets_dir})",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-download even if the catalog exists",
    )
    args = parser.parse_args()

    try:
        asyncio.run(download_set(args.set_code, args.sets_dir, force=args.force))
    except DownloadError as e:
        logger.error("Failed to download set: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
