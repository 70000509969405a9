"""Paginated asset listing and fallback lookup of the portfolio folder."""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from cloudfolio.client import CloudinaryClient
from cloudfolio.errors import TransportError
from cloudfolio.models import AssetRecord, ListingPage

logger = logging.getLogger(__name__)

SAMPLES_PREFIX = "samples/"


def iter_pages(fetch_page: Callable[[str | None], ListingPage]) -> Iterator[ListingPage]:
    """Follow next_cursor from a fresh start until a page comes back without one."""
    cursor = None
    while True:
        page = fetch_page(cursor)
        yield page
        cursor = page.next_cursor
        if not cursor:
            return


def _iter_records(fetch_page: Callable[[str | None], ListingPage], label: str) -> Iterator[AssetRecord]:
    total = 0
    for page in iter_pages(fetch_page):
        total += len(page.resources)
        logger.info(f"Fetched {len(page.resources)} images from {label} (total: {total})")
        yield from page.resources


def iter_assets(client: CloudinaryClient, prefix: str | None = None) -> Iterator[AssetRecord]:
    """Lazily yield every uploaded image, optionally under a public_id prefix."""
    return _iter_records(
        lambda cursor: client.resources_page(prefix=prefix, next_cursor=cursor),
        prefix or "all uploads",
    )


def iter_asset_folder(client: CloudinaryClient, asset_folder: str) -> Iterator[AssetRecord]:
    return _iter_records(
        lambda cursor: client.asset_folder_page(asset_folder, next_cursor=cursor),
        f"asset folder {asset_folder}",
    )


def iter_search(client: CloudinaryClient, expression: str) -> Iterator[AssetRecord]:
    return _iter_records(
        lambda cursor: client.search_page(expression, next_cursor=cursor),
        f"search {expression!r}",
    )


def list_assets(client: CloudinaryClient, prefix: str | None = None) -> list[AssetRecord]:
    return list(iter_assets(client, prefix))


def drop_samples(records: Iterable[AssetRecord]) -> list[AssetRecord]:
    """Remove Cloudinary's bundled demo images."""
    return [r for r in records if not r.public_id.startswith(SAMPLES_PREFIX)]


# ---------------------------------------------------------------------------
# Fallback strategies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Strategy:
    description: str
    fetch: Callable[[], list[AssetRecord]]
    folder: str | None = None


def first_non_empty(strategies: Iterable[Strategy]) -> tuple[Strategy, list[AssetRecord]] | None:
    """Try each strategy in order; return the first that yields any records.

    A strategy failing with TransportError counts as empty and the next one
    is tried.
    """
    for strategy in strategies:
        logger.info(f"Trying {strategy.description}")
        try:
            records = strategy.fetch()
        except TransportError as e:
            logger.warning(f"{strategy.description} failed: {e}")
            continue
        if records:
            return strategy, records
        logger.info(f"{strategy.description}: no images")
    return None


def folder_variants(name: str) -> list[str]:
    """Spellings of a folder name to try, most likely first.

    "Praveen-PortfolioPics" gives the name itself, all lower-case,
    "Praveen-Portfoliopics" and "praveen-PortfolioPics".
    """
    segments = name.split("-")
    candidates = [
        name,
        name.lower(),
        "-".join(s.capitalize() for s in segments),
        "-".join([segments[0].lower()] + segments[1:]),
    ]
    return list(dict.fromkeys(candidates))


def in_folder(asset_folder: str | None, folder: str) -> bool:
    """True for ``folder`` itself and anything nested under it, not for siblings sharing its prefix."""
    return bool(asset_folder) and (asset_folder == folder or asset_folder.startswith(f"{folder}/"))


def portfolio_strategies(client: CloudinaryClient, folder: str) -> list[Strategy]:
    """Ways of finding the images stored under ``folder``, in the order to try them."""
    strategies = [
        Strategy(
            f'prefix listing of "{variant}"',
            lambda variant=variant: list_assets(client, prefix=f"{variant}/"),
            folder=variant,
        )
        for variant in folder_variants(folder)
    ]
    strategies.append(Strategy(
        f'asset folder "{folder}"',
        lambda: list(iter_asset_folder(client, folder)),
        folder=folder,
    ))
    strategies.append(Strategy(
        f"search folder:{folder}/*",
        lambda: list(iter_search(client, f"folder:{folder}/*")),
        folder=folder,
    ))
    strategies.append(Strategy(
        f'full listing filtered on asset_folder "{folder}"',
        lambda: [r for r in iter_assets(client) if in_folder(r.asset_folder, folder)],
        folder=folder,
    ))
    return strategies


def collect_portfolio(client: CloudinaryClient, folder: str) -> tuple[str | None, list[AssetRecord]] | None:
    """Find the portfolio images.

    With an empty ``folder`` the whole account is listed (minus the demo
    samples). Otherwise the folder strategies are tried in turn and None
    means none of them found anything.
    """
    if not folder:
        return None, drop_samples(iter_assets(client))
    found = first_non_empty(portfolio_strategies(client, folder))
    if found is None:
        return None
    strategy, records = found
    return strategy.folder, records
