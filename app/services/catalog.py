import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from app.services.marketplace_client import MarketplaceClient

LISTING_PATH = "/api/marketplace/v1/listing"

logger = logging.getLogger(__name__)


@dataclass
class CatalogFetchResult:
    products: List[Dict[str, Any]] = field(default_factory=list)
    failed_offsets: List[int] = field(default_factory=list)


async def fetch_listing_page(client: MarketplaceClient, token: str, start: int, count: int) -> Any:
    logger.debug("Requesting start=%s", start)
    return await client.get_json(LISTING_PATH, token, params={"count": count, "start": start})


async def fetch_all_products(
    client: MarketplaceClient,
    token: str,
    batch_size: int | None = None,
    page_size: int | None = None,
) -> CatalogFetchResult:
    """Page through the listing endpoint in concurrent batches.

    Each batch requests `batch_size` consecutive pages and waits for all of
    them to settle. Pages that fail or come back empty contribute nothing;
    once a whole batch yields no data the catalog is considered exhausted.
    A failed page amid non-empty siblings is not retried, its offset is
    recorded on the result instead.
    """
    batch_size = batch_size or client.settings.CATALOG_BATCH_SIZE
    page_size = page_size or client.settings.CATALOG_PAGE_SIZE

    result = CatalogFetchResult()
    next_start = 0
    reached_end = False

    while not reached_end:
        logger.info("Fetching catalog batch at start=%s", next_start)
        offsets = [next_start + index * page_size for index in range(batch_size)]
        responses = await asyncio.gather(
            *(fetch_listing_page(client, token, offset, page_size) for offset in offsets),
            return_exceptions=True,
        )

        reached_end = True
        for offset, page in zip(offsets, responses):
            if isinstance(page, BaseException):
                logger.warning("Catalog page start=%s failed: %s", offset, page)
                result.failed_offsets.append(offset)
                continue
            if isinstance(page, list) and page:
                reached_end = False
                result.products.extend(page)

        next_start += batch_size * page_size

    if result.failed_offsets:
        logger.warning("Catalog fetched with %s failed pages: %s", len(result.failed_offsets), result.failed_offsets)
    logger.info("Total products retrieved: %s", len(result.products))
    return result
