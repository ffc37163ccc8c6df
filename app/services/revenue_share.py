import logging
from typing import Any, Dict

from app.exceptions import RevenueShareError
from app.services.marketplace_client import MarketplaceClient

REVENUE_SHARES_PATH = "/api/v1/revenueShares"
RESELLER_SHARE_CAP = 0.65
VENDOR_RECIPIENT = "VENDOR"

logger = logging.getLogger(__name__)


def vendor_amount_from_shares(payload: Dict[str, Any]) -> float:
    records = (payload or {}).get("content") or []
    if not records:
        raise RevenueShareError("No revenue share record found")
    recipients = records[0].get("shareRecipients") or []
    for recipient in recipients:
        if recipient.get("type") == VENDOR_RECIPIENT:
            return float(recipient["amount"])
    raise RevenueShareError("Revenue share has no VENDOR recipient")


def max_discount_percentage(vendor_amount: float) -> float:
    return (1 - vendor_amount / 100) * RESELLER_SHARE_CAP * 100


def gross_commission_percentage(vendor_amount: float, discount_percentage: float) -> float:
    """Reseller commission left over once `discount_percentage` is given away."""
    return ((1 - vendor_amount / 100) * RESELLER_SHARE_CAP - discount_percentage / 100) * 100


async def fetch_vendor_share(client: MarketplaceClient, token: str, product_uuid: str) -> float:
    params = {
        "partners": client.settings.PARTNER,
        "showHistory": "FALSE",
        "entityType": "PRODUCT",
        "entityId": product_uuid,
    }
    payload = await client.get_json(REVENUE_SHARES_PATH, token, params=params)
    vendor_amount = vendor_amount_from_shares(payload)
    logger.info("vendorAmount=%s for product_uuid=%s", vendor_amount, product_uuid)
    return vendor_amount
