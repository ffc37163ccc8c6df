import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from app.schemas.marketplace import DiscountRequest
from app.services.expiration import compute_expiration
from app.services.marketplace_client import MarketplaceClient

DISCOUNTS_PATH = "/api/channel/v1/discounts"

logger = logging.getLogger(__name__)


def build_discount_payload(request: DiscountRequest, today: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "applicationId": request.product_id,
        "editionId": request.edition_id,
        "type": "PERCENTAGE",
        "code": request.discount_code_name,
        "percentage": request.discount_percentage,
        "description": f"{request.discount_percentage:g} % discount",
        "expirationDate": compute_expiration(request.contract_term, today),
        "autoApply": False,
    }


async def create_discount(client: MarketplaceClient, token: str, request: DiscountRequest) -> Any:
    payload = build_discount_payload(request)
    logger.info("Creating discount payload=%s", json.dumps(payload))
    response = await client.post_json(DISCOUNTS_PATH, token, payload)
    logger.info("Discount created code=%s", request.discount_code_name)
    return response
