import logging

from fastapi import APIRouter, Depends, Response

from app.schemas.marketplace import DiscountRequest
from app.services.auth_middleware import require_authenticated
from app.services.catalog import fetch_all_products
from app.services.discounts import create_discount
from app.services.marketplace_client import MarketplaceClient, get_marketplace_client
from app.services.pricing import fetch_editions, fetch_plans
from app.services.revenue_share import (
    fetch_vendor_share,
    gross_commission_percentage,
    max_discount_percentage,
)
from app.utils.response import handle_exception

router = APIRouter(tags=["Marketplace"], dependencies=[Depends(require_authenticated)])
logger = logging.getLogger(__name__)

FAILED_OFFSETS_HEADER = "X-Catalog-Failed-Offsets"


@router.get("/products")
async def list_products(
    response: Response,
    client: MarketplaceClient = Depends(get_marketplace_client),
):
    try:
        token = await client.get_access_token()
        result = await fetch_all_products(client, token)
        if result.failed_offsets:
            response.headers[FAILED_OFFSETS_HEADER] = ",".join(str(offset) for offset in result.failed_offsets)
        return result.products
    except Exception as exc:
        logger.exception("Error fetching paginated products")
        return handle_exception(exc, "Error fetching products")


@router.get("/editions/{product_id}")
async def list_editions(
    product_id: str,
    client: MarketplaceClient = Depends(get_marketplace_client),
):
    try:
        token = await client.get_access_token()
        return await fetch_editions(client, token, product_id)
    except Exception as exc:
        logger.exception("Error fetching editions for product_id=%s", product_id)
        return handle_exception(exc, "Error fetching editions")


@router.get("/plans/{product_id}/{edition_id}")
async def list_contract_terms(
    product_id: str,
    edition_id: str,
    client: MarketplaceClient = Depends(get_marketplace_client),
):
    try:
        token = await client.get_access_token()
        terms = await fetch_plans(client, token, product_id, edition_id)
        return [term.to_wire() for term in terms]
    except Exception as exc:
        logger.exception("Error fetching plans for product_id=%s edition_id=%s", product_id, edition_id)
        return handle_exception(exc, "Error fetching contract terms")


@router.get("/max-discount/{product_uuid}")
async def max_discount(
    product_uuid: str,
    client: MarketplaceClient = Depends(get_marketplace_client),
):
    try:
        token = await client.get_access_token()
        vendor_amount = await fetch_vendor_share(client, token, product_uuid)
        percentage = max_discount_percentage(vendor_amount)
        logger.info("maxDiscountPercentage=%s for product_uuid=%s", percentage, product_uuid)
        return percentage
    except Exception as exc:
        logger.exception("Error fetching max discount for product_uuid=%s", product_uuid)
        return handle_exception(exc, "Error fetching max discount")


@router.get("/gross-commission/{product_uuid}/{discount_percentage}")
async def gross_commission(
    product_uuid: str,
    discount_percentage: float,
    client: MarketplaceClient = Depends(get_marketplace_client),
):
    try:
        token = await client.get_access_token()
        vendor_amount = await fetch_vendor_share(client, token, product_uuid)
        return gross_commission_percentage(vendor_amount, discount_percentage)
    except Exception as exc:
        logger.exception("Error fetching gross commission for product_uuid=%s", product_uuid)
        return handle_exception(exc, "Error fetching gross commission")


@router.post("/createDiscount")
async def create_discount_code(
    body: DiscountRequest,
    client: MarketplaceClient = Depends(get_marketplace_client),
):
    try:
        token = await client.get_access_token()
        return await create_discount(client, token, body)
    except Exception as exc:
        logger.exception("Error creating discount code=%s", body.discount_code_name)
        return handle_exception(exc, "Error creating discount")
