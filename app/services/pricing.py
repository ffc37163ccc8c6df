import logging
from typing import Any, Dict, Iterable, List, Optional

from app.schemas.marketplace import NO_CONTRACT, ContractTerm, Frequency
from app.services.marketplace_client import MarketplaceClient

PRODUCT_PATH = "/api/marketplace/v1/products/{product_id}"
EDITION_PATH = "/api/marketplace/v1/products/{product_id}/editions/{edition_id}"

logger = logging.getLogger(__name__)

# (singular, plural) display forms for each billing frequency.
FREQUENCY_LABELS: Dict[Frequency, tuple[str, str]] = {
    Frequency.DAILY: ("Day", "Days"),
    Frequency.MONTHLY: ("Month", "Months"),
    Frequency.QUARTERLY: ("Quarter", "Quarters"),
    Frequency.SIX_MONTHS: ("Six Month", "Six Months"),
    Frequency.YEARLY: ("Year", "Years"),
    Frequency.TWO_YEARS: ("Two Year", "Two Years"),
    Frequency.THREE_YEARS: ("Three Year", "Three Years"),
}


def contract_term_label(frequency: str, minimum_service_length: Optional[int]) -> str:
    if minimum_service_length is None:
        return NO_CONTRACT
    try:
        singular, plural = FREQUENCY_LABELS[Frequency(frequency)]
    except ValueError:
        return str(minimum_service_length)
    form = singular if minimum_service_length == 1 else plural
    return f"{minimum_service_length} {form}"


def _minimum_service_length(plan: Dict[str, Any]) -> Any:
    contract = plan.get("contract")
    if not contract:
        return None
    return contract.get("minimumServiceLength")


def build_contract_terms(plans: Iterable[Dict[str, Any]]) -> List[ContractTerm]:
    """Turn raw plans into labelled terms, keeping the first plan seen per label."""
    terms: Dict[str, ContractTerm] = {}
    for plan in plans:
        term = ContractTerm(
            frequency=plan.get("frequency") or "",
            minimum_service_length=_minimum_service_length(plan),
        )
        term.label = contract_term_label(term.frequency, term.minimum_service_length)
        terms.setdefault(term.label, term)
    return list(terms.values())


def visible_editions(product: Dict[str, Any]) -> List[Dict[str, Any]]:
    editions = (product.get("pricing") or {}).get("editions") or []
    return [edition for edition in editions if not edition.get("invisible", False)]


async def fetch_editions(client: MarketplaceClient, token: str, product_id: str) -> List[Dict[str, Any]]:
    logger.info("Fetching editions for product_id=%s", product_id)
    product = await client.get_json(PRODUCT_PATH.format(product_id=product_id), token)
    return visible_editions(product or {})


async def fetch_plans(
    client: MarketplaceClient, token: str, product_id: str, edition_id: str
) -> List[ContractTerm]:
    logger.info("Fetching plans for product_id=%s edition_id=%s", product_id, edition_id)
    edition = await client.get_json(
        EDITION_PATH.format(product_id=product_id, edition_id=edition_id), token
    )
    return build_contract_terms((edition or {}).get("plans") or [])
