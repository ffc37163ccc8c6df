import httpx
import pytest

from app.exceptions import RevenueShareError
from app.services.revenue_share import (
    fetch_vendor_share,
    gross_commission_percentage,
    max_discount_percentage,
    vendor_amount_from_shares,
)


def _shares(*recipients):
    return {"content": [{"shareRecipients": list(recipients)}]}


def test_max_discount_formula():
    assert max_discount_percentage(35) == pytest.approx(42.25)
    assert max_discount_percentage(0) == pytest.approx(65.0)
    assert max_discount_percentage(100) == pytest.approx(0.0)


def test_gross_commission_formula():
    assert gross_commission_percentage(35, 10) == pytest.approx(32.25)
    assert gross_commission_percentage(35, 42.25) == pytest.approx(0.0)


def test_vendor_amount_picks_vendor_recipient():
    payload = _shares({"type": "MARKETPLACE", "amount": 20}, {"type": "VENDOR", "amount": 70})

    assert vendor_amount_from_shares(payload) == 70.0


def test_missing_vendor_recipient_raises():
    with pytest.raises(RevenueShareError):
        vendor_amount_from_shares(_shares({"type": "MARKETPLACE", "amount": 20}))


def test_missing_revenue_share_record_raises():
    with pytest.raises(RevenueShareError):
        vendor_amount_from_shares({"content": []})


def test_fetch_vendor_share_query(call_service):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_shares({"type": "VENDOR", "amount": 35}))

    amount = call_service(handler, fetch_vendor_share, "uuid-1")

    assert amount == 35.0
    params = seen[0].url.params
    assert seen[0].url.path == "/api/v1/revenueShares"
    assert params["partners"] == "TESTPARTNER"
    assert params["showHistory"] == "FALSE"
    assert params["entityType"] == "PRODUCT"
    assert params["entityId"] == "uuid-1"


def test_max_discount_endpoint(client, marketplace):
    marketplace(lambda request: httpx.Response(200, json=_shares({"type": "VENDOR", "amount": 35})))

    response = client.get("/max-discount/uuid-1")

    assert response.status_code == 200
    assert response.json() == pytest.approx(42.25)


def test_max_discount_endpoint_without_vendor_returns_500(client, marketplace):
    marketplace(lambda request: httpx.Response(200, json=_shares({"type": "RESELLER", "amount": 10})))

    response = client.get("/max-discount/uuid-1")

    assert response.status_code == 500
    assert response.json()["message"] == "Error fetching max discount"


def test_gross_commission_endpoint(client, marketplace):
    marketplace(lambda request: httpx.Response(200, json=_shares({"type": "VENDOR", "amount": 35})))

    response = client.get("/gross-commission/uuid-1/10")

    assert response.status_code == 200
    assert response.json() == pytest.approx(32.25)
