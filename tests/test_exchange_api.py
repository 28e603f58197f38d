"""
HTTP tests for the exchange endpoints.
"""

import uuid

import pytest
from pydantic import ValidationError

from backoffice.core.exceptions import StorageUnavailableError
from backoffice.db.repositories.currency_repository import CurrencyRepository
from backoffice.schemas.exchange import MAX_AMOUNT, ExchangeCalculationRequest

API = "/api/v1"

EXCHANGE = f"{API}/exchange"


async def post_currency(client, headers, code, name=None, symbol=None, is_active=True):
    response = await client.post(
        f"{EXCHANGE}/currencies",
        json={
            "code": code,
            "name": name or f"{code} currency",
            "symbol": symbol or code,
            "is_active": is_active,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def post_rate(client, headers, currency_id, rate_to_usd, is_active=True):
    response = await client.post(
        f"{EXCHANGE}/rates",
        json={"currency_id": currency_id, "rate_to_usd": rate_to_usd, "is_active": is_active},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_public_currency_listing(test_client, admin_headers):
    await post_currency(test_client, admin_headers, "usd", "US Dollar", "$")
    await post_currency(test_client, admin_headers, "EUR", "Euro", "€")
    await post_currency(test_client, admin_headers, "SEK", is_active=False)

    response = await test_client.get(f"{EXCHANGE}/currencies")

    assert response.status_code == 200
    assert [c["code"] for c in response.json()] == ["EUR", "USD"]


@pytest.mark.asyncio
async def test_admin_currency_listing_includes_inactive(test_client, admin_headers):
    await post_currency(test_client, admin_headers, "SEK", is_active=False)
    await post_currency(test_client, admin_headers, "EUR")

    response = await test_client.get(f"{EXCHANGE}/admin/currencies", headers=admin_headers)

    assert response.status_code == 200
    assert [c["code"] for c in response.json()] == ["EUR", "SEK"]


@pytest.mark.asyncio
async def test_get_currency(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR", "Euro", "€")

    response = await test_client.get(f"{EXCHANGE}/currencies/{eur['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "EUR"
    assert body["name"] == "Euro"
    assert body["symbol"] == "€"
    assert body["is_active"] is True
    assert "created_at" in body and "updated_at" in body

    response = await test_client.get(f"{EXCHANGE}/currencies/{uuid.uuid4()}")
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_malformed_currency_id(test_client):
    response = await test_client.get(f"{EXCHANGE}/currencies/not-a-uuid")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_duplicate_currency(test_client, admin_headers):
    await post_currency(test_client, admin_headers, "EUR")

    response = await test_client.post(
        f"{EXCHANGE}/currencies",
        json={"code": "eur", "name": "Euro", "symbol": "€"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_currency_management_requires_admin(test_client, user_headers):
    payload = {"code": "EUR", "name": "Euro", "symbol": "€"}

    response = await test_client.post(f"{EXCHANGE}/currencies", json=payload)
    assert response.status_code == 401
    assert response.headers.get("www-authenticate") == "Bearer"

    response = await test_client.post(f"{EXCHANGE}/currencies", json=payload, headers=user_headers)
    assert response.status_code == 403

    response = await test_client.get(f"{EXCHANGE}/admin/currencies", headers=user_headers)
    assert response.status_code == 403

    response = await test_client.get(
        f"{EXCHANGE}/admin/currencies",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_currency(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR", "Euro", "€")

    response = await test_client.patch(
        f"{EXCHANGE}/currencies/{eur['id']}",
        json={"name": "Euro (EU)", "is_active": False},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Euro (EU)"
    assert body["symbol"] == "€"
    assert body["is_active"] is False

    response = await test_client.patch(
        f"{EXCHANGE}/currencies/{uuid.uuid4()}",
        json={"name": "Ghost"},
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_currency_removes_rate(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR")
    rate = await post_rate(test_client, admin_headers, eur["id"], 0.92)

    response = await test_client.delete(f"{EXCHANGE}/currencies/{eur['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert response.content == b""

    response = await test_client.get(f"{EXCHANGE}/currencies/{eur['id']}")
    assert response.status_code == 404
    response = await test_client.get(f"{EXCHANGE}/rates/{rate['id']}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_rate_records_creator(test_client, admin_headers, admin_user):
    eur = await post_currency(test_client, admin_headers, "EUR")

    rate = await post_rate(test_client, admin_headers, eur["id"], 0.92)

    assert rate["currency_id"] == eur["id"]
    assert rate["rate_to_usd"] == 0.92
    assert rate["is_active"] is True
    assert rate["created_by"] == str(admin_user.id)


@pytest.mark.asyncio
async def test_create_rate_validation(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR")
    await post_rate(test_client, admin_headers, eur["id"], 0.92)

    response = await test_client.post(
        f"{EXCHANGE}/rates",
        json={"currency_id": eur["id"], "rate_to_usd": 0.95},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = await test_client.post(
        f"{EXCHANGE}/rates",
        json={"currency_id": str(uuid.uuid4()), "rate_to_usd": 0.95},
        headers=admin_headers,
    )
    assert response.status_code == 404

    response = await test_client.post(
        f"{EXCHANGE}/rates",
        json={"currency_id": eur["id"], "rate_to_usd": -1},
        headers=admin_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reference_currency_rate_is_pinned(test_client, admin_headers):
    usd = await post_currency(test_client, admin_headers, "USD", "US Dollar", "$")

    response = await test_client.get(f"{EXCHANGE}/admin/rates", headers=admin_headers)
    assert response.status_code == 200
    rates = response.json()
    assert len(rates) == 1
    assert rates[0]["currency_id"] == usd["id"]
    assert rates[0]["rate_to_usd"] == 1.0

    response = await test_client.patch(
        f"{EXCHANGE}/rates/currency/{usd['id']}",
        json={"rate_to_usd": 1.5},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = await test_client.patch(
        f"{EXCHANGE}/rates/{rates[0]['id']}",
        json={"rate_to_usd": 0.5},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rate_listing(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR")
    gbp = await post_currency(test_client, admin_headers, "GBP")
    await post_rate(test_client, admin_headers, eur["id"], 0.92)
    await post_rate(test_client, admin_headers, gbp["id"], 1.25, is_active=False)

    all_rates = (await test_client.get(f"{EXCHANGE}/admin/rates", headers=admin_headers)).json()
    active_rates = (await test_client.get(f"{EXCHANGE}/rates", headers=admin_headers)).json()

    assert len(all_rates) == 2
    assert [r["currency_id"] for r in all_rates] == sorted([eur["id"], gbp["id"]])
    assert [r["currency_id"] for r in active_rates] == [eur["id"]]


@pytest.mark.asyncio
async def test_rate_endpoints_require_admin(test_client, user_headers):
    response = await test_client.get(f"{EXCHANGE}/rates")
    assert response.status_code == 401

    response = await test_client.get(f"{EXCHANGE}/rates", headers=user_headers)
    assert response.status_code == 403

    response = await test_client.delete(f"{EXCHANGE}/rates/{uuid.uuid4()}", headers=user_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_rate_paths(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR")
    rate = await post_rate(test_client, admin_headers, eur["id"], 0.92)

    response = await test_client.patch(
        f"{EXCHANGE}/rates/{rate['id']}",
        json={"rate_to_usd": 0.93},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["rate_to_usd"] == 0.93

    response = await test_client.patch(
        f"{EXCHANGE}/rates/currency/{eur['id']}",
        json={"is_active": False},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == rate["id"]
    assert body["rate_to_usd"] == 0.93
    assert body["is_active"] is False

    response = await test_client.get(f"{EXCHANGE}/rates/{rate['id']}", headers=admin_headers)
    assert response.json()["is_active"] is False


@pytest.mark.asyncio
async def test_delete_rate(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR")
    rate = await post_rate(test_client, admin_headers, eur["id"], 0.92)

    response = await test_client.delete(f"{EXCHANGE}/rates/{rate['id']}", headers=admin_headers)
    assert response.status_code == 204

    response = await test_client.delete(f"{EXCHANGE}/rates/{rate['id']}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_calculate_is_public(test_client, admin_headers):
    usd = await post_currency(test_client, admin_headers, "USD", "US Dollar", "$")
    eur = await post_currency(test_client, admin_headers, "EUR", "Euro", "€")
    await post_rate(test_client, admin_headers, eur["id"], 0.92)

    response = await test_client.post(
        f"{EXCHANGE}/calculate",
        json={"from_currency_id": eur["id"], "to_currency_id": usd["id"], "amount": 100},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["from_currency_code"] == "EUR"
    assert body["to_currency_code"] == "USD"
    assert body["from_amount"] == 100
    assert body["exchange_rate"] == 0.92
    assert body["to_amount"] == 92.0
    assert "calculated_at" in body


@pytest.mark.asyncio
async def test_calculate_errors(test_client, admin_headers):
    usd = await post_currency(test_client, admin_headers, "USD")
    chf = await post_currency(test_client, admin_headers, "CHF")
    sek = await post_currency(test_client, admin_headers, "SEK", is_active=False)

    async def calculate(from_id, to_id, amount=10):
        return await test_client.post(
            f"{EXCHANGE}/calculate",
            json={"from_currency_id": from_id, "to_currency_id": to_id, "amount": amount},
        )

    assert (await calculate(usd["id"], usd["id"])).status_code == 400
    assert (await calculate(usd["id"], chf["id"])).status_code == 404
    assert (await calculate(usd["id"], str(uuid.uuid4()))).status_code == 404

    response = await calculate(sek["id"], usd["id"])
    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"inactive_currencies": ["SEK"]}

    assert (await calculate(usd["id"], chf["id"], amount=-5)).status_code == 422


@pytest.mark.asyncio
async def test_failed_currency_delete_keeps_currency_and_rate(test_client, admin_headers, monkeypatch):
    eur = await post_currency(test_client, admin_headers, "EUR")
    rate = await post_rate(test_client, admin_headers, eur["id"], 0.92)

    async def unavailable(self, id):
        raise StorageUnavailableError("Storage is unavailable")

    # The rate row is removed first, then the currency delete fails
    monkeypatch.setattr(CurrencyRepository, "delete", unavailable)

    response = await test_client.delete(f"{EXCHANGE}/currencies/{eur['id']}", headers=admin_headers)
    assert response.status_code == 503

    monkeypatch.undo()
    response = await test_client.get(f"{EXCHANGE}/currencies/{eur['id']}")
    assert response.status_code == 200
    response = await test_client.get(f"{EXCHANGE}/rates/{rate['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["rate_to_usd"] == 0.92


@pytest.mark.asyncio
async def test_calculate_amount_bounds(test_client, admin_headers):
    usd = await post_currency(test_client, admin_headers, "USD")
    eur = await post_currency(test_client, admin_headers, "EUR")
    await post_rate(test_client, admin_headers, eur["id"], 0.92)

    response = await test_client.post(
        f"{EXCHANGE}/calculate",
        json={"from_currency_id": eur["id"], "to_currency_id": usd["id"], "amount": 1e25},
    )
    assert response.status_code == 422

    response = await test_client.post(
        f"{EXCHANGE}/calculate",
        json={"from_currency_id": eur["id"], "to_currency_id": usd["id"], "amount": MAX_AMOUNT},
    )
    assert response.status_code == 200
    assert response.json()["to_amount"] == 9.2e14


@pytest.mark.parametrize("amount", [float("inf"), float("nan")])
def test_calculation_request_rejects_non_finite_amount(amount):
    with pytest.raises(ValidationError):
        ExchangeCalculationRequest(
            from_currency_id=uuid.uuid4(),
            to_currency_id=uuid.uuid4(),
            amount=amount,
        )


@pytest.mark.asyncio
async def test_rate_above_storable_range_is_client_error(test_client, admin_headers):
    eur = await post_currency(test_client, admin_headers, "EUR")

    response = await test_client.post(
        f"{EXCHANGE}/rates",
        json={"currency_id": eur["id"], "rate_to_usd": 1e12},
        headers=admin_headers,
    )
    assert response.status_code == 422

    rate = await post_rate(test_client, admin_headers, eur["id"], 999999999999.5)
    assert rate["rate_to_usd"] == 999999999999.5

    response = await test_client.patch(
        f"{EXCHANGE}/rates/{rate['id']}",
        json={"rate_to_usd": 1e13},
        headers=admin_headers,
    )
    assert response.status_code == 422
