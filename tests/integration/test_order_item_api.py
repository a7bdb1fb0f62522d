import pytest

pytestmark = pytest.mark.integration

BASE = "/api/v1/order-items/"


@pytest.fixture()
def order_id(api_client, customer, balls):
    payload = {
        "customer_id": str(customer.id),
        "items": [{"product_id": str(balls.id), "quantity": 2}],
    }
    return api_client.post("/api/v1/orders/", payload, format="json").json()["id"]


def test_add_item_to_pending_order(api_client, order_id, racket):
    response = api_client.post(
        BASE,
        {"order_id": order_id, "product_id": str(racket.id), "quantity": 1},
        format="json",
    )

    assert response.status_code == 201
    body = response.json()
    assert body["order_status"] == "PENDING"
    assert body["total_price"] == "100000.00"
    order = api_client.get(f"/api/v1/orders/{order_id}/").json()
    assert order["total_amount"] == "178500.00"
    assert len(order["items"]) == 2


def test_add_item_to_processing_order(api_client, order_id, racket):
    api_client.post(f"/api/v1/orders/{order_id}/status/", {"status": "PROCESSING"}, format="json")

    response = api_client.post(
        BASE,
        {"order_id": order_id, "product_id": str(racket.id), "quantity": 1},
        format="json",
    )

    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "ORDER_CANNOT_BE_MODIFIED"


def test_list_by_order(api_client, order_id, balls):
    response = api_client.get(BASE, {"order_id": order_id})

    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["data"][0]["product"]["id"] == str(balls.id)


def test_retrieve(api_client, order_id):
    item_id = api_client.get(BASE, {"order_id": order_id}).json()["data"][0]["id"]

    response = api_client.get(f"{BASE}{item_id}/")

    assert response.status_code == 200
    assert response.json()["order_id"] == order_id


def test_retrieve_missing(api_client):
    response = api_client.get(f"{BASE}00000000-0000-0000-0000-000000000001/")

    assert response.status_code == 400
    error = response.json()["errors"][0]
    assert error["code"] == "VALIDATION_INVALID_INPUT"
    assert error["detail"] == "Order item not found"
