import pytest

pytestmark = pytest.mark.integration

BASE = "/api/v1/customers/"


def test_create(api_client):
    response = api_client.post(
        BASE, {"name": "Marta Díaz", "email": "Marta@Example.com"}, format="json"
    )

    assert response.status_code == 201
    assert response.json()["email"] == "marta@example.com"
    assert response.json()["country"] == "Colombia"


def test_create_invalid_email(api_client):
    response = api_client.post(BASE, {"name": "X", "email": "nope"}, format="json")

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "CUSTOMER_INVALID_EMAIL"


def test_create_duplicate_email(api_client, customer):
    response = api_client.post(
        BASE, {"name": "Other Ana", "email": "ana@example.com"}, format="json"
    )

    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "CUSTOMER_EMAIL_EXISTS"


def test_create_without_name(api_client):
    response = api_client.post(BASE, {"name": "", "email": "a@b.co"}, format="json")
    assert response.json()["errors"][0]["code"] == "VALIDATION_REQUIRED_FIELD"


def test_list_filter_by_email(api_client, customer, make_customer):
    make_customer()
    response = api_client.get(BASE, {"email": "ANA@example.com"})
    assert [c["id"] for c in response.json()["data"]] == [str(customer.id)]


def test_retrieve_missing(api_client):
    response = api_client.get(f"{BASE}not-a-uuid/")

    assert response.status_code == 404
    assert response.json()["errors"][0]["code"] == "CUSTOMER_NOT_FOUND"


def test_patch(api_client, customer):
    response = api_client.patch(
        f"{BASE}{customer.id}/", {"city": "Cali", "email": "ana.g@example.com"}, format="json"
    )

    assert response.status_code == 200
    assert response.json()["city"] == "Cali"
    assert response.json()["email"] == "ana.g@example.com"


def test_delete(api_client, customer):
    assert api_client.delete(f"{BASE}{customer.id}/").status_code == 204
    assert api_client.delete(f"{BASE}{customer.id}/").status_code == 404
