from datetime import datetime
from decimal import Decimal

import pytest

from app.api.payments.models import PaymentItemModel, PaymentModel
from app.api.payments.schemas.schema_payment import PaymentCreate
from app.api.payments.services.service_payment import PaymentService

MANAGER = 1001
CASHIER = 1002


def create(client, cash_desk=1, employee=MANAGER, payment_type="Cash"):
    return client.post(
        "/api/payments",
        json={"cashDeskId": cash_desk, "employeeId": employee, "paymentType": payment_type},
    )


def add_item(client, payment_id, body_payment_id=None, article="Bread", amount=1, price="2.50"):
    return client.post(
        f"/api/payments/{payment_id}/items",
        json={
            "paymentId": payment_id if body_payment_id is None else body_payment_id,
            "articleName": article,
            "amount": amount,
            "price": price,
        },
    )


@pytest.fixture
def seeded_payments(db):
    """Pagamento confirmado no caixa 1 em 12/05 e pagamento aberto no caixa 2 em 13/05"""
    first = PaymentService(db, clock=lambda: datetime(2024, 5, 12, 10, 0, 0))
    confirmed = first.create_payment(PaymentCreate(cash_desk_id=1, employee_id=CASHIER, payment_type="Cash"))
    first.confirm_payment(confirmed.id)

    second = PaymentService(db, clock=lambda: datetime(2024, 5, 13, 11, 0, 0))
    open_payment = second.create_payment(PaymentCreate(cash_desk_id=2, employee_id=MANAGER, payment_type="Maestro"))
    return confirmed.id, open_payment.id


# -------- GET --------

@pytest.mark.parametrize(
    "params, expected_desks",
    [
        ({}, [1, 2]),
        ({"cashDesk": 1}, [1]),
        ({"dateFrom": "2024-05-13"}, [2]),
        ({"cashDesk": 2, "dateFrom": "2024-05-13"}, [2]),
        ({"cashDesk": 1, "dateFrom": "2024-05-13"}, []),
    ],
)
def test_list_payments_with_filters(client, seeded_payments, params, expected_desks):
    resp = client.get("/api/payments", params=params)

    assert resp.status_code == 200, resp.text
    assert [p["cashDesk"]["number"] for p in resp.json()] == expected_desks


def test_list_payments_rejects_malformed_date(client):
    resp = client.get("/api/payments", params={"dateFrom": "not-a-date"})

    assert resp.status_code == 422


def test_get_payment_by_id(client, seeded_payments):
    confirmed_id, _ = seeded_payments

    resp = client.get(f"/api/payments/{confirmed_id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == confirmed_id
    assert body["paymentType"] == "Cash"
    assert body["paymentDateTime"].startswith("2024-05-12T10:00:00")
    assert body["confirmed"] is not None
    assert body["employee"] == {
        "registrationNumber": CASHIER,
        "firstName": "Cashier",
        "lastName": "Test",
        "role": "Cashier",
    }
    assert body["paymentItems"] == []


def test_get_payment_not_found(client):
    resp = client.get("/api/payments/999")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Payment not found"


# -------- POST --------

def test_create_confirm_then_add_item_scenario(client):
    resp = create(client, cash_desk=1, employee=MANAGER, payment_type="CreditCard")
    assert resp.status_code == 201, resp.text
    payment = resp.json()
    assert payment["confirmed"] is None
    assert payment["paymentType"] == "CreditCard"
    assert resp.headers["location"] == f"/api/payments/{payment['id']}"

    resp = client.patch(f"/api/payments/{payment['id']}")
    assert resp.status_code == 204

    assert client.get(f"/api/payments/{payment['id']}").json()["confirmed"] is not None

    resp = add_item(client, payment["id"])
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Payment already confirmed."


@pytest.mark.parametrize(
    "cash_desk, employee, payment_type, reason",
    [
        (1, CASHIER, "CreditCard", "Insufficient rights to create a credit card payment."),
        (99, MANAGER, "Cash", "Invalid cash desk"),
        (1, 999, "Cash", "Invalid employee"),
        (1, MANAGER, "Bitcoin", "Invalid payment type"),
    ],
)
def test_create_payment_bad_request(client, db, cash_desk, employee, payment_type, reason):
    resp = create(client, cash_desk, employee, payment_type)

    assert resp.status_code == 400
    assert resp.json() == {"detail": reason, "status_code": 400}
    assert db.query(PaymentModel).count() == 0


def test_create_payment_with_open_payment_on_cash_desk(client, db):
    assert create(client, cash_desk=1).status_code == 201

    resp = create(client, cash_desk=1, employee=CASHIER)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Open payment for cashdesk"
    assert db.query(PaymentModel).count() == 1


def test_create_payment_missing_field_is_validation_error(client):
    resp = client.post("/api/payments", json={"cashDeskId": 1, "paymentType": "Cash"})

    assert resp.status_code == 422
    assert any(e["field"].endswith("employeeId") for e in resp.json()["detail"])


# -------- PATCH --------

def test_confirm_payment_status_codes(client, seeded_payments):
    confirmed_id, open_id = seeded_payments

    assert client.patch(f"/api/payments/{open_id}").status_code == 204
    assert client.patch("/api/payments/999").status_code == 404

    resp = client.patch(f"/api/payments/{confirmed_id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Payment already confirmed."


# -------- POST items --------

def test_add_item_to_open_payment(client):
    payment_id = create(client).json()["id"]

    resp = add_item(client, payment_id, article="Milk", amount=2, price="1.25")

    assert resp.status_code == 201, resp.text
    assert resp.headers["location"] == f"/api/payments/{payment_id}"
    assert resp.json()["articleName"] == "Milk"

    payment = client.get(f"/api/payments/{payment_id}").json()
    assert [i["articleName"] for i in payment["paymentItems"]] == ["Milk"]
    assert Decimal(payment["total"]) == Decimal("2.50")


def test_add_item_with_mismatched_payment_id(client, db):
    payment_id = create(client).json()["id"]

    resp = add_item(client, payment_id, body_payment_id=payment_id + 1)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "PaymentId in URL and body must match"
    assert db.query(PaymentItemModel).count() == 0


def test_add_item_to_missing_payment_is_bad_request(client):
    resp = add_item(client, 999)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Payment not found"


def test_add_item_with_non_positive_amount_is_validation_error(client):
    payment_id = create(client).json()["id"]

    resp = add_item(client, payment_id, amount=0)

    assert resp.status_code == 422


# -------- DELETE --------

def test_delete_payment_status_codes(client, seeded_payments):
    confirmed_id, _ = seeded_payments

    assert client.delete(f"/api/payments/{confirmed_id}").status_code == 204
    assert client.get(f"/api/payments/{confirmed_id}").status_code == 404
    assert client.delete("/api/payments/999").status_code == 404


def test_delete_payment_with_items_requires_flag(client, db):
    payment_id = create(client).json()["id"]
    add_item(client, payment_id, article="A")
    add_item(client, payment_id, article="B")

    resp = client.delete(f"/api/payments/{payment_id}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Payment has items. Set deleteItems to true to delete them as well."
    assert len(client.get(f"/api/payments/{payment_id}").json()["paymentItems"]) == 2

    resp = client.delete(f"/api/payments/{payment_id}", params={"deleteItems": "true"})
    assert resp.status_code == 204
    assert client.get(f"/api/payments/{payment_id}").status_code == 404
    assert db.query(PaymentItemModel).count() == 0


# -------- Ambiente --------

def test_health_and_metrics(client):
    assert client.get("/health").json() == {"status": "healthy"}

    client.get("/api/payments/999")
    resp = client.get("/api/monitoring/metrics")

    assert resp.status_code == 200
    assert 'endpoint="/api/payments/{id}"' in resp.text
