def pay(client, obligation_id, amount, **extra):
    body = {"amount": amount}
    body.update(extra)
    return client.post(f"/obligations/{obligation_id}/transactions", json=body)


def enable(client, key):
    res = client.patch("/settings", json={"key": key, "value": "true"})
    assert res.status_code == 200


def test_create_obligation(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"], reference_no="INV-7", interest_rate="18", interest_type="simple-daily")
    assert ob["principal_amount"] == 1000.0
    assert ob["interest_type"] == "simple-daily"
    assert ob["interest_rate"] == 18.0
    assert ob["is_active"] is True


def test_create_obligation_for_unknown_account(client):
    res = client.post(
        "/obligations",
        json={"account_id": 42, "principal_amount": "10.00", "obligation_date": "2024-01-01"},
    )
    assert res.status_code == 400


def test_rejects_non_positive_principal(client, mahajan):
    res = client.post(
        "/obligations",
        json={"account_id": mahajan["account_id"], "principal_amount": "0", "obligation_date": "2024-01-01"},
    )
    assert res.status_code == 422


def test_missing_rate_forces_no_interest(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"], interest_type="flat")
    assert ob["interest_type"] == "none"


def test_due_date_before_obligation_date(client, mahajan, make_obligation):
    res = client.post(
        "/obligations",
        json={
            "account_id": mahajan["account_id"],
            "principal_amount": "10.00",
            "obligation_date": "2024-03-01",
            "due_date": "2024-02-01",
        },
    )
    assert res.status_code == 400

    ob = make_obligation(mahajan["account_id"])
    res = client.patch(f"/obligations/{ob['obligation_id']}/due-date", json={"due_date": "2023-12-01"})
    assert res.status_code == 400

    res = client.patch(f"/obligations/{ob['obligation_id']}/due-date", json={"due_date": "2024-02-15"})
    assert res.status_code == 200
    assert res.json()["due_date"] == "2024-02-15"


def test_list_obligations_by_account(client, mahajan, customer, make_obligation):
    make_obligation(mahajan["account_id"])
    make_obligation(customer["account_id"], obligation_type="sale")

    res = client.get("/obligations", params={"account_id": customer["account_id"]})
    assert [o["obligation_type"] for o in res.json()] == ["sale"]
    assert client.get("/obligations/999").status_code == 404


def test_payment_reduces_balance(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"])
    res = pay(client, ob["obligation_id"], "400.00", payment_date="2024-02-01")
    assert res.status_code == 201
    body = res.json()
    assert body["balance"] == 600.0
    assert body["obligation_active"] is True
    assert body["transaction"]["transaction_type"] == "payment"
    assert body["transaction"]["payment_mode"] == "cash"

    res = client.get(f"/obligations/{ob['obligation_id']}/balance", params={"as_of": "2024-06-01"})
    bal = res.json()
    assert bal["balance"] == 600.0
    assert bal["total_paid"] == 400.0
    assert bal["accrued_interest"] == 0.0
    assert bal["total_due"] == 600.0


def test_overpayment_rejected(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"])
    pay(client, ob["obligation_id"], "400.00")

    res = pay(client, ob["obligation_id"], "600.01")
    assert res.status_code == 400
    assert res.json()["detail"] == "Payment amount cannot exceed outstanding amount of 600.00"

    # nothing was stored
    res = client.get(f"/obligations/{ob['obligation_id']}/transactions")
    assert len(res.json()) == 1


def test_overpayment_allowed_by_setting(client, mahajan, make_obligation):
    enable(client, "ALLOW_OVERPAYMENT")
    ob = make_obligation(mahajan["account_id"], principal_amount="500.00")
    res = pay(client, ob["obligation_id"], "700.00")
    assert res.status_code == 201
    assert res.json()["balance"] == -200.0


def test_interest_payment_is_not_capped(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"], principal_amount="100.00")
    res = pay(client, ob["obligation_id"], "150.00", transaction_type="interest")
    assert res.status_code == 201
    assert res.json()["balance"] == 100.0


def test_refund_adds_back(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"])
    pay(client, ob["obligation_id"], "400.00")
    res = pay(client, ob["obligation_id"], "100.00", transaction_type="refund")
    assert res.json()["balance"] == 700.0


def test_auto_close_on_settlement(client, mahajan, make_obligation):
    enable(client, "AUTO_CLOSE_SETTLED")
    ob = make_obligation(mahajan["account_id"], principal_amount="250.00")

    res = pay(client, ob["obligation_id"], "250.00")
    assert res.status_code == 201
    assert res.json()["balance"] == 0.0
    assert res.json()["obligation_active"] is False

    res = pay(client, ob["obligation_id"], "1.00", transaction_type="interest")
    assert res.status_code == 400
    assert res.json()["detail"] == "Obligation is closed"


def test_settled_obligation_stays_open_by_default(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"], principal_amount="250.00")
    res = pay(client, ob["obligation_id"], "250.00")
    assert res.json()["obligation_active"] is True


def test_closed_obligation_rejects_transactions(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"])
    res = client.patch(f"/obligations/{ob['obligation_id']}/active", json={"is_active": False})
    assert res.json()["is_active"] is False
    assert pay(client, ob["obligation_id"], "10.00").status_code == 400


def test_transactions_listed_in_payment_order(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"])
    pay(client, ob["obligation_id"], "20.00", payment_date="2024-03-01")
    pay(client, ob["obligation_id"], "10.00", payment_date="2024-02-01")

    res = client.get(f"/obligations/{ob['obligation_id']}/transactions")
    assert [t["amount"] for t in res.json()] == [10.0, 20.0]


def test_zero_amount_is_invalid(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"])
    assert pay(client, ob["obligation_id"], "0").status_code == 422


def test_monthly_interest_on_balance(client, mahajan, make_obligation):
    ob = make_obligation(
        mahajan["account_id"],
        principal_amount="500.00",
        interest_rate="24",
        interest_type="simple-monthly",
    )
    res = client.get(f"/obligations/{ob['obligation_id']}/balance", params={"as_of": "2024-04-01"})
    body = res.json()
    assert body["accrued_interest"] == 360.0
    assert body["total_due"] == 860.0


def test_flat_interest_on_balance(client, mahajan, make_obligation):
    ob = make_obligation(mahajan["account_id"], interest_rate="12", interest_type="flat")
    res = client.get(f"/obligations/{ob['obligation_id']}/balance", params={"as_of": "2024-01-01"})
    assert res.json()["accrued_interest"] == 120.0
