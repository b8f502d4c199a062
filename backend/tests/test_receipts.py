from decimal import Decimal

import pytest

from jersey_shop.services.receipts import format_rupiah


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "Rp 0"),
        (1250000, "Rp 1.250.000"),
        (Decimal("1500.50"), "Rp 1.500,5"),
        (Decimal("99.99"), "Rp 99,99"),
    ],
)
def test_format_rupiah(amount, expected):
    assert format_rupiah(amount) == expected


@pytest.fixture
def shop(client):
    return client.put(
        "/settings/",
        json={
            "shop_name": "AK Jersey",
            "shop_address": "Jl. Merdeka No. 1",
            "shop_phone": "0812-0000-1111",
            "receipt_template": "Terima kasih!",
        },
    ).json()


def test_receipt_layout(client, shop, make_customer, make_courier, make_transaction):
    customer = make_customer()
    courier = make_courier()
    order = make_transaction(customer["id"], courier_id=courier["id"], notes="Rush delivery")

    response = client.get(f"/transactions/{order['id']}/receipt")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")

    expected = "\n".join(
        [
            " " * 11 + "AK Jersey",
            " " * 7 + "Jl. Merdeka No. 1",
            " " * 9 + "0812-0000-1111",
            "=" * 32,
            " " * 8 + "STRUK PEMBELIAN",
            "=" * 32,
            "No. Order: 000001",
            "Tgl: 15/01/2024 14.30",
            "-" * 32,
            "Pelanggan: John Doe",
            "Telp: 081234567890",
            "Alamat: Jl. Sudirman 5",
            "Jakarta, DKI Jakarta",
            "-" * 32,
            "Real Madrid Home 2024",
            "Size: L",
            "Qty: 2 x Rp 150.000",
            "Subtotal: Rp 300.000",
            "-" * 32,
            "TOTAL: Rp 300.000",
            "Bayar: Transfer",
            "Kurir: JNE Express (JNE)",
            "Status: PENDING",
            "Catatan: Rush delivery",
            "=" * 32,
            "Terima kasih!",
        ]
    ) + "\n"
    assert response.text == expected
    assert client.get(f"/orders/{order['id']}/receipt").text == expected


def test_receipt_omits_optional_lines(client, shop, make_customer, make_transaction):
    customer = make_customer()
    order = make_transaction(customer["id"], payment_method="Shopee")
    client.put(f"/orders/{order['id']}/status", json={"order_status": "in_process"})

    text = client.get(f"/transactions/{order['id']}/receipt").text
    assert "Kurir:" not in text
    assert "Catatan:" not in text
    assert "Bayar: Shopee\nStatus: IN_PROCESS\n" in text
    assert all(len(line) <= 32 for line in text.splitlines())


def test_receipt_wraps_long_names(client, shop, make_customer, make_transaction):
    customer = make_customer(address="Jl. Jenderal Gatot Subroto Kav. 52-53 Blok C")
    order = make_transaction(customer["id"])

    text = client.get(f"/transactions/{order['id']}/receipt").text
    assert all(len(line) <= 32 for line in text.splitlines())
    assert "Alamat: Jl. Jenderal Gatot" in text


def test_receipt_requires_settings(client, make_customer, make_transaction):
    customer = make_customer()
    order = make_transaction(customer["id"])

    response = client.get(f"/transactions/{order['id']}/receipt")
    assert response.status_code == 409
    assert response.json()["message"] == "Shop settings not configured"


def test_receipt_for_missing_transaction(client, shop):
    assert client.get("/transactions/123/receipt").status_code == 404
