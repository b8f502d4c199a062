import csv
import importlib.util
import sys
from pathlib import Path

from jersey_shop.database import SessionLocal
from jersey_shop.models import Courier, Customer, OrderStatus, Transaction

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "import_orders_seed.py"
FIELDS = [
    "customer_name",
    "customer_phone",
    "address",
    "city",
    "province",
    "courier_name",
    "courier_code",
    "jersey_name",
    "jersey_size",
    "price",
    "quantity",
    "payment_method",
    "order_status",
    "transaction_date",
]


def _load_importer():
    spec = importlib.util.spec_from_file_location("import_orders_seed", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def _write_csv(path: Path, rows):
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def _row(**overrides):
    row = {
        "customer_name": "Budi Santoso",
        "customer_phone": "081211110001",
        "address": "Jl. Diponegoro 12",
        "city": "Bandung",
        "province": "Jawa Barat",
        "courier_name": "JNE Express",
        "courier_code": "JNE",
        "jersey_name": "Persib Bandung Home 2024",
        "jersey_size": "M",
        "price": "275000",
        "quantity": "2",
        "payment_method": "COD",
        "order_status": "completed",
        "transaction_date": "2024-05-01T10:00:00",
    }
    row.update(overrides)
    return row


def test_import_creates_entities_and_skips_duplicates(tmp_path, db_session):
    importer = _load_importer()
    csv_path = tmp_path / "orders.csv"
    _write_csv(
        csv_path,
        [
            _row(),
            _row(jersey_size="L", courier_name="", courier_code=""),
            _row(customer_name="Siti Rahma", customer_phone="081211110002", quantity="1", order_status="pending"),
        ],
    )

    stats = importer.import_csv(csv_path, SessionLocal)
    assert (stats.created, stats.customers, stats.couriers, stats.skipped) == (3, 2, 1, 0)

    again = importer.import_csv(csv_path, SessionLocal)
    assert (again.created, again.skipped) == (0, 3)

    assert db_session.query(Customer).count() == 2
    assert db_session.query(Courier).count() == 1
    first, unsent, second_customer = db_session.query(Transaction).order_by(Transaction.id).all()
    assert first.total_payment == 550000
    assert first.order_status == OrderStatus.COMPLETED
    assert first.updated_at > first.created_at
    assert unsent.courier_id is None
    assert second_customer.order_status == OrderStatus.PENDING
    assert second_customer.created_at == second_customer.updated_at


def test_imported_orders_start_pending_before_status_change(tmp_path, db_session, monkeypatch):
    importer = _load_importer()
    first_statuses = []
    original_create = importer.create_transaction

    def recording_create(session, payload):
        transaction = original_create(session, payload)
        first_statuses.append(transaction.order_status)
        return transaction

    monkeypatch.setattr(importer, "create_transaction", recording_create)
    csv_path = tmp_path / "orders.csv"
    _write_csv(csv_path, [_row(order_status="returned")])

    importer.import_csv(csv_path, SessionLocal)

    assert first_statuses == [OrderStatus.PENDING]
    stored = db_session.query(Transaction).one()
    assert stored.order_status == OrderStatus.RETURNED
    assert stored.updated_at > stored.created_at
