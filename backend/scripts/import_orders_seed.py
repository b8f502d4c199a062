"""Load CSV demo orders into the customers, couriers and transactions tables."""

from __future__ import annotations

import csv
import sys
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from jersey_shop import models, schemas  # noqa: E402
from jersey_shop.database import Base, SessionLocal, engine  # noqa: E402
from jersey_shop.services.couriers import create_courier  # noqa: E402
from jersey_shop.services.customers import create_customer  # noqa: E402
from jersey_shop.services.transactions import create_transaction, update_order_status  # noqa: E402

OrderKey = Tuple[str, str, str, datetime]


@dataclass
class ImportStats:
    customers: int = 0
    couriers: int = 0
    created: int = 0
    skipped: int = 0


def load_existing_orders(session: Session) -> Set[OrderKey]:
    rows = session.execute(
        select(
            models.Customer.phone,
            models.Transaction.jersey_name,
            models.Transaction.jersey_size,
            models.Transaction.transaction_date,
        ).join(models.Customer, models.Transaction.customer_id == models.Customer.id)
    )
    return {tuple(row) for row in rows}


def _customer_for(session: Session, row: Dict[str, str], cache: Dict[str, models.Customer], stats: ImportStats):
    phone = row["customer_phone"]
    if phone not in cache:
        customer = session.scalars(select(models.Customer).where(models.Customer.phone == phone)).first()
        if customer is None:
            customer = create_customer(
                session,
                schemas.CustomerCreate(
                    name=row["customer_name"],
                    phone=phone,
                    address=row["address"],
                    city=row["city"],
                    province=row["province"],
                ),
            )
            stats.customers += 1
        cache[phone] = customer
    return cache[phone]


def _courier_for(
    session: Session, row: Dict[str, str], cache: Dict[str, models.Courier], stats: ImportStats
) -> Optional[models.Courier]:
    code = (row.get("courier_code") or "").strip()
    if not code:
        return None
    if code not in cache:
        courier = session.scalars(select(models.Courier).where(models.Courier.code == code)).first()
        if courier is None:
            courier = create_courier(session, schemas.CourierCreate(name=row["courier_name"], code=code))
            stats.couriers += 1
        cache[code] = courier
    return cache[code]


def parse_order(row: Dict[str, str], customer: models.Customer, courier: Optional[models.Courier]):
    price = Decimal(row["price"]).quantize(Decimal("0.01"))
    quantity = int(row["quantity"])
    return schemas.TransactionCreate(
        customer_id=customer.id,
        courier_id=courier.id if courier else None,
        jersey_name=row["jersey_name"],
        jersey_size=row["jersey_size"],
        price=price,
        quantity=quantity,
        total_payment=price * quantity,
        payment_method=models.PaymentMethod(row["payment_method"]),
        transaction_date=datetime.fromisoformat(row["transaction_date"]),
        notes=row.get("notes") or None,
    )


def import_order(
    session: Session, row: Dict[str, str], customer: models.Customer, courier: Optional[models.Courier]
) -> models.Transaction:
    """Insert one order as ``pending``, then replay the CSV status as a normal status change."""
    transaction = create_transaction(session, parse_order(row, customer, courier))
    status = models.OrderStatus(row.get("order_status") or models.OrderStatus.PENDING.value)
    if status != models.OrderStatus.PENDING:
        transaction = update_order_status(session, transaction.id, status)
    return transaction


def import_csv(csv_path: Path, session_factory: Callable[[], Session] = SessionLocal) -> ImportStats:
    stats = ImportStats()
    with session_factory() as session:
        existing = load_existing_orders(session)
        customers: Dict[str, models.Customer] = {}
        couriers: Dict[str, models.Courier] = {}
        with csv_path.open(newline="", encoding="utf-8") as fh:
            reader = csv.DictReader(fh)
            for row in reader:
                key = (
                    row["customer_phone"],
                    row["jersey_name"],
                    row["jersey_size"],
                    datetime.fromisoformat(row["transaction_date"]),
                )
                if key in existing:
                    stats.skipped += 1
                    continue
                customer = _customer_for(session, row, customers, stats)
                courier = _courier_for(session, row, couriers, stats)
                import_order(session, row, customer, courier)
                existing.add(key)
                stats.created += 1
    return stats


def main() -> None:
    csv_path = ROOT.parent / "data" / "demo_orders.csv"
    if not csv_path.exists():
        raise SystemExit(f"CSV file not found: {csv_path}")

    Base.metadata.create_all(bind=engine)
    stats = import_csv(csv_path)
    print(
        f"Created {stats.created} orders ({stats.customers} new customers, "
        f"{stats.couriers} new couriers), skipped {stats.skipped} duplicates."
    )


if __name__ == "__main__":
    main()
