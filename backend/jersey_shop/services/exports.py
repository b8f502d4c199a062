"""Text exports of reports, customers and orders.

"Excel" exports are UTF-8 CSV and the "PDF" export is a plain-text report;
the dashboard only needs downloadable, deterministic buffers.
"""

from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Iterable, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import schemas
from ..models import Customer, Transaction
from .receipts import format_rupiah
from .reports import get_report_data
from .transactions import select_with_relations

REPORT_HEADERS = [
    "Transaction ID",
    "Date",
    "Customer Name",
    "Jersey Name",
    "Jersey Size",
    "Price",
    "Quantity",
    "Total Payment",
    "Payment Method",
    "Order Status",
    "Courier",
    "Notes",
]

CUSTOMER_HEADERS = ["ID", "Name", "Phone", "Address", "City", "Province", "Notes", "Created At"]

ORDER_HEADERS = [
    "Order ID",
    "Date",
    "Customer Name",
    "Customer Phone",
    "Jersey Name",
    "Jersey Size",
    "Price",
    "Quantity",
    "Total Payment",
    "Payment Method",
    "Courier",
    "Order Status",
    "Notes",
]

RULE = "-" * 80
EVERYTHING = schemas.Pagination(page=1, limit=-1)


def plain_number(value) -> str:
    """``Decimal('150000.00')`` -> ``150000``; ``Decimal('10.50')`` -> ``10.5``."""
    number = Decimal(str(value))
    if number == number.to_integral_value():
        return str(int(number))
    return f"{number.normalize():f}"


def _to_csv(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def export_report_to_excel(db: Session, report_filter: schemas.ReportFilter) -> bytes:
    report = get_report_data(db, report_filter, EVERYTHING)
    rows = [
        [
            item.id,
            item.transaction_date.strftime("%Y-%m-%d"),
            item.customer.name,
            item.jersey_name,
            item.jersey_size,
            plain_number(item.price),
            item.quantity,
            plain_number(item.total_payment),
            item.payment_method.value,
            item.order_status.value,
            item.courier.name if item.courier else "",
            item.notes or "",
        ]
        for item in report.items
    ]
    return _to_csv(REPORT_HEADERS, rows)


def _describe_filter(report_filter: schemas.ReportFilter) -> str:
    parts: List[str] = []
    for name, value in report_filter.model_dump(exclude_none=True).items():
        parts.append(f"{name}={getattr(value, 'value', value)}")
    return ", ".join(parts) if parts else "none"


def export_report_to_pdf(db: Session, report_filter: schemas.ReportFilter) -> bytes:
    report = get_report_data(db, report_filter, EVERYTHING)
    stats = report.stats

    lines = [
        "SALES REPORT",
        "=" * 12,
        "",
        f"Filters: {_describe_filter(report_filter)}",
        "",
        "SUMMARY:",
        f"Total Sales: {format_rupiah(stats.total_sales)}",
        f"Total Orders: {stats.total_orders}",
        f"Total Quantity: {stats.total_quantity}",
        f"Average Order Value: {format_rupiah(stats.average_order_value)}",
        "",
        "TRANSACTIONS:",
        RULE,
    ]
    for item in report.items:
        lines.extend(
            [
                f"ID: {item.id} | Date: {item.transaction_date.strftime('%Y-%m-%d')}",
                f"Customer: {item.customer.name}",
                f"Jersey: {item.jersey_name} ({item.jersey_size})",
                f"Amount: {format_rupiah(item.total_payment)} | Status: {item.order_status.value}",
                RULE,
            ]
        )
    return ("\n".join(lines) + "\n").encode("utf-8")


def export_customers(db: Session) -> bytes:
    customers = db.scalars(select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc())).all()
    rows = [
        [
            customer.id,
            customer.name,
            customer.phone,
            customer.address,
            customer.city,
            customer.province,
            customer.notes or "",
            customer.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        ]
        for customer in customers
    ]
    return _to_csv(CUSTOMER_HEADERS, rows)


def export_orders(db: Session) -> bytes:
    transactions = db.scalars(
        select_with_relations().order_by(Transaction.created_at.desc(), Transaction.id.desc())
    ).all()
    rows = [
        [
            tx.id,
            tx.transaction_date.strftime("%Y-%m-%d"),
            tx.customer.name,
            tx.customer.phone,
            tx.jersey_name,
            tx.jersey_size,
            plain_number(tx.price),
            tx.quantity,
            plain_number(tx.total_payment),
            tx.payment_method.value,
            tx.courier.name if tx.courier else "",
            tx.order_status.value,
            tx.notes or "",
        ]
        for tx in transactions
    ]
    return _to_csv(ORDER_HEADERS, rows)
