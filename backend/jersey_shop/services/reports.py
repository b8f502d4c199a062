"""Report aggregation over transactions."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement

from .. import schemas
from ..errors import InvalidInputError
from ..models import Customer, Transaction
from ..timeutils import day_start, next_day_start
from .querying import fetch_page
from .transactions import count_with_relations, select_with_relations

logger = logging.getLogger(__name__)


def _check_date_range(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and start > end:
        raise InvalidInputError("start_date must be on or before end_date", field="start_date")


def date_range_conditions(start: Optional[date], end: Optional[date]) -> List[ColumnElement]:
    conditions = []
    if start is not None:
        conditions.append(Transaction.transaction_date >= day_start(start))
    if end is not None:
        conditions.append(Transaction.transaction_date < next_day_start(end))
    return conditions


def filter_predicate(report_filter: schemas.ReportFilter) -> Optional[ColumnElement]:
    """AND of every filter field that is present; None when nothing constrains."""
    _check_date_range(report_filter.start_date, report_filter.end_date)

    conditions = date_range_conditions(report_filter.start_date, report_filter.end_date)
    if report_filter.customer_id is not None:
        conditions.append(Transaction.customer_id == report_filter.customer_id)
    if report_filter.courier_id is not None:
        conditions.append(Transaction.courier_id == report_filter.courier_id)
    if report_filter.jersey_name:
        conditions.append(Transaction.jersey_name == report_filter.jersey_name)
    if report_filter.order_status is not None:
        conditions.append(Transaction.order_status == report_filter.order_status)
    if report_filter.payment_method is not None:
        conditions.append(Transaction.payment_method == report_filter.payment_method)

    if not conditions:
        return None
    return and_(*conditions)


def get_report_stats(db: Session, report_filter: schemas.ReportFilter) -> schemas.ReportStats:
    stmt = select(
        func.coalesce(func.sum(Transaction.total_payment), 0),
        func.count(Transaction.id),
        func.coalesce(func.sum(Transaction.quantity), 0),
    ).select_from(Transaction)
    predicate = filter_predicate(report_filter)
    if predicate is not None:
        stmt = stmt.where(predicate)

    total_sales, total_orders, total_quantity = db.execute(stmt).one()
    total_sales = float(total_sales or 0)
    total_orders = int(total_orders or 0)
    average = total_sales / total_orders if total_orders > 0 else 0.0
    return schemas.ReportStats(
        total_sales=total_sales,
        total_orders=total_orders,
        total_quantity=int(total_quantity or 0),
        average_order_value=average,
    )


def get_report_data(
    db: Session,
    report_filter: schemas.ReportFilter,
    pagination: schemas.Pagination,
) -> schemas.ReportData:
    stmt = select_with_relations().order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
    items, total = fetch_page(db, stmt, count_with_relations(), pagination, filter_predicate(report_filter))
    stats = get_report_stats(db, report_filter)
    return schemas.ReportData(
        total=total,
        items=[schemas.TransactionDetail.model_validate(item) for item in items],
        stats=stats,
    )


def _iso_week_label(moment: datetime) -> str:
    iso_year, iso_week, _ = moment.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


PERIOD_KEYS: Dict[schemas.SalesPeriod, Callable[[datetime], str]] = {
    schemas.SalesPeriod.DAILY: lambda moment: moment.strftime("%Y-%m-%d"),
    schemas.SalesPeriod.WEEKLY: _iso_week_label,
    schemas.SalesPeriod.MONTHLY: lambda moment: moment.strftime("%Y-%m"),
}


def get_sales_report_by_period(
    db: Session,
    period: schemas.SalesPeriod,
    start_date: date,
    end_date: date,
) -> List[schemas.SalesReportRow]:
    """One row per period that has sales, ordered by period key.

    Buckets are computed in Python so the ISO-week label is the same on
    every database backend.
    """
    _check_date_range(start_date, end_date)
    period_key = PERIOD_KEYS[period]

    rows = db.execute(
        select(Transaction.transaction_date, Transaction.total_payment, Transaction.quantity)
        .where(*date_range_conditions(start_date, end_date))
        .order_by(Transaction.transaction_date.asc())
    ).all()

    buckets: Dict[str, Dict[str, object]] = {}
    for transaction_date, total_payment, quantity in rows:
        bucket = buckets.setdefault(
            period_key(transaction_date),
            {"total_sales": Decimal("0"), "total_orders": 0, "total_quantity": 0},
        )
        bucket["total_sales"] += Decimal(total_payment)
        bucket["total_orders"] += 1
        bucket["total_quantity"] += quantity

    logger.debug("Sales report %s %s..%s -> %s periods", period.value, start_date, end_date, len(buckets))
    return [
        schemas.SalesReportRow(
            period=key,
            total_sales=float(values["total_sales"]),
            total_orders=values["total_orders"],
            total_quantity=values["total_quantity"],
        )
        for key, values in sorted(buckets.items())
    ]


def get_top_customers_report(db: Session, limit: int = 10) -> List[schemas.TopCustomerRow]:
    total_spent = func.coalesce(func.sum(Transaction.total_payment), 0)
    rows = db.execute(
        select(
            Customer.id,
            Customer.name,
            func.count(Transaction.id),
            total_spent,
            func.max(Transaction.transaction_date),
        )
        .join(Transaction, Transaction.customer_id == Customer.id)
        .group_by(Customer.id, Customer.name)
        .order_by(total_spent.desc())
        .limit(limit)
    ).all()
    return [
        schemas.TopCustomerRow(
            customer_id=customer_id,
            customer_name=name,
            total_orders=order_count,
            total_spent=float(spent or 0),
            last_order_date=last_order,
        )
        for customer_id, name, order_count, spent, last_order in rows
    ]


def get_product_performance_report(db: Session) -> List[schemas.ProductPerformanceRow]:
    total_sales = func.coalesce(func.sum(Transaction.total_payment), 0)
    rows = db.execute(
        select(
            Transaction.jersey_name,
            Transaction.jersey_size,
            func.coalesce(func.sum(Transaction.quantity), 0),
            total_sales,
            func.count(Transaction.id),
        )
        .group_by(Transaction.jersey_name, Transaction.jersey_size)
        .order_by(total_sales.desc(), Transaction.jersey_name.asc(), Transaction.jersey_size.asc())
    ).all()
    return [
        schemas.ProductPerformanceRow(
            jersey_name=name,
            jersey_size=size,
            total_quantity=int(quantity or 0),
            total_sales=float(sales or 0),
            order_count=order_count,
        )
        for name, size, quantity, sales, order_count in rows
    ]
