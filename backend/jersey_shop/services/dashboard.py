"""Dashboard tiles, computed fresh on every call."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .. import schemas
from ..models import Customer, OrderStatus, Transaction
from ..timeutils import local_now, start_of_day, start_of_month, start_of_week
from .transactions import status_counts


def _completed_sales_since(db: Session, since: datetime) -> float:
    total = db.scalar(
        select(func.coalesce(func.sum(Transaction.total_payment), 0)).where(
            Transaction.transaction_date >= since,
            Transaction.order_status == OrderStatus.COMPLETED,
        )
    )
    return float(total or 0)


def get_dashboard_stats(db: Session, now: Optional[datetime] = None) -> schemas.DashboardStats:
    now = now or local_now()
    today = start_of_day(now)

    new_customers = db.scalar(
        select(func.count()).select_from(Customer).where(Customer.created_at >= today)
    ) or 0
    counts = status_counts(db)

    return schemas.DashboardStats(
        daily_sales=_completed_sales_since(db, today),
        weekly_sales=_completed_sales_since(db, start_of_week(now)),
        monthly_sales=_completed_sales_since(db, start_of_month(now)),
        new_customers_count=new_customers,
        pending_orders=counts.pending,
        in_process_orders=counts.in_process,
        completed_orders=counts.completed,
        returned_orders=counts.returned,
        total_orders=counts.total,
    )
