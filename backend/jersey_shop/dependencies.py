"""Query-parameter envelopes shared by the list and report routes."""

from datetime import date
from typing import Optional

from fastapi import Query

from . import schemas
from .errors import InvalidInputError
from .models import OrderStatus, PaymentMethod


def _check_limit(limit: int) -> None:
    if limit != schemas.UNBOUNDED and limit < 1:
        raise InvalidInputError("limit must be a positive integer or -1", field="limit")


def get_pagination(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(20, description="Page size, or -1 for every row"),
    search: Optional[str] = Query(None, description="Case-insensitive substring search"),
) -> schemas.Pagination:
    _check_limit(limit)
    return schemas.Pagination(page=page, limit=limit, search=search)


def get_page_window(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(20, description="Page size, or -1 for every row"),
) -> schemas.Pagination:
    """Paging without a search term, for routes that filter by other means."""
    _check_limit(limit)
    return schemas.Pagination(page=page, limit=limit)


def get_report_filter(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    customer_id: Optional[int] = Query(None),
    courier_id: Optional[int] = Query(None),
    jersey_name: Optional[str] = Query(None),
    order_status: Optional[OrderStatus] = Query(None),
    payment_method: Optional[PaymentMethod] = Query(None),
) -> schemas.ReportFilter:
    return schemas.ReportFilter(
        start_date=start_date,
        end_date=end_date,
        customer_id=customer_id,
        courier_id=courier_id,
        jersey_name=jersey_name,
        order_status=order_status,
        payment_method=payment_method,
    )
