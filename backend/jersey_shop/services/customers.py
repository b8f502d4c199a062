"""Customer directory operations."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .. import schemas
from ..errors import ConflictError, NotFoundError
from ..models import Customer, Transaction
from ..timeutils import local_now, start_of_month
from .querying import apply_patch, fetch_page, search_predicate

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (Customer.name, Customer.phone, Customer.city, Customer.province)


def create_customer(db: Session, payload: schemas.CustomerCreate) -> Customer:
    now = local_now()
    customer = Customer(**payload.model_dump(), created_at=now, updated_at=now)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    logger.info("Created customer %s (%s)", customer.id, customer.name)
    return customer


def list_customers(db: Session, pagination: schemas.Pagination) -> Tuple[List[Customer], int]:
    stmt = select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc())
    count_stmt = select(func.count()).select_from(Customer)
    return fetch_page(db, stmt, count_stmt, pagination, search_predicate(pagination.search, SEARCH_COLUMNS))


def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    return db.get(Customer, customer_id)


def update_customer(db: Session, customer_id: int, payload: schemas.CustomerUpdate) -> Customer:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer", customer_id)

    apply_patch(customer, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(customer)
    logger.info("Updated customer %s", customer_id)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer", customer_id)

    in_use = db.scalar(
        select(func.count()).select_from(Transaction).where(Transaction.customer_id == customer_id)
    )
    if in_use:
        logger.warning("Refusing to delete customer %s: %s transactions reference it", customer_id, in_use)
        raise ConflictError(
            "Cannot delete customer with existing transactions",
            {"customer_id": customer_id, "transactions": in_use},
        )

    db.delete(customer)
    db.commit()
    logger.info("Deleted customer %s", customer_id)


def customer_stats(db: Session) -> schemas.CustomerStats:
    total = db.scalar(select(func.count()).select_from(Customer)) or 0
    new_this_month = db.scalar(
        select(func.count()).select_from(Customer).where(Customer.created_at >= start_of_month(local_now()))
    ) or 0
    return schemas.CustomerStats(total=total, new_this_month=new_this_month)
