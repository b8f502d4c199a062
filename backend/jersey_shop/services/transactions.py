"""Transaction (order) lifecycle operations.

Rules enforced here:

* a new transaction always starts as ``pending``; any status in the payload
  is ignored;
* ``customer_id`` and a non-null ``courier_id`` must resolve, both on create
  and on any update that touches them, before anything is written;
* ``order_status`` may move between any two states. There is no transition
  table; the dashboard relies on being able to undo a mis-click.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import String, cast, func, select
from sqlalchemy.orm import Session, contains_eager
from sqlalchemy.sql import Select

from .. import schemas
from ..errors import NotFoundError
from ..models import Courier, Customer, OrderStatus, Transaction
from ..timeutils import local_now
from .querying import apply_patch, fetch_page, search_predicate, touch

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (Transaction.jersey_name, Customer.name, cast(Transaction.id, String))


def select_with_relations() -> Select:
    """Transactions joined to their customer (inner) and courier (left), eagerly loaded."""
    return (
        select(Transaction)
        .join(Transaction.customer)
        .outerjoin(Transaction.courier)
        .options(contains_eager(Transaction.customer), contains_eager(Transaction.courier))
    )


def count_with_relations() -> Select:
    return (
        select(func.count(Transaction.id))
        .select_from(Transaction)
        .join(Transaction.customer)
        .outerjoin(Transaction.courier)
    )


def _ensure_customer(db: Session, customer_id: int) -> None:
    if db.get(Customer, customer_id) is None:
        logger.warning("Customer %s does not exist", customer_id)
        raise NotFoundError("Customer", customer_id)


def _ensure_courier(db: Session, courier_id: int) -> None:
    if db.get(Courier, courier_id) is None:
        logger.warning("Courier %s does not exist", courier_id)
        raise NotFoundError("Courier", courier_id)


def create_transaction(db: Session, payload: schemas.TransactionCreate) -> Transaction:
    _ensure_customer(db, payload.customer_id)
    if payload.courier_id is not None:
        _ensure_courier(db, payload.courier_id)

    now = local_now()
    transaction = Transaction(
        **payload.model_dump(),
        order_status=OrderStatus.PENDING,
        created_at=now,
        updated_at=now,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info(
        "Created transaction %s for customer %s (%s x %s)",
        transaction.id,
        transaction.customer_id,
        transaction.quantity,
        transaction.jersey_name,
    )
    return transaction


def list_transactions(
    db: Session,
    pagination: schemas.Pagination,
    status: Optional[OrderStatus] = None,
) -> Tuple[List[Transaction], int]:
    stmt = select_with_relations().order_by(Transaction.created_at.desc(), Transaction.id.desc())
    count_stmt = count_with_relations()
    if status is not None:
        stmt = stmt.where(Transaction.order_status == status)
        count_stmt = count_stmt.where(Transaction.order_status == status)
    return fetch_page(db, stmt, count_stmt, pagination, search_predicate(pagination.search, SEARCH_COLUMNS))


def get_transaction(db: Session, transaction_id: int) -> Optional[Transaction]:
    return db.scalars(select_with_relations().where(Transaction.id == transaction_id)).first()


def _require_transaction(db: Session, transaction_id: int) -> Transaction:
    transaction = db.get(Transaction, transaction_id)
    if transaction is None:
        raise NotFoundError("Transaction", transaction_id)
    return transaction


def update_transaction(db: Session, transaction_id: int, payload: schemas.TransactionUpdate) -> Transaction:
    transaction = _require_transaction(db, transaction_id)

    updates = payload.model_dump(exclude_unset=True)
    if "customer_id" in updates:
        _ensure_customer(db, updates["customer_id"])
    if updates.get("courier_id") is not None:
        _ensure_courier(db, updates["courier_id"])

    apply_patch(transaction, updates)
    db.commit()
    logger.info("Updated transaction %s fields=%s", transaction_id, sorted(updates))
    return get_transaction(db, transaction_id)


def update_order_status(db: Session, transaction_id: int, status: OrderStatus) -> Transaction:
    transaction = _require_transaction(db, transaction_id)
    previous = transaction.order_status

    transaction.order_status = status
    touch(transaction)
    db.commit()
    logger.info("Transaction %s status %s -> %s", transaction_id, previous.value, status.value)
    return get_transaction(db, transaction_id)


def delete_transaction(db: Session, transaction_id: int) -> None:
    transaction = _require_transaction(db, transaction_id)
    db.delete(transaction)
    db.commit()
    logger.info("Deleted transaction %s", transaction_id)


def status_counts(db: Session) -> schemas.StatusCounts:
    rows = db.execute(
        select(Transaction.order_status, func.count(Transaction.id)).group_by(Transaction.order_status)
    ).all()
    counts = {status.value: 0 for status in OrderStatus}
    for status, count in rows:
        counts[OrderStatus(status).value] = count
    return schemas.StatusCounts(**counts, total=sum(counts.values()))
