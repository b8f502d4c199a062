"""Courier directory operations."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .. import schemas
from ..errors import ConflictError, NotFoundError
from ..models import Courier, Transaction
from ..timeutils import local_now
from .querying import apply_patch, fetch_page, search_predicate

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (Courier.name, Courier.code)


def create_courier(db: Session, payload: schemas.CourierCreate) -> Courier:
    now = local_now()
    courier = Courier(**payload.model_dump(), created_at=now, updated_at=now)
    db.add(courier)
    db.commit()
    db.refresh(courier)
    logger.info("Created courier %s (%s)", courier.id, courier.code)
    return courier


def list_couriers(db: Session, pagination: schemas.Pagination) -> Tuple[List[Courier], int]:
    stmt = select(Courier).order_by(Courier.created_at.desc(), Courier.id.desc())
    count_stmt = select(func.count()).select_from(Courier)
    return fetch_page(db, stmt, count_stmt, pagination, search_predicate(pagination.search, SEARCH_COLUMNS))


def list_all_couriers(db: Session) -> List[Courier]:
    """Every courier, alphabetical, for dropdowns."""
    return list(db.scalars(select(Courier).order_by(Courier.name.asc(), Courier.id.asc())).all())


def get_courier(db: Session, courier_id: int) -> Optional[Courier]:
    return db.get(Courier, courier_id)


def update_courier(db: Session, courier_id: int, payload: schemas.CourierUpdate) -> Courier:
    courier = db.get(Courier, courier_id)
    if courier is None:
        raise NotFoundError("Courier", courier_id)

    apply_patch(courier, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(courier)
    logger.info("Updated courier %s", courier_id)
    return courier


def delete_courier(db: Session, courier_id: int) -> None:
    courier = db.get(Courier, courier_id)
    if courier is None:
        raise NotFoundError("Courier", courier_id)

    in_use = db.scalar(
        select(func.count()).select_from(Transaction).where(Transaction.courier_id == courier_id)
    )
    if in_use:
        logger.warning("Refusing to delete courier %s: %s transactions reference it", courier_id, in_use)
        raise ConflictError(
            "Cannot delete courier with existing transactions",
            {"courier_id": courier_id, "transactions": in_use},
        )

    db.delete(courier)
    db.commit()
    logger.info("Deleted courier %s", courier_id)
