"""Shop settings singleton.

The settings live in a single row of ``shop_settings``. Reads create the row
with defaults when it is missing; writes patch that row in place.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import schemas
from ..config import get_settings
from ..models import ShopSettings
from ..timeutils import local_now
from .querying import apply_patch

logger = logging.getLogger(__name__)


def _default_values() -> Dict[str, Any]:
    config = get_settings()
    return {
        "shop_name": config.default_shop_name,
        "shop_address": "",
        "shop_phone": "",
        "receipt_template": config.default_receipt_template,
    }


def find_shop_settings(db: Session) -> Optional[ShopSettings]:
    """The settings row if one exists; never creates it."""
    return db.scalars(select(ShopSettings).order_by(ShopSettings.id.asc()).limit(1)).first()


def _insert(db: Session, values: Dict[str, Any]) -> ShopSettings:
    now = local_now()
    row = ShopSettings(**values, created_at=now, updated_at=now)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created shop settings row %s", row.id)
    return row


def initialize_default_settings(db: Session) -> ShopSettings:
    existing = find_shop_settings(db)
    if existing is not None:
        return existing
    return _insert(db, _default_values())


def get_shop_settings(db: Session) -> ShopSettings:
    return initialize_default_settings(db)


def update_shop_settings(db: Session, payload: schemas.ShopSettingsUpdate) -> ShopSettings:
    updates = payload.model_dump(exclude_unset=True)
    row = find_shop_settings(db)
    if row is None:
        return _insert(db, {**_default_values(), **updates})

    apply_patch(row, updates)
    db.commit()
    db.refresh(row)
    logger.info("Updated shop settings fields=%s", sorted(updates))
    return row


def get_receipt_template(db: Session) -> str:
    return get_shop_settings(db).receipt_template


def update_receipt_template(db: Session, template: str) -> ShopSettings:
    return update_shop_settings(db, schemas.ShopSettingsUpdate(receipt_template=template))
