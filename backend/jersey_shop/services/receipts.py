"""Plain-text receipts for 58mm thermal printers."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from sqlalchemy.orm import Session

from ..config import get_settings
from ..errors import ConflictError, NotFoundError
from ..models import ShopSettings, Transaction
from .settings import find_shop_settings
from .transactions import get_transaction

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
ORDER_NUMBER_WIDTH = 6
RECEIPT_DATE_FORMAT = "%d/%m/%Y %H.%M"


def format_rupiah(amount) -> str:
    """Indonesian money format: ``Rp 1.250.000``, ``Rp 1.500,5``."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"))
    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):f}".partition(".")
    grouped = f"{int(integer_part):,}".replace(",", ".")
    fraction = fraction.rstrip("0")
    if fraction:
        grouped = f"{grouped},{fraction}"
    return f"Rp {sign}{grouped}"


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["rupiah"] = format_rupiah
    return env


_env = _build_environment()


def render_receipt(transaction: Transaction, shop: ShopSettings, width: Optional[int] = None) -> str:
    width = width or get_settings().receipt_width
    template = _env.get_template("receipt.txt")
    rendered = template.render(
        width=width,
        shop=shop,
        tx=transaction,
        customer=transaction.customer,
        courier=transaction.courier,
        order_number=str(transaction.id).zfill(ORDER_NUMBER_WIDTH),
        order_date=transaction.transaction_date.strftime(RECEIPT_DATE_FORMAT),
        payment_method=transaction.payment_method.value,
        status=transaction.order_status.value.upper(),
        line_total=Decimal(transaction.price) * transaction.quantity,
        notes=(transaction.notes or "").strip(),
        footer=(shop.receipt_template or "").strip(),
    )
    return "\n".join(line.rstrip() for line in rendered.splitlines()) + "\n"


def generate_receipt(db: Session, transaction_id: int) -> str:
    transaction = get_transaction(db, transaction_id)
    if transaction is None:
        raise NotFoundError("Transaction", transaction_id)

    shop = find_shop_settings(db)
    if shop is None:
        logger.warning("Receipt requested for transaction %s before shop settings exist", transaction_id)
        raise ConflictError("Shop settings not configured")

    return render_receipt(transaction, shop)
