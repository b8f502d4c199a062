"""Order status workflow API.

Orders are the same rows as transactions, viewed through their status.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..dependencies import get_pagination
from ..models import OrderStatus
from ..services import receipts
from ..services import transactions as transaction_service

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("/", response_model=schemas.PaginatedTransactions)
def list_orders(
    pagination: schemas.Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    items, total = transaction_service.list_transactions(db, pagination)
    return schemas.PaginatedTransactions(total=total, items=items)


@router.get("/counts", response_model=schemas.StatusCounts)
def order_status_counts(db: Session = Depends(get_db)):
    return transaction_service.status_counts(db)


@router.get("/status/{order_status}", response_model=schemas.PaginatedTransactions)
def list_orders_by_status(
    order_status: OrderStatus,
    pagination: schemas.Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    items, total = transaction_service.list_transactions(db, pagination, status=order_status)
    return schemas.PaginatedTransactions(total=total, items=items)


@router.get("/{order_id}", response_model=Optional[schemas.TransactionDetail])
def get_order(order_id: int, db: Session = Depends(get_db)):
    return transaction_service.get_transaction(db, order_id)


@router.put("/{order_id}/status", response_model=schemas.TransactionDetail)
def update_order_status(order_id: int, payload: schemas.OrderStatusUpdate, db: Session = Depends(get_db)):
    """Any status may be set from any other status."""
    return transaction_service.update_order_status(db, order_id, payload.order_status)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    transaction_service.delete_transaction(db, order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{order_id}/receipt", response_class=PlainTextResponse)
def order_receipt(order_id: int, db: Session = Depends(get_db)):
    return PlainTextResponse(receipts.generate_receipt(db, order_id))
