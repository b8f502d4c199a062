"""Sales transaction API."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..dependencies import get_pagination
from ..services import receipts
from ..services import transactions as transaction_service

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("/", response_model=schemas.TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: schemas.TransactionCreate, db: Session = Depends(get_db)):
    """Record a sale. New transactions always start as ``pending``."""
    return transaction_service.create_transaction(db, payload)


@router.get("/", response_model=schemas.PaginatedTransactions)
def list_transactions(
    pagination: schemas.Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    items, total = transaction_service.list_transactions(db, pagination)
    return schemas.PaginatedTransactions(total=total, items=items)


@router.get("/{transaction_id}", response_model=Optional[schemas.TransactionDetail])
def get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    return transaction_service.get_transaction(db, transaction_id)


@router.put("/{transaction_id}", response_model=schemas.TransactionDetail)
def update_transaction(transaction_id: int, payload: schemas.TransactionUpdate, db: Session = Depends(get_db)):
    return transaction_service.update_transaction(db, transaction_id, payload)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    transaction_service.delete_transaction(db, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{transaction_id}/receipt", response_class=PlainTextResponse)
def transaction_receipt(transaction_id: int, db: Session = Depends(get_db)):
    return PlainTextResponse(receipts.generate_receipt(db, transaction_id))
