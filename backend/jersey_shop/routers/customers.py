"""Customer directory API."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..dependencies import get_pagination
from ..services import customers as customer_service

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post("/", response_model=schemas.CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(payload: schemas.CustomerCreate, db: Session = Depends(get_db)):
    return customer_service.create_customer(db, payload)


@router.get("/", response_model=schemas.PaginatedCustomers)
def list_customers(
    pagination: schemas.Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    items, total = customer_service.list_customers(db, pagination)
    return schemas.PaginatedCustomers(total=total, items=items)


@router.get("/stats", response_model=schemas.CustomerStats)
def customer_stats(db: Session = Depends(get_db)):
    return customer_service.customer_stats(db)


@router.get("/{customer_id}", response_model=Optional[schemas.CustomerOut])
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    """Returns ``null`` when the customer does not exist."""
    return customer_service.get_customer(db, customer_id)


@router.put("/{customer_id}", response_model=schemas.CustomerOut)
def update_customer(customer_id: int, payload: schemas.CustomerUpdate, db: Session = Depends(get_db)):
    return customer_service.update_customer(db, customer_id, payload)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    customer_service.delete_customer(db, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
