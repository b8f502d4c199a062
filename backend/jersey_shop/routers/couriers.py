"""Courier directory API."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..dependencies import get_pagination
from ..services import couriers as courier_service

router = APIRouter(prefix="/couriers", tags=["Couriers"])


@router.post("/", response_model=schemas.CourierOut, status_code=status.HTTP_201_CREATED)
def create_courier(payload: schemas.CourierCreate, db: Session = Depends(get_db)):
    return courier_service.create_courier(db, payload)


@router.get("/", response_model=schemas.PaginatedCouriers)
def list_couriers(
    pagination: schemas.Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    items, total = courier_service.list_couriers(db, pagination)
    return schemas.PaginatedCouriers(total=total, items=items)


@router.get("/all", response_model=List[schemas.CourierOut])
def list_all_couriers(db: Session = Depends(get_db)):
    """Alphabetical list for dropdowns."""
    return courier_service.list_all_couriers(db)


@router.get("/{courier_id}", response_model=Optional[schemas.CourierOut])
def get_courier(courier_id: int, db: Session = Depends(get_db)):
    return courier_service.get_courier(db, courier_id)


@router.put("/{courier_id}", response_model=schemas.CourierOut)
def update_courier(courier_id: int, payload: schemas.CourierUpdate, db: Session = Depends(get_db)):
    return courier_service.update_courier(db, courier_id, payload)


@router.delete("/{courier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_courier(courier_id: int, db: Session = Depends(get_db)):
    courier_service.delete_courier(db, courier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
