"""Shop settings API, including the bulk exports offered on the settings page."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..services import exports
from ..services import settings as settings_service

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/", response_model=schemas.ShopSettingsOut)
def get_shop_settings(db: Session = Depends(get_db)):
    return settings_service.get_shop_settings(db)


@router.put("/", response_model=schemas.ShopSettingsOut)
def update_shop_settings(payload: schemas.ShopSettingsUpdate, db: Session = Depends(get_db)):
    return settings_service.update_shop_settings(db, payload)


@router.post("/init", response_model=schemas.ShopSettingsOut)
def initialize_default_settings(db: Session = Depends(get_db)):
    return settings_service.initialize_default_settings(db)


@router.get("/receipt-template", response_model=schemas.ReceiptTemplate)
def get_receipt_template(db: Session = Depends(get_db)):
    return schemas.ReceiptTemplate(template=settings_service.get_receipt_template(db))


@router.put("/receipt-template", response_model=schemas.ShopSettingsOut)
def update_receipt_template(payload: schemas.ReceiptTemplate, db: Session = Depends(get_db)):
    return settings_service.update_receipt_template(db, payload.template)


@router.get("/export/customers")
def export_customers(db: Session = Depends(get_db)):
    return Response(
        content=exports.export_customers(db),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="customers.csv"'},
    )


@router.get("/export/orders")
def export_orders(db: Session = Depends(get_db)):
    return Response(
        content=exports.export_orders(db),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="orders.csv"'},
    )
