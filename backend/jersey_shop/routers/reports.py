"""Sales reports and report exports."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..dependencies import get_page_window, get_report_filter
from ..services import exports, reports

router = APIRouter(prefix="/reports", tags=["Reports"])


def _attachment(content: bytes, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/data", response_model=schemas.ReportData)
def report_data(
    report_filter: schemas.ReportFilter = Depends(get_report_filter),
    pagination: schemas.Pagination = Depends(get_page_window),
    db: Session = Depends(get_db),
):
    """One page of filtered transactions plus stats over the whole filtered set."""
    return reports.get_report_data(db, report_filter, pagination)


@router.get("/stats", response_model=schemas.ReportStats)
def report_stats(
    report_filter: schemas.ReportFilter = Depends(get_report_filter),
    db: Session = Depends(get_db),
):
    return reports.get_report_stats(db, report_filter)


@router.get("/export/excel")
def export_report_excel(
    report_filter: schemas.ReportFilter = Depends(get_report_filter),
    db: Session = Depends(get_db),
):
    content = exports.export_report_to_excel(db, report_filter)
    return _attachment(content, "sales-report.csv", "text/csv; charset=utf-8")


@router.get("/export/pdf")
def export_report_pdf(
    report_filter: schemas.ReportFilter = Depends(get_report_filter),
    db: Session = Depends(get_db),
):
    content = exports.export_report_to_pdf(db, report_filter)
    return _attachment(content, "sales-report.txt", "text/plain; charset=utf-8")


@router.get("/sales-by-period", response_model=List[schemas.SalesReportRow])
def sales_by_period(
    period: schemas.SalesPeriod = Query(...),
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
):
    return reports.get_sales_report_by_period(db, period, start_date, end_date)


@router.get("/top-customers", response_model=List[schemas.TopCustomerRow])
def top_customers(limit: int = Query(10, ge=1), db: Session = Depends(get_db)):
    return reports.get_top_customers_report(db, limit)


@router.get("/product-performance", response_model=List[schemas.ProductPerformanceRow])
def product_performance(db: Session = Depends(get_db)):
    return reports.get_product_performance_report(db)
