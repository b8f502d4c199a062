"""Pydantic schemas for request/response bodies."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import OrderStatus, PaymentMethod
from .timeutils import to_local_naive

UNBOUNDED = -1


def _reject_explicit_nulls(model: BaseModel, fields: Iterable[str]) -> None:
    # Absent means "leave unchanged"; null is only allowed where the column is nullable.
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} cannot be null")


def _as_float(value):
    if isinstance(value, Decimal):
        return float(value)
    return value


class Pagination(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(20, description="Page size, -1 returns every row")
    search: Optional[str] = None

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def is_unbounded(self) -> bool:
        return self.limit == UNBOUNDED

    @property
    def offset(self) -> int:
        return 0 if self.is_unbounded else (self.page - 1) * self.limit


# Customers


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    phone: str = Field(..., min_length=1, max_length=32)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1, max_length=64)
    province: str = Field(..., min_length=1, max_length=64)
    notes: Optional[str] = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, min_length=1, max_length=32)
    address: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1, max_length=64)
    province: Optional[str] = Field(None, min_length=1, max_length=64)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(self, ("name", "phone", "address", "city", "province"))
        return self


class CustomerOut(CustomerBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginatedCustomers(BaseModel):
    total: int
    items: List[CustomerOut]


class CustomerStats(BaseModel):
    total: int
    new_this_month: int


# Couriers


class CourierBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    code: str = Field(..., min_length=1, max_length=32, description="Carrier short code, e.g. JNE")
    notes: Optional[str] = None


class CourierCreate(CourierBase):
    pass


class CourierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    code: Optional[str] = Field(None, min_length=1, max_length=32)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(self, ("name", "code"))
        return self


class CourierOut(CourierBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginatedCouriers(BaseModel):
    total: int
    items: List[CourierOut]


# Transactions / orders


class TransactionCreate(BaseModel):
    customer_id: int
    jersey_name: str = Field(..., min_length=1, max_length=160)
    jersey_size: str = Field(..., min_length=1, max_length=16)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    quantity: int = Field(..., gt=0)
    total_payment: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_method: PaymentMethod
    courier_id: Optional[int] = None
    transaction_date: datetime
    notes: Optional[str] = None

    @field_validator("transaction_date")
    @classmethod
    def normalize_transaction_date(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class TransactionUpdate(BaseModel):
    customer_id: Optional[int] = None
    jersey_name: Optional[str] = Field(None, min_length=1, max_length=160)
    jersey_size: Optional[str] = Field(None, min_length=1, max_length=16)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    quantity: Optional[int] = Field(None, gt=0)
    total_payment: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    payment_method: Optional[PaymentMethod] = None
    courier_id: Optional[int] = None
    order_status: Optional[OrderStatus] = None
    transaction_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("transaction_date")
    @classmethod
    def normalize_transaction_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value) if value is not None else None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(
            self,
            (
                "customer_id",
                "jersey_name",
                "jersey_size",
                "price",
                "quantity",
                "total_payment",
                "payment_method",
                "order_status",
                "transaction_date",
            ),
        )
        return self


class OrderStatusUpdate(BaseModel):
    order_status: OrderStatus


class TransactionOut(BaseModel):
    id: int
    customer_id: int
    jersey_name: str
    jersey_size: str
    price: float
    quantity: int
    total_payment: float
    payment_method: PaymentMethod
    courier_id: Optional[int] = None
    order_status: OrderStatus
    transaction_date: datetime
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("price", "total_payment", mode="before")
    @classmethod
    def money_as_float(cls, value):
        return _as_float(value)


class TransactionDetail(TransactionOut):
    customer: CustomerOut
    courier: Optional[CourierOut] = None


class PaginatedTransactions(BaseModel):
    total: int
    items: List[TransactionDetail]


class StatusCounts(BaseModel):
    pending: int = 0
    in_process: int = 0
    completed: int = 0
    returned: int = 0
    total: int = 0


# Reports


class ReportFilter(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    customer_id: Optional[int] = None
    courier_id: Optional[int] = None
    jersey_name: Optional[str] = None
    order_status: Optional[OrderStatus] = None
    payment_method: Optional[PaymentMethod] = None


class ReportStats(BaseModel):
    total_sales: float = 0
    total_orders: int = 0
    total_quantity: int = 0
    average_order_value: float = 0


class ReportData(BaseModel):
    total: int
    items: List[TransactionDetail]
    stats: ReportStats


class SalesPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class SalesReportRow(BaseModel):
    period: str
    total_sales: float
    total_orders: int
    total_quantity: int


class TopCustomerRow(BaseModel):
    customer_id: int
    customer_name: str
    total_orders: int
    total_spent: float
    last_order_date: datetime


class ProductPerformanceRow(BaseModel):
    jersey_name: str
    jersey_size: str
    total_quantity: int
    total_sales: float
    order_count: int


class DashboardStats(BaseModel):
    daily_sales: float
    weekly_sales: float
    monthly_sales: float
    new_customers_count: int
    pending_orders: int
    in_process_orders: int
    completed_orders: int
    returned_orders: int
    total_orders: int


# Settings


class ShopSettingsOut(BaseModel):
    id: int
    shop_name: str
    shop_address: str
    shop_phone: str
    receipt_template: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShopSettingsUpdate(BaseModel):
    shop_name: Optional[str] = Field(None, min_length=1, max_length=120)
    shop_address: Optional[str] = Field(None, min_length=1)
    shop_phone: Optional[str] = Field(None, min_length=1, max_length=32)
    receipt_template: Optional[str] = None

    @model_validator(mode="after")
    def columns_not_null(self):
        _reject_explicit_nulls(self, ("shop_name", "shop_address", "shop_phone", "receipt_template"))
        return self


class ReceiptTemplate(BaseModel):
    template: str
