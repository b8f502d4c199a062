"""SQLAlchemy models."""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .database import Base
from .timeutils import local_now


class PaymentMethod(str, enum.Enum):
    COD = "COD"
    CASH = "Cash"
    TRANSFER = "Transfer"
    SHOPEE = "Shopee"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROCESS = "in_process"
    COMPLETED = "completed"
    RETURNED = "returned"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class TimestampMixin:
    created_at = Column(DateTime, default=local_now, nullable=False)
    updated_at = Column(DateTime, default=local_now, onupdate=local_now, nullable=False)


class Customer(TimestampMixin, Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    phone = Column(String(32), nullable=False)
    address = Column(Text, nullable=False)
    city = Column(String(64), nullable=False)
    province = Column(String(64), nullable=False)
    notes = Column(Text, nullable=True)

    transactions = relationship("Transaction", back_populates="customer", passive_deletes="all")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Customer id={self.id} name={self.name!r}>"


class Courier(TimestampMixin, Base):
    __tablename__ = "couriers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    code = Column(String(32), nullable=False)
    notes = Column(Text, nullable=True)

    transactions = relationship("Transaction", back_populates="courier", passive_deletes="all")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Courier id={self.id} code={self.code!r}>"


class Transaction(TimestampMixin, Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    jersey_name = Column(String(160), nullable=False, index=True)
    jersey_size = Column(String(16), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    total_payment = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(
        Enum(
            PaymentMethod,
            name="payment_method",
            values_callable=_enum_values,
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
    )
    courier_id = Column(Integer, ForeignKey("couriers.id"), nullable=True, index=True)
    order_status = Column(
        Enum(
            OrderStatus,
            name="order_status",
            values_callable=_enum_values,
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    transaction_date = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    customer = relationship("Customer", back_populates="transactions")
    courier = relationship("Courier", back_populates="transactions")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Transaction id={self.id} status={self.order_status}>"


class ShopSettings(TimestampMixin, Base):
    __tablename__ = "shop_settings"

    id = Column(Integer, primary_key=True, index=True)
    shop_name = Column(String(120), nullable=False)
    shop_address = Column(Text, nullable=False, default="")
    shop_phone = Column(String(32), nullable=False, default="")
    receipt_template = Column(Text, nullable=False, default="")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<ShopSettings id={self.id} shop_name={self.shop_name!r}>"
