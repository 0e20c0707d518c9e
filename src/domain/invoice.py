"""Invoice Domain Entity

One row per invoice, scoped to the principal that owns it.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, DateTime, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid, utc_now


class Invoice(BaseModel, table=True):
    """
    Invoice - Customer invoice issued by a small business

    Domain Rules:
    - invoice_number is unique per owner per day prefix (YYYYMMDDnnn)
    - invoice_number, business_name and customer_name are mandatory
    - Line items live in line_items and are replaced wholesale on update
    - Financial totals are derived, never stored (see src.domain.financials)
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_user_id_invoice_number', 'user_id', 'invoice_number'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
        description="Invoice identifier (UUID text, may be generated by the client)"
    )

    user_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Owning principal"
    )

    invoice_number: str = Field(
        sa_column=Column(String(32), nullable=False),
        description="Invoice number (e.g., 20240131001)"
    )

    date: dt.date = Field(
        default_factory=dt.date.today,
        sa_column=Column(Date, nullable=False),
        description="Invoice date"
    )

    due_date: Optional[dt.date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    business_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Issuing business name"
    )

    business_email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    business_phone: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))
    business_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    customer_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Billed customer name"
    )

    customer_email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    customer_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(9, 4), nullable=False),
        description="Tax rate in percent"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Absolute discount amount"
    )

    advance_paid: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount already paid in advance"
    )

    created_at: dt.datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: dt.datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp"
    )
