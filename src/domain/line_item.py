"""Line Item Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid, utc_now


class LineItem(BaseModel, table=True):
    """
    Line Item - Individual entry on an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice and dies with it
    - line_total = quantity * unit_cost
    - position keeps the order in which the items were supplied
    """

    __tablename__ = "line_items"
    __table_args__ = (
        Index('ix_line_items_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    item_name: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False),
    )

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    size: Optional[str] = Field(default=None, sa_column=Column(String(64), nullable=True))

    quantity: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False),
    )

    unit_cost: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    position: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False),
        description="Zero-based order within the invoice"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_cost)
