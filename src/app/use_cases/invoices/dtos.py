"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

import datetime as dt
import os
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class LineItemDTO(BaseModel):
    """
    Line item as supplied by the client

    The id is informational only; stored line items always get fresh ids
    because the set is replaced wholesale on every save.
    """

    id: Optional[str] = Field(default=None, description="Client-side identifier")
    item_name: str = Field(default="", description="Item name")
    description: str = Field(default="", description="Free text description")
    size: str = Field(default="", description="Size or variant")
    quantity: int = Field(default=1, ge=1, description="Quantity (>= 1)")
    unit_cost: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=18, decimal_places=2, description="Cost per unit (>= 0)"
    )


class LineItemResponseDTO(LineItemDTO):
    line_total: Decimal = Field(..., description="quantity * unit_cost")


class InvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating or updating an invoice

    created_at is only present on invoices that were loaded from the store,
    which is how an update tells a persisted invoice from an unsaved draft.
    """

    id: Optional[str] = Field(default=None, description="Invoice identifier (client-generated for drafts)")
    invoice_number: str = Field(default="", description="Invoice number (YYYYMMDDnnn)")
    date: Optional[dt.date] = Field(default=None, description="Invoice date (defaults to today)")
    due_date: Optional[dt.date] = Field(default=None, description="Payment due date")
    business_name: str = Field(default="")
    business_email: str = Field(default="")
    business_phone: str = Field(default="")
    business_address: str = Field(default="")
    customer_name: str = Field(default="")
    customer_email: str = Field(default="")
    customer_address: str = Field(default="")
    line_items: List[LineItemDTO] = Field(default_factory=list)
    notes: str = Field(default="")
    tax_rate: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=9, decimal_places=4, description="Tax rate in percent"
    )
    discount: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=18, decimal_places=2, description="Absolute discount"
    )
    advance_paid: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=18, decimal_places=2, description="Advance payment"
    )
    created_at: Optional[dt.datetime] = Field(default=None)
    updated_at: Optional[dt.datetime] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_number": "20240131001",
                "date": "2024-01-31",
                "due_date": "2024-02-15",
                "business_name": "Acme Supplies",
                "business_email": "billing@acme.example",
                "customer_name": "Jane Doe",
                "line_items": [
                    {"item_name": "T-shirt", "size": "M", "quantity": 2, "unit_cost": "450.00"}
                ],
                "tax_rate": "5",
                "discount": "50.00",
                "advance_paid": "200.00",
            }
        }


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for a fully hydrated invoice

    subtotal, tax, total and due are computed on read and never stored.
    """

    id: str
    invoice_number: str
    date: dt.date
    due_date: Optional[dt.date] = None
    business_name: str
    business_email: str = ""
    business_phone: str = ""
    business_address: str = ""
    customer_name: str
    customer_email: str = ""
    customer_address: str = ""
    line_items: List[LineItemResponseDTO]
    notes: str = ""
    tax_rate: Decimal
    discount: Decimal
    advance_paid: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    due: Decimal
    created_at: dt.datetime
    updated_at: dt.datetime


class InvoiceNumberResponseDTO(BaseModel):
    invoice_number: str = Field(..., description="Next free invoice number for today")


class PdfArtifactDTO(BaseModel):
    """Validated PDF ready to be handed to the user"""

    filename: str
    content: bytes

    def save_to(self, directory: str) -> str:
        """
        Write the PDF into directory under its filename

        Returns:
            Path of the written file
        """
        path = os.path.join(directory, self.filename)
        with open(path, "wb") as w_file:
            w_file.write(self.content)
        return path


class GeneratePdfCommandDTO(BaseModel):
    """Rendering service request body"""

    html: Optional[str] = Field(default=None, description="Self-contained HTML document")
    filename: str = Field(default="invoice.pdf", description="Download name of the PDF")
