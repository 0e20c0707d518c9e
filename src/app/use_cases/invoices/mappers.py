"""Conversions between invoice entities and DTOs"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from libs.result import Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.base import generate_uuid
from src.domain.financials import compute_totals
from src.domain.invoice import Invoice
from src.domain.line_item import LineItem
from .dtos import InvoiceCommandDTO, InvoiceResponseDTO, LineItemDTO, LineItemResponseDTO
from .errors import VALIDATION_ERROR


def validate_command(command: InvoiceCommandDTO) -> Optional[Error]:
    """Check the fields a create or update cannot do without"""
    if not command.invoice_number or not command.business_name or not command.customer_name:
        return Error(
            code=VALIDATION_ERROR,
            message="Missing required fields",
            reason="invoice_number, business_name and customer_name are required",
        )
    if not command.line_items:
        return Error(
            code=VALIDATION_ERROR,
            message="At least one line item is required",
            reason="line_items is empty",
        )
    return None


def invoice_columns(command: InvoiceCommandDTO) -> dict:
    """Column values for the invoices row; empty optional text is stored as NULL"""
    return {
        "invoice_number": command.invoice_number,
        "date": command.date or date.today(),
        "due_date": command.due_date,
        "business_name": command.business_name,
        "business_email": command.business_email or None,
        "business_phone": command.business_phone or None,
        "business_address": command.business_address or None,
        "customer_name": command.customer_name,
        "customer_email": command.customer_email or None,
        "customer_address": command.customer_address or None,
        "notes": command.notes or None,
        "tax_rate": command.tax_rate or Decimal("0"),
        "discount": command.discount or Decimal("0"),
        "advance_paid": command.advance_paid or Decimal("0"),
    }


def build_invoice(command: InvoiceCommandDTO, user_id: str) -> Invoice:
    return Invoice(id=command.id or generate_uuid(), user_id=user_id, **invoice_columns(command))


def build_line_items(invoice_id: str, line_items: List[LineItemDTO]) -> List[LineItem]:
    return [
        LineItem(
            invoice_id=invoice_id,
            item_name=item.item_name or "",
            description=item.description or None,
            size=item.size or None,
            quantity=item.quantity or 1,
            unit_cost=item.unit_cost or Decimal("0"),
            position=position,
        )
        for position, item in enumerate(line_items)
    ]


def to_line_item_dto(item: LineItem) -> LineItemDTO:
    return LineItemDTO(
        id=item.id,
        item_name=item.item_name,
        description=item.description or "",
        size=item.size or "",
        quantity=item.quantity,
        unit_cost=item.unit_cost,
    )


def to_response_dto(invoice: Invoice, line_items: List[LineItem]) -> InvoiceResponseDTO:
    totals = compute_totals(invoice, line_items)
    return InvoiceResponseDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        date=invoice.date,
        due_date=invoice.due_date,
        business_name=invoice.business_name,
        business_email=invoice.business_email or "",
        business_phone=invoice.business_phone or "",
        business_address=invoice.business_address or "",
        customer_name=invoice.customer_name,
        customer_email=invoice.customer_email or "",
        customer_address=invoice.customer_address or "",
        line_items=[
            LineItemResponseDTO(
                **to_line_item_dto(item).model_dump(),
                line_total=item.line_total,
            )
            for item in line_items
        ],
        notes=invoice.notes or "",
        tax_rate=invoice.tax_rate,
        discount=invoice.discount,
        advance_paid=invoice.advance_paid,
        subtotal=totals.subtotal,
        tax=totals.tax,
        total=totals.total,
        due=totals.due,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def group_by_invoice(line_items: List[LineItem]) -> Dict[str, List[LineItem]]:
    grouped: Dict[str, List[LineItem]] = defaultdict(list)
    for item in line_items:
        grouped[item.invoice_id].append(item)
    for items in grouped.values():
        items.sort(key=lambda item: item.position)
    return grouped


async def fetch_hydrated(
    invoice_repo: InvoiceRepository,
    line_item_repo: LineItemRepository,
    invoice_id: str,
    user_id: str,
) -> Optional[InvoiceResponseDTO]:
    """Load one owned invoice together with its line items"""
    invoice = await invoice_repo.get_by_id(invoice_id, user_id)
    if not invoice:
        return None
    line_items = await line_item_repo.get_by_invoice_id(invoice_id)
    return to_response_dto(invoice, line_items)
