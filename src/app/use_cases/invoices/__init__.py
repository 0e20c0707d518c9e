"""Invoice use cases"""
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .delete_invoice import DeleteInvoice
from .generate_invoice_number import GenerateInvoiceNumber
from .export_invoice_pdf import ExportInvoicePdf
from .generate_pdf import GeneratePdf
from .line_item_inserter import LineItemInserter, LineItemInsertError
from .dtos import (
    LineItemDTO,
    LineItemResponseDTO,
    InvoiceCommandDTO,
    InvoiceResponseDTO,
    InvoiceNumberResponseDTO,
    PdfArtifactDTO,
    GeneratePdfCommandDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoice",
    "GetInvoice",
    "ListInvoices",
    "DeleteInvoice",
    "GenerateInvoiceNumber",
    "ExportInvoicePdf",
    "GeneratePdf",
    "LineItemInserter",
    "LineItemInsertError",
    "LineItemDTO",
    "LineItemResponseDTO",
    "InvoiceCommandDTO",
    "InvoiceResponseDTO",
    "InvoiceNumberResponseDTO",
    "PdfArtifactDTO",
    "GeneratePdfCommandDTO",
]
