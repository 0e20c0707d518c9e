from .unit_of_work import SqlAlchemyUnitOfWork
from .auth_service import HostedAuthService, StaticAuthService
from .pdf_service import PlaywrightPdfService
from .render_client import HttpRenderClient
from .document_capture import SoupDocumentCapture
from .invoice_view import JinjaInvoiceView

__all__ = [
    "SqlAlchemyUnitOfWork",
    "HostedAuthService",
    "StaticAuthService",
    "PlaywrightPdfService",
    "HttpRenderClient",
    "SoupDocumentCapture",
    "JinjaInvoiceView",
]
