from .unit_of_work import UnitOfWork
from .auth_service import AuthService, AuthUser, AuthSession
from .pdf_service import PdfService
from .render_client import RenderClient
from .document_capture import DocumentCapture
from .invoice_view import InvoiceView

__all__ = [
    "UnitOfWork",
    "AuthService",
    "AuthUser",
    "AuthSession",
    "PdfService",
    "RenderClient",
    "DocumentCapture",
    "InvoiceView",
]
