"""Invoice API Routes

FastAPI routes for invoice management and PDF export.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.app.services.auth_service import AuthService
from src.app.use_cases.invoices import (
    CreateInvoice,
    DeleteInvoice,
    ExportInvoicePdf,
    GenerateInvoiceNumber,
    GetInvoice,
    InvoiceCommandDTO,
    InvoiceNumberResponseDTO,
    InvoiceResponseDTO,
    ListInvoices,
    UpdateInvoice,
)
from src.app.use_cases.invoices.errors import (
    INVALID_ARTIFACT,
    INVOICE_NOT_FOUND,
    RENDER_SERVICE_ERROR,
    UNAUTHENTICATED,
    VALIDATION_ERROR,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.services.document_capture import SoupDocumentCapture
from src.adapter.services.invoice_view import JinjaInvoiceView
from src.adapter.services.render_client import HttpRenderClient
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import (
    get_auth_service,
    get_document_capture,
    get_invoice_view,
    get_render_client,
    get_session,
)
from src.api.error import ClientError
from src.api.responses import attachment_disposition

router = APIRouter(prefix="/invoices", tags=["Invoices"])

ERROR_STATUS = {
    UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    INVOICE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    INVALID_ARTIFACT: status.HTTP_502_BAD_GATEWAY,
    RENDER_SERVICE_ERROR: status.HTTP_502_BAD_GATEWAY,
}

NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": "Invoice with ID 5f0c... not found"
                }
            }
        }
    }
}


def _client_error(error: Error) -> ClientError:
    return ClientError(
        error, status_code=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    )


def _line_item_repo(session: AsyncSession) -> SqlAlchemyLineItemRepository:
    return SqlAlchemyLineItemRepository(session, ApplicationConfig.LINE_ITEMS_ROUTINE)


def _create_use_case(session: AsyncSession, auth_service: AuthService) -> CreateInvoice:
    return CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        _line_item_repo(session),
        auth_service,
        verify_attempts=ApplicationConfig.VERIFY_ATTEMPTS,
        verify_backoff_seconds=ApplicationConfig.VERIFY_BACKOFF_SECONDS,
        line_item_attempts=ApplicationConfig.LINE_ITEM_INSERT_ATTEMPTS,
        line_item_backoff_seconds=ApplicationConfig.LINE_ITEM_BACKOFF_SECONDS,
    )


@router.get("", response_model=List[InvoiceResponseDTO])
async def list_invoices(
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """List the current user's invoices, newest first, with line items and totals."""
    use_case = ListInvoices(
        SqlAlchemyInvoiceRepository(session), _line_item_repo(session), auth_service
    )
    result = await use_case.execute()
    if result.is_err():
        raise _client_error(result.error)
    return result.value


@router.get("/next-number", response_model=InvoiceNumberResponseDTO)
async def next_invoice_number(
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Suggest the next invoice number for today.

    Format is `YYYYMMDD` followed by a sequence of at least three digits.
    """
    use_case = GenerateInvoiceNumber(SqlAlchemyInvoiceRepository(session), auth_service)
    result = await use_case.execute()
    if result.is_err():
        raise _client_error(result.error)
    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session), _line_item_repo(session), auth_service
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise _client_error(result.error)
    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "At least one line item is required"
                        }
                    }
                }
            }
        },
        500: {
            "description": "Invoice could not be persisted consistently",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PERSISTENCE_INCONSISTENCY",
                            "message": "Failed to insert line items. Invoice has been rolled back."
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: InvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Create an invoice with its line items.

    The invoice row is written first and read back before line items are
    inserted. If line items cannot be stored the invoice row is deleted again,
    so a failed request leaves nothing behind.

    **Returns:**
    - 201: Invoice created, with computed totals
    - 400: Required fields missing or no line items
    - 401: No authenticated user
    - 500: Persistence failed (nothing was kept)
    """
    result = await _create_use_case(session, auth_service).execute(request)
    if result.is_err():
        raise _client_error(result.error)
    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def update_invoice(
    invoice_id: str,
    request: InvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Update an invoice and replace its line items.

    An invoice that was never persisted (no `created_at`) and cannot be found
    is created instead.
    """
    command = request.model_copy(update={"id": invoice_id})
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        _line_item_repo(session),
        auth_service,
        create_invoice=_create_use_case(session, auth_service),
        line_item_attempts=ApplicationConfig.LINE_ITEM_INSERT_ATTEMPTS,
        line_item_backoff_seconds=ApplicationConfig.LINE_ITEM_BACKOFF_SECONDS,
    )
    result = await use_case.execute(command)
    if result.is_err():
        raise _client_error(result.error)
    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: NOT_FOUND_RESPONSE},
)
async def delete_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session), auth_service
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise _client_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/preview",
    response_class=HTMLResponse,
    responses={404: NOT_FOUND_RESPONSE},
)
async def preview_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
    invoice_view: JinjaInvoiceView = Depends(get_invoice_view),
):
    """Render the printable invoice page."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session), _line_item_repo(session), auth_service
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise _client_error(result.error)
    return HTMLResponse(invoice_view.render(result.value))


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_RESPONSE,
        502: {
            "description": "Rendering service failed or returned an invalid file",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_ARTIFACT",
                            "message": "Generated file is not a valid PDF"
                        }
                    }
                }
            }
        }
    }
)
async def download_invoice_pdf(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
    invoice_view: JinjaInvoiceView = Depends(get_invoice_view),
    document_capture: SoupDocumentCapture = Depends(get_document_capture),
    render_client: HttpRenderClient = Depends(get_render_client),
):
    """
    Download the invoice as `Invoice-<number>.pdf`.

    The invoice page is captured as a standalone document and printed by the
    rendering service. The response is only sent when the service returned a
    real PDF.
    """
    use_case = ExportInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        _line_item_repo(session),
        auth_service,
        invoice_view,
        document_capture,
        render_client,
        base_url=ApplicationConfig.PUBLIC_BASE_URL,
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise _client_error(result.error)

    artifact = result.value
    return Response(
        content=artifact.content,
        media_type="application/pdf",
        headers={"Content-Disposition": attachment_disposition(artifact.filename)},
    )
