"""Rendering Service Routes

HTML in, PDF out. Callers send a self-contained document; nothing is fetched
on their behalf except what the document itself references.
"""

import base64
import json
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from config import ApplicationConfig
from src.api.responses import attachment_disposition
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoices import GeneratePdf, GeneratePdfCommandDTO
from src.app.use_cases.invoices.errors import VALIDATION_ERROR
from src.depends import get_pdf_service

router = APIRouter(tags=["Rendering"])

RENDER_PATH = ApplicationConfig.RENDER_SERVICE_PATH

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def _read_command(request: Request) -> GeneratePdfCommandDTO:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = {}
    if not isinstance(body, dict):
        body = {}

    html = body.get("html")
    filename = body.get("filename") or "invoice.pdf"
    return GeneratePdfCommandDTO(
        html=html if isinstance(html, str) else None,
        filename=str(filename),
    )


@router.post(
    RENDER_PATH,
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        400: {
            "description": "Missing HTML",
            "content": {"application/json": {"example": {"error": "HTML content is required"}}}
        },
        500: {
            "description": "Rendering failed",
            "content": {
                "application/json": {
                    "example": {"error": "Failed to generate PDF", "details": "Timeout 30000ms exceeded."}
                }
            }
        }
    }
)
async def generate_pdf(request: Request, pdf_service: PdfService = Depends(get_pdf_service)):
    """
    Render a standalone HTML document to an A4 PDF.

    **Request body:**
    - `html` (required): Complete HTML document, styles and images inlined
    - `filename` (optional): Download name, defaults to `invoice.pdf`

    **Returns:**
    - 200: `application/pdf` attachment, or its base64 text with
      `X-Content-Encoding: base64` when the service runs in base64 mode
    - 400: `html` missing or empty
    - 500: Browser failed to render the document
    """
    command = await _read_command(request)
    result = await GeneratePdf(pdf_service).execute(command)

    if result.is_err():
        if result.error.code == VALIDATION_ERROR:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": result.error.message},
                headers=CORS_HEADERS,
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": result.error.message, "details": result.error.reason},
            headers=CORS_HEADERS,
        )

    artifact = result.value
    headers = {
        **CORS_HEADERS,
        "Content-Disposition": attachment_disposition(artifact.filename),
        "Cache-Control": "no-cache",
    }

    if ApplicationConfig.RENDER_RESPONSE_ENCODING == "base64":
        body = base64.b64encode(artifact.content)
        headers["X-Content-Encoding"] = "base64"
        headers["Content-Length"] = str(len(body))
        return Response(content=body, media_type="application/pdf", headers=headers)

    headers["Content-Length"] = str(len(artifact.content))
    return Response(content=artifact.content, media_type="application/pdf", headers=headers)


@router.options(RENDER_PATH, include_in_schema=False)
async def generate_pdf_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.api_route(
    RENDER_PATH,
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def generate_pdf_method_not_allowed():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers=CORS_HEADERS,
    )
