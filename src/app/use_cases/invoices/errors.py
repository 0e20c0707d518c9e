"""Error codes shared by the invoice use cases"""

from libs.result import Error

UNAUTHENTICATED = "UNAUTHENTICATED"
VALIDATION_ERROR = "VALIDATION_ERROR"
INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
PERSISTENCE_INCONSISTENCY = "PERSISTENCE_INCONSISTENCY"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
INVALID_ARTIFACT = "INVALID_ARTIFACT"
RENDER_SERVICE_ERROR = "RENDER_SERVICE_ERROR"
RENDER_TIMEOUT = "RENDER_TIMEOUT"
RENDER_FAILURE = "RENDER_FAILURE"


def unauthenticated() -> Error:
    return Error(
        code=UNAUTHENTICATED,
        message="User not authenticated",
        reason="No principal could be resolved from the current session",
    )


def invoice_not_found(invoice_id: str) -> Error:
    return Error(
        code=INVOICE_NOT_FOUND,
        message=f"Invoice with ID {invoice_id} not found",
        reason="Invoice does not exist or belongs to another user",
    )
