"""Exceptions raised by adapters

Use cases catch these at their boundary and turn them into Result errors.
"""


class LineItemRoutineUnavailableError(Exception):
    """The store has no batch insert routine for line items"""


class RenderTimeoutError(Exception):
    """The headless browser did not finish loading the document in time"""


class RenderFailureError(Exception):
    """The headless browser failed to launch, lay out or print the document"""


class RenderServiceError(Exception):
    """The rendering service answered with a non-success status"""

    def __init__(self, message: str, status_code: int = None, details: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class InvalidArtifactError(Exception):
    """The rendering service returned an empty or non-PDF payload"""
