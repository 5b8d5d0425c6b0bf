"""Error taxonomy shared by both services.

Every error carries the HTTP status the handlers answer with, so a failure
raised deep in a lookup can be written to the response unchanged.
"""

from typing import Optional


class PipelineError(Exception):
    """Base error with a user-facing message and an HTTP status."""

    status_code = 500
    default_message = "internal error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidZipCodeError(PipelineError):
    """Input is not exactly 8 digits."""
    status_code = 422
    default_message = "invalid zipcode"


class ZipCodeNotFoundError(PipelineError):
    """Well-formed zipcode without a known city."""
    status_code = 404
    default_message = "can not find zipcode"


class MissingCredentialError(PipelineError):
    status_code = 400
    default_message = "no API key set"


class MalformedRequestError(PipelineError):
    """Request body could not be decoded. Answered as plain text."""
    status_code = 400
    default_message = "Invalid Request"


class UpstreamError(PipelineError):
    """External call answered with a non-success status, relayed verbatim."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"unexpected status code: {status_code}", status_code)


class InternalError(PipelineError):
    """Transport failure, undecodable body, anything unexpected."""
    status_code = 500


class RequestCancelled(Exception):
    """The inbound client went away before the pipeline finished."""
