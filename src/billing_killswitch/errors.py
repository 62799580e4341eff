"""
Exception taxonomy for the kill switch.

Validation failures are never retried. Billing control-plane failures are
classified into permanent errors (bad request, forbidden, project not found)
and transient errors (everything else) by `classify_billing_error`.
"""
from typing import Any, List, Optional


class KillSwitchError(Exception):
    """Base class for all errors raised by the kill switch."""


class ValidationError(KillSwitchError):
    """The inbound envelope or its budget payload is malformed.

    Attributes:
        stage: One of "envelope", "decode" or "payload".
        field: Dotted path of the first failing field, if known.
        reason: Human readable description of the first failure.
        errors: Every mismatch reported for the stage.
    """

    def __init__(self, stage: str, reason: str, field: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.stage = stage
        self.field = field
        self.reason = reason
        self.errors = errors or []
        location = f" at '{field}'" if field else ""
        super().__init__(f"Invalid {stage}{location}: {reason}")


class BillingError(KillSwitchError):
    """A call to the Cloud Billing API failed."""

    retryable = False

    def __init__(self, message: str, code: Optional[int] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.code = code
        self.cause = cause


class PermanentBillingError(BillingError):
    """A failure that retrying cannot fix."""


class BillingRequestError(PermanentBillingError):
    """The request was rejected as malformed (HTTP 400)."""


class BillingPermissionError(PermanentBillingError):
    """The caller lacks permission on the project or billing account (HTTP 403)."""


class ProjectNotFoundError(PermanentBillingError):
    """The project does not exist (HTTP 404)."""


class TransientBillingError(BillingError):
    """A failure plausibly caused by temporary infrastructure conditions."""

    retryable = True


_PERMANENT_ERRORS = {
    400: BillingRequestError,
    403: BillingPermissionError,
    404: ProjectNotFoundError,
}

PERMANENT_STATUS_CODES = frozenset(_PERMANENT_ERRORS)


def classify_billing_error(exc: BaseException) -> BillingError:
    """Map an exception raised by the billing client onto the taxonomy.

    `google.api_core.exceptions.GoogleAPICallError` carries the HTTP status in
    `code`. Anything without a recognised permanent status is transient.
    """
    if isinstance(exc, BillingError):
        return exc

    code = getattr(exc, "code", None)
    if not isinstance(code, int) or isinstance(code, bool):
        code = None

    error_class = _PERMANENT_ERRORS.get(code, TransientBillingError)
    return error_class(str(exc) or type(exc).__name__, code=code, cause=exc)
