"""
Decode and validate an inbound Pub/Sub envelope into a `BudgetAlert`.

Validation runs in three stages and stops at the first one that fails:

1. ``envelope``: the raw event data must match `PubSubEnvelope`.
2. ``decode``: ``message.data`` must be strict base64 of UTF-8 JSON text.
3. ``payload``: the decoded JSON must match `BudgetAlert`.
"""
import base64
import binascii
import json
from typing import Any

import pydantic

from billing_killswitch.errors import ValidationError
from billing_killswitch.schemas import BudgetAlert, PubSubEnvelope


def _to_validation_error(stage: str, error: pydantic.ValidationError) -> ValidationError:
    details = error.errors(include_url=False)
    first = details[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    return ValidationError(stage, first["msg"], field=field, errors=details)


def parse_envelope(raw: Any) -> PubSubEnvelope:
    try:
        return PubSubEnvelope.model_validate(raw)
    except pydantic.ValidationError as e:
        raise _to_validation_error("envelope", e) from e


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def decode_payload(data: str) -> Any:
    """Base64-decode `data` and parse the result as JSON.

    `NaN`, `Infinity` and `-Infinity` are rejected; they are not JSON.
    """
    try:
        text = base64.b64decode(data, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise ValidationError("decode", f"message data is not valid base64 UTF-8 text: {e}", field="message.data") from e

    if not text:
        raise ValidationError("decode", "message data decodes to empty text", field="message.data")

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ValidationError("decode", f"message data is not valid JSON: {e}", field="message.data") from e


def parse_budget_alert(payload: Any) -> BudgetAlert:
    try:
        return BudgetAlert.model_validate(payload)
    except pydantic.ValidationError as e:
        raise _to_validation_error("payload", e) from e


def validate(raw: Any) -> BudgetAlert:
    """Validate raw CloudEvent data and return the budget alert it carries.

    Raises:
        ValidationError: if any stage fails. The error's `stage` says which.
    """
    envelope = parse_envelope(raw)
    payload = decode_payload(envelope.message.data)
    return parse_budget_alert(payload)
