"""
Processes one budget alert: validate, decide, then check-then-act against
Cloud Billing.

Billing status is read before disabling so that redelivered or duplicate
alerts for an already disabled project make no mutating call. Two concurrent
deliveries may both disable; disabling twice has no further effect.

**⚠️ Warning: This is a destructive action.** Disconnecting a project from its
billing account will stop all paid services.
"""
import enum
import logging
import time
from typing import Any

from billing_killswitch.billing import BillingControlClient
from billing_killswitch.decision import extract_project_id, is_over_budget, project_name
from billing_killswitch.validation import validate


class Outcome(str, enum.Enum):
    UNDER_BUDGET = "under_budget"
    ALREADY_DISABLED = "already_disabled"
    DISABLED = "disabled"
    SIMULATED = "simulated"


def _delivery_attempt(event_data: dict):
    delivery_attempt = event_data.get("deliveryAttempt")
    return 1 if delivery_attempt is None else delivery_attempt


def _message_info(event_data: Any):
    """Best-effort message ID and delivery attempt for log lines, before validation."""
    if not isinstance(event_data, dict):
        return "unknown", 1
    message = event_data.get("message")
    message_id = message.get("messageId") if isinstance(message, dict) else None
    return message_id or "unknown", _delivery_attempt(event_data)


def process_budget_alert(event_data: Any, billing: BillingControlClient, simulate: bool = False) -> Outcome:
    """Disable billing for the alert's project if its cost exceeds the budget.

    Args:
        event_data: The `data` of the Pub/Sub CloudEvent.
        billing: Client used for the status lookup and the disable call.
        simulate: Log the disable instead of performing it.

    Returns:
        The terminal state reached for this delivery.

    Raises:
        ValidationError: if the envelope or payload is malformed.
        BillingError: if billing status or disable could not be completed.
    """
    start_time = time.monotonic()
    message_id, delivery_attempt = _message_info(event_data)
    logging.info(f"[{message_id}] Processing billing alert (delivery attempt {delivery_attempt}).")

    try:
        budget_alert = validate(event_data)
        project_id = extract_project_id(budget_alert.budgetDisplayName)
        name = project_name(project_id)
        cost_amount = budget_alert.costAmount
        budget_amount = budget_alert.budgetAmount

        logging.info(
            f"[{message_id}] Budget details: project={project_id} cost={cost_amount} "
            f"budget={budget_amount} currency={budget_alert.currencyCode}"
        )

        if not is_over_budget(cost_amount, budget_amount):
            logging.info(f"[{message_id}] Cost ({cost_amount}) has not exceeded budget ({budget_amount}). No action taken.")
            return Outcome.UNDER_BUDGET

        logging.warning(f"[{message_id}] Cost {cost_amount} has exceeded budget {budget_amount} for project {project_id}.")

        # None means the flag was absent from the response
        if not billing.get_billing_enabled(name):
            logging.info(f"[{message_id}] Billing is already disabled for project {project_id}. No action taken.")
            return Outcome.ALREADY_DISABLED

        if simulate:
            logging.info(f"[{message_id}] SIMULATION MODE: Billing would have been disabled for project {project_id}.")
            return Outcome.SIMULATED

        logging.info(f"[{message_id}] Disabling billing for {project_id}...")
        billing.disable_billing(name)
    except Exception as e:
        logging.exception(f"[{message_id}] Error processing alert: {e}")
        raise

    elapsed_ms = int((time.monotonic() - start_time) * 1000)
    logging.info(f"[{message_id}] Successfully disabled billing for project {name} in {elapsed_ms}ms")
    return Outcome.DISABLED
