"""
Google Cloud Function that disables billing for a project whose budget has
been exceeded.

The function is triggered by a Pub/Sub message published by a Cloud Billing
budget alert. The budget must be named `<projectId>-alert`; the project ID is
taken from the budget's display name. When the alert's `costAmount` is greater
than its `budgetAmount`, the function checks whether billing is still enabled
for the project and, if so, uses the Cloud Billing API to detach the project
from its billing account.

The Pub/Sub message payload (base64-encoded JSON) is expected to contain:

  - `budgetDisplayName` (str): `<projectId>-alert`.
  - `costAmount` (float): The amount of cost that has been incurred.
  - `budgetAmount` (float): The budgeted amount.
  - `costIntervalStart`, `budgetAmountType`, `alertThresholdExceeded`, `currencyCode`.

Environment variables:

  - `LOG_LEVEL`: Python logging level name (default INFO).
  - `SIMULATE_DEACTIVATION`: set to "true" to log instead of disabling billing.

Failures are raised so that Pub/Sub can redeliver the message.

**⚠️ Warning: This is a destructive action.** Disconnecting a project from its billing account will
stop all paid services.
"""
import logging

import functions_framework
from cloudevents.http.event import CloudEvent

from billing_killswitch.billing import BillingControlClient
from billing_killswitch.config import load_settings
from billing_killswitch.handler import process_budget_alert
from billing_killswitch.logs import setup_logging

app_name = "billing-killswitch"

# Configure a Cloud Logging handler and integrate it with Python's logging module
logging_client = setup_logging(load_settings().log_level)

billing = BillingControlClient()


@functions_framework.cloud_event
def disable_billing_for_project(cloud_event: CloudEvent):
    """
    Cloud Function to disable billing for a project based on a Pub/Sub message from a budget alert.
    """
    logging.info(f"{app_name} Cloud Run Function invoked from Pub/Sub message.")
    settings = load_settings()
    process_budget_alert(cloud_event.data, billing, simulate=settings.simulate_deactivation)
