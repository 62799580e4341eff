"""Cloud Billing API calls used by the kill switch, each wrapped in a bounded retry."""
import logging
import time
from typing import Callable, Optional

from google.cloud import billing_v1

from billing_killswitch.errors import classify_billing_error
from billing_killswitch.retry import DEFAULT_RETRY_POLICY, RetryPolicy, call_with_retry


class BillingControlClient:
    """Reads and disables billing for a project.

    The underlying `CloudBillingClient` is created on first use, so constructing
    this class does not require credentials.
    """

    def __init__(
        self,
        client: Optional[billing_v1.CloudBillingClient] = None,
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._client = client
        self._policy = policy
        self._sleep = sleep

    def _get_client(self) -> billing_v1.CloudBillingClient:
        if self._client is None:
            self._client = billing_v1.CloudBillingClient()
        return self._client

    # The GAPIC client has its own default retry for DeadlineExceeded and ServiceUnavailable.
    # Calls pass retry=None so the RetryPolicy is the only schedule.
    def _call(self, operation, name: str):
        return call_with_retry(operation, classify_billing_error, policy=self._policy, name=name, sleep=self._sleep)

    def get_billing_enabled(self, project_name: str) -> Optional[bool]:
        """Return the project's `billingEnabled` flag, or None if the response has none.

        Args:
            project_name: Resource name of the form `projects/<projectId>`.
        """

        def lookup():
            billing_info = self._get_client().get_project_billing_info(name=project_name, retry=None)
            return getattr(billing_info, "billing_enabled", None)

        return self._call(lookup, "get_billing_enabled")

    def disable_billing(self, project_name: str) -> None:
        """Disable billing for a project by removing its billing account.

        Args:
            project_name: Resource name of the form `projects/<projectId>`.
        """

        # Find more information about `updateBillingInfo` API method here:
        # https://cloud.google.com/billing/docs/reference/rest/v1/projects/updateBillingInfo
        def update():
            # To disable billing set the `billing_account_name` field to empty
            project_billing_info = billing_v1.ProjectBillingInfo(billing_account_name="")
            self._get_client().update_project_billing_info(
                name=project_name, project_billing_info=project_billing_info, retry=None
            )

        self._call(update, "disable_billing")
        logging.info(f"Billing disabled for {project_name}")
