"""
This module defines project-wide test fixtures for pytest.

Fixtures defined here are automatically available to all tests in the project
without needing to be imported.
"""
import base64
import json
from unittest.mock import create_autospec

import pytest

from billing_killswitch.billing import BillingControlClient


@pytest.fixture(scope="session", autouse=True)
def cleanup_logging(request):
    """
    This fixture closes the Cloud Logging client at the end of the test session,
    preventing the 'CloudLoggingHandler shutting down' warning.
    """
    # Code before the yield statement is the setup phase (runs before tests).
    yield
    # Code after the yield statement is the teardown phase (runs after all tests).

    # We import here, within the teardown phase, to ensure that the application
    # module (main) has been fully loaded by the time we need to access it.
    from main import logging_client

    if logging_client is not None:
        logging_client.close()


@pytest.fixture
def budget_alert_factory():
    """Factory for a valid budget notification payload, with optional overrides."""
    def _create_budget_alert(**overrides):
        alert = {
            "budgetDisplayName": "test-project-alert",
            "costAmount": 2000,
            "costIntervalStart": "2026-02-01T00:00:00Z",
            "budgetAmount": 1500,
            "budgetAmountType": "SPECIFIED_AMOUNT",
            "alertThresholdExceeded": 0.5,
            "currencyCode": "USD",
        }
        alert.update(overrides)
        return alert

    return _create_budget_alert


@pytest.fixture
def event_data_factory(budget_alert_factory):
    """Factory for the data of a Pub/Sub CloudEvent carrying a budget notification."""
    # This simulates the structure of a Pub/Sub message delivered as a CloudEvent.
    def _create_event_data(payload=None, **alert_overrides):
        if payload is None:
            payload = budget_alert_factory(**alert_overrides)
        return {
            "message": {
                "data": base64.b64encode(json.dumps(payload).encode("utf-8")).decode("utf-8"),
                "messageId": "test-msg-123",
                "publishTime": "2026-02-01T12:00:00Z",
            },
            "subscription": "projects/test/subscriptions/billing-alerts-sub",
            "deliveryAttempt": 1,
        }

    return _create_event_data


@pytest.fixture
def mock_billing():
    """A BillingControlClient stand-in that reports billing as enabled."""
    billing = create_autospec(BillingControlClient, instance=True)
    billing.get_billing_enabled.return_value = True
    return billing


@pytest.fixture
def sleeps():
    """Backoff waits, recorded instead of slept. Pass `sleeps.append` as the sleep function."""
    return []
