"""
Pydantic models for the Pub/Sub push envelope and the Cloud Billing budget
notification it carries.

See https://cloud.google.com/billing/docs/how-to/budgets-programmatic-notifications
for the notification format. Fields not modelled here are ignored.
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class PubSubMessage(BaseModel):
    data: StrictStr = Field(min_length=1, description="Base64-encoded budget notification")
    messageId: StrictStr
    publishTime: StrictStr
    attributes: Optional[Dict[StrictStr, StrictStr]] = None


class PubSubEnvelope(BaseModel):
    """The `data` of a `google.cloud.pubsub.topic.v1.messagePublished` CloudEvent."""

    message: PubSubMessage
    subscription: StrictStr
    deliveryAttempt: Optional[StrictInt] = Field(default=None, ge=0)


class BudgetAlert(BaseModel):
    """A budget notification published by Cloud Billing."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    budgetDisplayName: str = Field(min_length=1)
    costAmount: float = Field(ge=0)
    costIntervalStart: str
    budgetAmount: float = Field(gt=0)
    budgetAmountType: str
    alertThresholdExceeded: float
    currencyCode: str = Field(min_length=3, max_length=3)
