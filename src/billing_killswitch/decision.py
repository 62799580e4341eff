"""Pure decision rules applied to a validated budget alert."""

ALERT_SUFFIX = "-alert"


def extract_project_id(budget_display_name: str) -> str:
    """Derive the project ID from a budget named `<projectId>-alert`.

    A single trailing marker is removed. Names without the marker are returned
    unchanged; a malformed ID is left for the Cloud Billing API to reject.
    """
    if budget_display_name.endswith(ALERT_SUFFIX):
        return budget_display_name[: -len(ALERT_SUFFIX)]
    return budget_display_name


def is_over_budget(cost_amount: float, budget_amount: float) -> bool:
    """Spend equal to the budget is not over budget."""
    return cost_amount > budget_amount


def project_name(project_id: str) -> str:
    return f"projects/{project_id}"
