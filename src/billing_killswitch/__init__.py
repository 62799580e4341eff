"""
Budget-alert driven kill switch that detaches a Google Cloud project from its
billing account once spend exceeds the budget.
"""
