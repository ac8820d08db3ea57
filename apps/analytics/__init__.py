"""
Analytics App - Spending Statistics

Read-only aggregation over settled bills for the dashboard.
"""
