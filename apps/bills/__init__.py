"""
Bills App - Receipt Scanning and Settlement

This app turns a scanned receipt into a draft bill, lets the user assign
line items to people, and computes what each participant owes including a
proportional share of tax and service charge.

Key Features:
- AI receipt extraction into an unassigned draft
- Per-item assignment with live per-person totals
- Proportional tax and service-charge allocation
- Immutable settled bill records

Architecture:
- Money: Decimal helpers (money.py)
- Domain: draft and snapshot value types (domain.py)
- Models: Bill, BillItem
- Services: settlement, assignment (BillEditor), ingestion, bill management
"""
