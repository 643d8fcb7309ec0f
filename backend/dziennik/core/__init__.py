"""Core Layer — message protocol, domain types and the error hierarchy.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Nothing in core/ performs IO
"""
