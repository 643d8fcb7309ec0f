"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes hold no store logic: they build a message and send it to the worker pool
"""
