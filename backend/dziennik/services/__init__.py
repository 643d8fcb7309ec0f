"""Services Layer — store operations and the database worker pool.

Invariants:
    - Store operations are blocking and run only on database worker threads
    - Message -> operation dispatch uses an explicit dict mapping (no auto-discovery)
"""
