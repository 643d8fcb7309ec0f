"""Infrastructure Layer — store engine, password hashing, logging and error sink.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
