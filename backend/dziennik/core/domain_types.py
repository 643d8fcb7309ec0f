"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - StudentId wraps the store-assigned integer primary key
    - STUDENT_ID_MIN..STUDENT_ID_MAX is the range a path segment may carry
      (signed 32-bit column)
"""

from typing import NewType

StudentId = NewType("StudentId", int)

STUDENT_ID_MIN = -2_147_483_648
STUDENT_ID_MAX = 2_147_483_647
