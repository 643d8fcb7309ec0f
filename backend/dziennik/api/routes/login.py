"""Login Route — single credential check, no session or token issuance.

Invariants:
    - Correct credential → 200 {"authenticated": true, "username": str}
    - Wrong credential → 401 {"message": str}, never a 400/500
"""

from fastapi import APIRouter, Depends

from dziennik.api.dependencies import get_worker_pool
from dziennik.core.errors import InvalidCredentialsError
from dziennik.core.messages import Authenticate
from dziennik.schemas.auth import AuthOutcome, Credential
from dziennik.services.worker_pool import DatabaseWorkerPool

router = APIRouter(prefix="/api/login", tags=["auth"])


@router.post("", response_model=AuthOutcome)
async def login(
    body: Credential, pool: DatabaseWorkerPool = Depends(get_worker_pool),
):
    outcome = await pool.send(Authenticate(credential=body))
    if not outcome.authenticated:
        raise InvalidCredentialsError()
    return outcome
