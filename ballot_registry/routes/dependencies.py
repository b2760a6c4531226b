import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..election import Election
from ..errors import (
    AlreadyClosed,
    AlreadyRegistered,
    AlreadyVoted,
    CandidateNotRegistered,
    ElectionError,
    InsufficientFee,
    InvalidToken,
    LedgerError,
    StorageError,
    Unauthorized,
    VoterNotRegistered,
)
from ..security import decode_identity

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ERROR_STATUS = {
    AlreadyClosed: 409,
    AlreadyRegistered: 409,
    AlreadyVoted: 409,
    InsufficientFee: 402,
    VoterNotRegistered: 403,
    Unauthorized: 403,
    CandidateNotRegistered: 404,
}


def get_election(request: Request) -> Election:
    election = request.app.state.election
    if election is None:
        raise HTTPException(status_code=503, detail="No election deployed.")
    return election


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing bearer token.")
    try:
        return decode_identity(credentials.credentials)
    except InvalidToken as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}")


def to_http_exception(error: Exception) -> HTTPException:
    if isinstance(error, ElectionError):
        status = ERROR_STATUS.get(type(error), 400)
        return HTTPException(
            status_code=status,
            detail={"error": error.name, "message": str(error)},
        )
    if isinstance(error, LedgerError):
        return HTTPException(
            status_code=502,
            detail={"error": type(error).__name__, "message": str(error)},
        )
    logger.error(f"Unexpected error: {error}")
    return HTTPException(status_code=500, detail="Internal Server Error")


@contextmanager
def mutation(request: Request):
    """
    Serialize a mutating call and persist the election once it succeeds.
    Election and ledger errors are re-raised as HTTP errors. If the snapshot
    cannot be saved, election, ledger and event history are rolled back so
    memory and disk stay in step.
    """
    state = request.app.state
    election = get_election(request)
    with state.lock:
        before = election.snapshot()
        balances = election.ledger.snapshot()
        event_count = len(election.events)
        try:
            yield election
        except (ElectionError, LedgerError) as e:
            raise to_http_exception(e)
        if state.store is None:
            return
        try:
            state.store.save(election)
        except StorageError as e:
            election.restore(before)
            election.ledger.restore(balances)
            election.events.truncate(event_count)
            logger.error(f"Rolled back operation, snapshot not saved: {e}")
            raise HTTPException(
                status_code=500,
                detail={"error": "StorageError", "message": str(e)},
            )
