from fastapi import APIRouter, Depends, Request

from ..election import Election
from ..models.election_model import CandidateOut, ElectionOut
from .dependencies import get_caller, get_election, mutation

router = APIRouter(prefix="/election", tags=["Election"])


def election_summary(election: Election) -> ElectionOut:
    return ElectionOut(
        authority=election.authority,
        candidates=list(election.candidates),
        registration_fee=election.registration_fee,
        escrow_balance=election.escrow_balance,
        closed=election.is_closed,
        voter_count=election.voter_count,
        votes_cast=election.votes_cast,
    )


@router.get("", response_model=ElectionOut)
def get_election_summary(election: Election = Depends(get_election)):
    return election_summary(election)


@router.get("/candidates/{candidate_id}", response_model=CandidateOut)
def get_candidate(candidate_id: str, election: Election = Depends(get_election)):
    """
    Registration flag and current vote count of a candidate.
    Unknown identifiers are reported as unregistered with zero votes.
    """
    return CandidateOut(
        candidate=candidate_id,
        registered=election.is_candidate_registered(candidate_id),
        votes=election.vote_count_for(candidate_id),
    )


@router.post("/close")
def close_election(request: Request, caller: str = Depends(get_caller)):
    with mutation(request) as election:
        amount = election.close(caller)
    return {"message": "Election closed successfully!", "amount": str(amount)}
