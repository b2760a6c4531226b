from typing import List

from fastapi import APIRouter, Depends, Request

from ..election import Election
from ..models.election_model import ResultRow, VoterOut
from ..models.vote_model import RegistrationRequest, Vote
from .dependencies import get_caller, get_election, mutation

vote_router = APIRouter(prefix="/vote", tags=["Vote"])


@vote_router.post("/register")
def register_voter(
    registration: RegistrationRequest,
    request: Request,
    caller: str = Depends(get_caller),
):
    """
    Registers the caller as a voter, attaching `amount` from their account.
    The whole attached amount is kept in escrow.
    """
    with mutation(request) as election:
        election.register(caller, registration.amount)
    return {"message": "Voter registered successfully!", "voter": caller}


@vote_router.post("/cast")
def cast_vote(vote: Vote, request: Request, caller: str = Depends(get_caller)):
    with mutation(request) as election:
        election.vote(caller, vote.candidate)
    return {
        "message": "Vote cast successfully!",
        "candidate": vote.candidate,
        "voter": caller,
    }


@vote_router.get("/check/{voter_id}", response_model=VoterOut)
def check_vote(voter_id: str, election: Election = Depends(get_election)):
    return VoterOut(
        voter=voter_id,
        registered=election.is_voter_registered(voter_id),
        has_voted=election.has_voted(voter_id),
    )


@vote_router.get("/results", response_model=List[ResultRow])
def get_results(election: Election = Depends(get_election)):
    return [
        ResultRow(candidate=candidate, count=count)
        for candidate, count in election.results().items()
    ]
