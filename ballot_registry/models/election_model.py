from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, Field


class CandidateOut(BaseModel):
    candidate: str
    registered: bool
    votes: int = 0


class VoterOut(BaseModel):
    voter: str
    registered: bool = False
    has_voted: bool = False


class ElectionOut(BaseModel):
    authority: str
    candidates: List[str]
    registration_fee: Decimal
    escrow_balance: Decimal
    closed: bool
    voter_count: int
    votes_cast: int


class ResultRow(BaseModel):
    candidate: str
    count: int


class ElectionSnapshot(BaseModel):
    """Full persisted state of one election."""
    authority: str
    candidates: List[str]
    registration_fee: Decimal
    escrow_account: str = "escrow"
    escrow_balance: Decimal = Decimal(0)
    closed: bool = False
    tally: Dict[str, int] = Field(default_factory=dict)
    voters: Dict[str, VoterOut] = Field(default_factory=dict)
