from .election_model import (
    CandidateOut,
    ElectionOut,
    ElectionSnapshot,
    ResultRow,
    VoterOut,
)
from .event_model import Closed, Event, VoteSubmitted, VoterRegistered
from .vote_model import RegistrationRequest, Vote
