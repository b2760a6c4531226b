"""Single-election voting registry with fee escrow."""

from .election import Election
from .errors import (
    AlreadyClosed,
    AlreadyRegistered,
    AlreadyVoted,
    CandidateNotRegistered,
    ElectionError,
    InsufficientFee,
    InsufficientFunds,
    InvalidElection,
    LedgerError,
    Unauthorized,
    VoterNotRegistered,
)
from .events import EventLog
from .ledger import Ledger, UnlimitedLedger
