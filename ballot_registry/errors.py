# ballot_registry/errors.py
# Rejections raised by the election and its host collaborators


class ElectionError(Exception):
    """Base class for every rejected election operation."""

    message = "Election operation rejected"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)

    @property
    def name(self) -> str:
        return type(self).__name__


class AlreadyClosed(ElectionError):
    message = "Election has already closed"


class InsufficientFee(ElectionError):
    message = "Not enough amount for registration fee."


class AlreadyRegistered(ElectionError):
    message = "Voter is already registered."


class VoterNotRegistered(ElectionError):
    message = "Voter is not registered"


class CandidateNotRegistered(ElectionError):
    message = "Candidate is not registered"


class AlreadyVoted(ElectionError):
    message = "Voter has already voted"


class Unauthorized(ElectionError):
    message = "Unauthorized"


class InvalidElection(ElectionError, ValueError):
    message = "Invalid election parameters"


class LedgerError(Exception):
    """Value transfer refused by the ledger."""


class InsufficientFunds(LedgerError):
    pass


class StorageError(Exception):
    """Snapshot file missing required data or unreadable."""


class InvalidToken(Exception):
    pass
