# ballot_registry/election.py
"""Single-election registry with fee escrow.

An :class:`Election` is created by its authority with a fixed set of
candidates and a registration fee. Voters register by attaching at least the
fee, cast exactly one vote each, and the authority closes the election,
which pays the whole escrow out to the authority.

Every mutating operation runs all of its checks and any ledger transfer
before touching election state, so a rejected call leaves nothing behind.
Events are emitted only after the state change; a failing event listener
is logged by the event log and never undoes the operation.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Tuple

from .errors import (
    AlreadyClosed,
    AlreadyRegistered,
    AlreadyVoted,
    CandidateNotRegistered,
    InsufficientFee,
    InvalidElection,
    Unauthorized,
    VoterNotRegistered,
)
from .events import EventLog
from .ledger import Amount, Ledger, UnlimitedLedger, to_amount
from .models.election_model import ElectionSnapshot, VoterOut
from .models.event_model import Closed, VoteSubmitted, VoterRegistered

logger = logging.getLogger(__name__)


class Voter:
    __slots__ = ("registered", "has_voted")

    def __init__(self, registered: bool = False, has_voted: bool = False):
        self.registered = registered
        self.has_voted = has_voted


class Election:
    """
    One election, one escrow, one authority.

    Args:
        authority: identity creating the election; the only one allowed to close it
        candidates: non-empty sequence of distinct candidate identifiers
        registration_fee: minimum value a voter attaches to register
        ledger: value transfer capability; unlimited in-memory ledger if omitted
        events: event log; a fresh one if omitted
        escrow_account: ledger account holding collected fees

    Raises:
        InvalidElection: empty or duplicate candidates, negative fee
    """

    def __init__(
        self,
        authority: str,
        candidates: Iterable[str],
        registration_fee: Amount,
        ledger: Optional[Ledger] = None,
        events: Optional[EventLog] = None,
        escrow_account: str = "escrow",
    ):
        candidates = tuple(candidates)
        fee = to_amount(registration_fee)
        if not authority:
            raise InvalidElection("authority must be a non-empty identifier")
        if not candidates:
            raise InvalidElection("at least one candidate is required")
        if any(not c for c in candidates):
            raise InvalidElection("candidate identifiers must be non-empty")
        if len(set(candidates)) != len(candidates):
            raise InvalidElection("candidate identifiers must be distinct")
        if fee < 0:
            raise InvalidElection("registration fee must not be negative")

        self._authority = authority
        self._candidates: Dict[str, bool] = {c: True for c in candidates}
        self._tally: Dict[str, int] = {c: 0 for c in candidates}
        self._voters: Dict[str, Voter] = {}
        self._fee = fee
        self._escrow = Decimal(0)
        self._closed = False
        self.escrow_account = escrow_account
        self.ledger = ledger if ledger is not None else UnlimitedLedger()
        self.ledger.protect(escrow_account)
        self.events = events if events is not None else EventLog()
        logger.info(
            f"Election created by {authority} with candidates {list(candidates)}, fee {fee}"
        )

    # ---- queries

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def registration_fee(self) -> Decimal:
        return self._fee

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def escrow_balance(self) -> Decimal:
        return self._escrow

    @property
    def candidates(self) -> Tuple[str, ...]:
        return tuple(self._candidates)

    def is_candidate_registered(self, candidate: str) -> bool:
        return self._candidates.get(candidate, False)

    def vote_count_for(self, candidate: str) -> int:
        return self._tally.get(candidate, 0)

    def is_voter_registered(self, voter: str) -> bool:
        record = self._voters.get(voter)
        return record is not None and record.registered

    def has_voted(self, voter: str) -> bool:
        record = self._voters.get(voter)
        return record is not None and record.has_voted

    @property
    def voter_count(self) -> int:
        return sum(1 for v in self._voters.values() if v.registered)

    @property
    def votes_cast(self) -> int:
        return sum(self._tally.values())

    def results(self) -> Dict[str, int]:
        """Tally ordered by descending count; ties keep candidate order."""
        order = {c: i for i, c in enumerate(self._candidates)}
        return dict(sorted(
            self._tally.items(),
            key=lambda item: (-item[1], order[item[0]]),
        ))

    # ---- operations

    def _reject(self, error_cls, caller: str, operation: str):
        error = error_cls()
        logger.warning(f"{operation} by {caller} rejected: {error}")
        return error

    def register(self, caller: str, paid: Amount) -> None:
        """
        Register the caller as a voter, keeping the whole attached value.

        Raises:
            AlreadyClosed, InsufficientFee, AlreadyRegistered (checked in that order)
            LedgerError: the attached value could not be collected
        """
        paid = to_amount(paid)
        if self._closed:
            raise self._reject(AlreadyClosed, caller, "register")
        if paid < self._fee:
            raise self._reject(InsufficientFee, caller, "register")
        if self.is_voter_registered(caller):
            raise self._reject(AlreadyRegistered, caller, "register")

        self.ledger.transfer(caller, self.escrow_account, paid)

        self._voters[caller] = Voter(registered=True)
        self._escrow += paid
        logger.info(f"Voter {caller} registered, paid {paid}")
        self.events.emit(VoterRegistered(voter=caller))

    def vote(self, caller: str, candidate: str) -> None:
        """
        Cast the caller's single vote for a registered candidate.

        Raises:
            AlreadyClosed, VoterNotRegistered, CandidateNotRegistered,
            AlreadyVoted (checked in that order)
        """
        if self._closed:
            raise self._reject(AlreadyClosed, caller, "vote")
        if not self.is_voter_registered(caller):
            raise self._reject(VoterNotRegistered, caller, "vote")
        if not self.is_candidate_registered(candidate):
            raise self._reject(CandidateNotRegistered, caller, "vote")
        if self.has_voted(caller):
            raise self._reject(AlreadyVoted, caller, "vote")

        self._tally[candidate] += 1
        self._voters[caller].has_voted = True
        logger.info(f"Voter {caller} voted for {candidate}")
        self.events.emit(VoteSubmitted(candidate=candidate, voter=caller))

    def close(self, caller: str) -> Decimal:
        """
        Close the election and pay the escrow out to the authority.

        Returns:
            The amount transferred

        Raises:
            Unauthorized: caller is not the authority
            AlreadyClosed: the election was closed before
            LedgerError: payout failed; the election stays open
        """
        if caller != self._authority:
            raise self._reject(Unauthorized, caller, "close")
        if self._closed:
            raise self._reject(AlreadyClosed, caller, "close")

        amount = self._escrow
        self.ledger.transfer(self.escrow_account, self._authority, amount)

        self._closed = True
        self._escrow = Decimal(0)
        logger.info(f"Election closed by {caller}, {amount} transferred")
        self.events.emit(Closed(amount=amount))
        return amount

    # ---- persistence

    def snapshot(self) -> Dict[str, Any]:
        return ElectionSnapshot(
            authority=self._authority,
            candidates=list(self._candidates),
            registration_fee=self._fee,
            escrow_account=self.escrow_account,
            escrow_balance=self._escrow,
            closed=self._closed,
            tally=dict(self._tally),
            voters={
                voter: VoterOut(voter=voter, registered=r.registered, has_voted=r.has_voted)
                for voter, r in self._voters.items()
            },
        ).model_dump(mode="json")

    def restore(self, data: Dict[str, Any]) -> None:
        """
        Replace tally, voters, escrow and closed flag with those of a snapshot
        taken from this same election.

        Raises:
            InvalidElection: snapshot belongs to another election or breaks
                the tally, voter or escrow invariants; nothing is changed
        """
        snap = ElectionSnapshot.model_validate(data)
        if (
            snap.authority != self._authority
            or tuple(snap.candidates) != self.candidates
            or to_amount(snap.registration_fee) != self._fee
            or snap.escrow_account != self.escrow_account
        ):
            raise InvalidElection("snapshot belongs to a different election")

        tally = {c: 0 for c in self._candidates}
        for candidate, count in snap.tally.items():
            if candidate not in tally:
                raise InvalidElection(f"tally for unknown candidate {candidate}")
            if count < 0:
                raise InvalidElection(f"negative tally for {candidate}")
            tally[candidate] = count

        voters = {}
        for voter, record in snap.voters.items():
            if record.voter != voter:
                raise InvalidElection(f"voter record {voter} names {record.voter}")
            if record.has_voted and not record.registered:
                raise InvalidElection(f"voter {voter} voted without registering")
            voters[voter] = Voter(record.registered, record.has_voted)

        voted = sum(1 for v in voters.values() if v.has_voted)
        if sum(tally.values()) != voted:
            raise InvalidElection(
                f"tally counts {sum(tally.values())} votes but {voted} voters voted"
            )
        escrow = to_amount(snap.escrow_balance)
        if escrow < 0:
            raise InvalidElection("negative escrow balance")
        if snap.closed and escrow != 0:
            raise InvalidElection("closed election still holds escrow")

        self._tally = tally
        self._voters = voters
        self._escrow = escrow
        self._closed = snap.closed

    @classmethod
    def from_snapshot(
        cls,
        data: Dict[str, Any],
        ledger: Optional[Ledger] = None,
        events: Optional[EventLog] = None,
    ) -> "Election":
        """
        Rebuild an election from :meth:`snapshot` output.
        Without a ledger, a fresh one is created holding the escrow balance.
        """
        snap = ElectionSnapshot.model_validate(data)
        if ledger is None:
            ledger = UnlimitedLedger({snap.escrow_account: to_amount(snap.escrow_balance)})
        election = cls(
            snap.authority,
            snap.candidates,
            snap.registration_fee,
            ledger=ledger,
            events=events,
            escrow_account=snap.escrow_account,
        )
        election.restore(data)
        return election
