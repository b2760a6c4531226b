# ballot_registry/ledger.py
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Set, Union

from .errors import InsufficientFunds, LedgerError

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str, float]


def to_amount(value: Amount) -> Decimal:
    """
    Coerce a monetary value to a finite Decimal.
    Floats go through str() so 0.1 stays 0.1.
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise LedgerError(f"invalid amount: {value!r}")
    if not amount.is_finite():
        raise LedgerError(f"amount must be finite: {value!r}")
    return amount


class Ledger:
    """Account balances and the value transfer primitive of the host."""

    def __init__(self, balances: Dict[str, Amount] = None):
        self._balances: Dict[str, Decimal] = {}
        self._protected: Set[str] = set()
        for account, amount in (balances or {}).items():
            self.deposit(account, amount)

    def balance_of(self, account: str) -> Decimal:
        return self._balances.get(account, Decimal(0))

    def protect(self, account: str) -> None:
        """Mark an account (e.g. an escrow) that may never pay out more than it holds."""
        self._protected.add(account)

    def deposit(self, account: str, amount: Amount) -> Decimal:
        amount = to_amount(amount)
        if amount < 0:
            raise LedgerError(f"cannot deposit negative amount {amount}")
        self._balances[account] = self.balance_of(account) + amount
        return self._balances[account]

    def _debit(self, account: str, amount: Decimal) -> None:
        available = self.balance_of(account)
        if available < amount:
            raise InsufficientFunds(
                f"{account} holds {available}, cannot transfer {amount}"
            )
        self._balances[account] = available - amount

    def transfer(self, source: str, target: str, amount: Amount) -> Decimal:
        """
        Move value between two accounts.

        Args:
            source: account debited
            target: account credited
            amount: non-negative finite value

        Returns:
            The transferred amount as Decimal

        Raises:
            LedgerError: negative or non-finite amount
            InsufficientFunds: source balance too small; no balance changes
        """
        amount = to_amount(amount)
        if amount < 0:
            raise LedgerError(f"cannot transfer negative amount {amount}")
        self._debit(source, amount)
        self._balances[target] = self.balance_of(target) + amount
        logger.debug(f"Transferred {amount} from {source} to {target}")
        return amount

    def snapshot(self) -> Dict[str, str]:
        return {account: str(balance) for account, balance in self._balances.items()}

    def restore(self, balances: Dict[str, Amount]) -> None:
        """Replace every balance with those of a :meth:`snapshot`."""
        self._balances = {account: to_amount(amount) for account, amount in balances.items()}


class UnlimitedLedger(Ledger):
    """
    Ledger whose callers always have enough funds to attach.
    Protected accounts are still balance-checked.
    """

    def _debit(self, account: str, amount: Decimal) -> None:
        if account in self._protected:
            return super()._debit(account, amount)
        balance = self.balance_of(account)
        if balance >= amount:
            self._balances[account] = balance - amount
        else:
            self._balances[account] = Decimal(0)
