import sys
import os
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from ballot_registry.ledger import Ledger, UnlimitedLedger, to_amount
from ballot_registry.errors import InsufficientFunds, LedgerError


@pytest.mark.parametrize(('value', 'expected'), [
    (1, Decimal('1')),
    ('0.9', Decimal('0.9')),
    (0.1, Decimal('0.1')),
    (Decimal('2.50'), Decimal('2.5')),
])
def test_to_amount(value, expected):
    assert to_amount(value) == expected


@pytest.mark.parametrize('value', ['one ether', 'NaN', 'Infinity', '-Infinity', Decimal('NaN'), float('inf')])
def test_to_amount_invalid(value):
    with pytest.raises(LedgerError):
        to_amount(value)


def test_transfer():
    ledger = Ledger({'alice': '5'})
    assert ledger.transfer('alice', 'bob', '1.5') == Decimal('1.5')
    assert ledger.balance_of('alice') == Decimal('3.5')
    assert ledger.balance_of('bob') == Decimal('1.5')


def test_transfer_insufficient_funds_is_atomic():
    ledger = Ledger({'alice': '1'})
    with pytest.raises(InsufficientFunds):
        ledger.transfer('alice', 'bob', 2)
    assert ledger.balance_of('alice') == Decimal('1')
    assert ledger.balance_of('bob') == 0


def test_negative_amounts_rejected():
    ledger = Ledger({'alice': '1'})
    with pytest.raises(LedgerError):
        ledger.transfer('alice', 'bob', -1)
    with pytest.raises(LedgerError):
        ledger.deposit('alice', '-0.1')


def test_unlimited_ledger():
    ledger = UnlimitedLedger({'alice': '1'})
    ledger.transfer('alice', 'escrow', 3)
    assert ledger.balance_of('alice') == 0
    assert ledger.balance_of('escrow') == Decimal('3')
    ledger.transfer('escrow', 'owner', 3)
    assert ledger.balance_of('owner') == Decimal('3')


def test_snapshot():
    ledger = Ledger({'alice': '1.25'})
    assert ledger.snapshot() == {'alice': '1.25'}


def test_unlimited_ledger_protected_account():
    ledger = UnlimitedLedger()
    ledger.protect('escrow')
    ledger.transfer('alice', 'escrow', 2)
    with pytest.raises(InsufficientFunds):
        ledger.transfer('escrow', 'owner', 3)
    assert ledger.balance_of('escrow') == Decimal('2')
    assert ledger.balance_of('owner') == 0


def test_restore():
    ledger = Ledger({'alice': '4'})
    saved = ledger.snapshot()
    ledger.transfer('alice', 'bob', 3)
    ledger.restore(saved)
    assert ledger.balance_of('alice') == Decimal('4')
    assert ledger.balance_of('bob') == 0
