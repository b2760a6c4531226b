import sys
import os
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from ballot_registry.main import deploy, deploy_cli
from ballot_registry.storage import SnapshotStore
from ballot_registry.errors import InvalidElection


def test_deploy():
    election = deploy(['c1', 'c2'], '1', authority='owner')
    assert election.authority == 'owner'
    assert election.candidates == ('c1', 'c2')
    assert election.registration_fee == Decimal('1')
    assert election.escrow_account == 'escrow:owner'


def test_deploy_rejects_duplicates():
    with pytest.raises(InvalidElection):
        deploy(['c1', 'c1'], '1', authority='owner')


def test_deploy_cli(tmp_path):
    path = str(tmp_path / 'election.json')
    assert deploy_cli(['c1', 'c2', '--fee', '0.5', '--authority', 'me', '--snapshot', path]) == 0
    election = SnapshotStore(path).load()
    assert election.authority == 'me'
    assert election.registration_fee == Decimal('0.5')

    assert deploy_cli(['c3', '--snapshot', path]) == 1
    assert SnapshotStore(path).load().candidates == ('c1', 'c2')
    assert deploy_cli(['c3', '--snapshot', path, '--force']) == 0
    assert SnapshotStore(path).load().candidates == ('c3',)
