import sys
import os
import json
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from ballot_registry.election import Election
from ballot_registry.events import EventLog
from ballot_registry.errors import StorageError
from ballot_registry.storage import SnapshotStore


def test_load_missing(tmp_path):
    assert SnapshotStore(str(tmp_path / 'none.json')).load() is None


def test_save_and_load(tmp_path):
    store = SnapshotStore(str(tmp_path / 'data' / 'election.json'))
    election = Election('owner', ['a', 'b'], '0.5')
    election.register('v1', '0.5')
    election.vote('v1', 'b')
    store.save(election)
    assert store.exists()

    events = EventLog()
    restored = store.load(events=events)
    assert restored.snapshot() == election.snapshot()
    assert restored.events is events
    assert restored.vote_count_for('b') == 1
    assert restored.escrow_balance == Decimal('0.5')


def test_snapshot_is_plain_json(tmp_path):
    store = SnapshotStore(str(tmp_path / 'election.json'))
    store.save(Election('owner', ['a'], 1))
    with open(store.path) as f:
        data = json.load(f)
    assert data['authority'] == 'owner'
    assert data['candidates'] == ['a']
    assert data['closed'] is False
    assert data['tally'] == {'a': 0}


@pytest.mark.parametrize('content', [
    '',
    '{not json',
    '{"authority": "owner"}',
    '{"authority": "owner", "candidates": [], "registration_fee": "1"}',
])
def test_load_corrupted(tmp_path, content):
    path = tmp_path / 'election.json'
    path.write_text(content)
    with pytest.raises(StorageError):
        SnapshotStore(str(path)).load()


def test_save_unwritable(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory')
    store = SnapshotStore(str(blocker / 'election.json'))
    with pytest.raises(StorageError):
        store.save(Election('owner', ['a'], 1))
