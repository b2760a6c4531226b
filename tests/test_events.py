import sys
import os
from decimal import Decimal

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from ballot_registry.events import EventLog
from ballot_registry.models.event_model import Closed, VoteSubmitted, VoterRegistered


def test_emit_and_filter():
    log = EventLog()
    log.emit(VoterRegistered(voter='v1'))
    log.emit(VoteSubmitted(candidate='c1', voter='v1'))
    log.emit(Closed(amount=Decimal('1')))
    assert len(log) == 3
    assert [e.name for e in log.events] == ['VoterRegistered', 'VoteSubmitted', 'Closed']
    [vote] = log.filter('VoteSubmitted')
    assert (vote.candidate, vote.voter) == ('c1', 'v1')


def test_subscribers():
    log = EventLog()
    seen = []
    log.subscribe(seen.append)
    log.emit(VoterRegistered(voter='v1'))
    log.unsubscribe(seen.append)
    log.emit(VoterRegistered(voter='v2'))
    assert [e.voter for e in seen] == ['v1']


def test_history_is_a_copy():
    log = EventLog()
    log.emit(VoterRegistered(voter='v1'))
    log.events.clear()
    assert len(log) == 1


def test_failing_subscriber_is_isolated():
    log = EventLog()
    seen = []

    def broken(event):
        raise RuntimeError('boom')

    log.subscribe(broken)
    log.subscribe(seen.append)
    log.emit(VoterRegistered(voter='v1'))
    assert len(log) == 1
    assert [e.voter for e in seen] == ['v1']


def test_truncate():
    log = EventLog()
    for voter in ['v1', 'v2', 'v3']:
        log.emit(VoterRegistered(voter=voter))
    log.truncate(1)
    assert [e.voter for e in log.events] == ['v1']
