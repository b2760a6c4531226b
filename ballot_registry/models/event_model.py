from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Event(BaseModel):
    name: str
    emitted_at: datetime = Field(default_factory=_now)


class VoterRegistered(Event):
    name: Literal["VoterRegistered"] = "VoterRegistered"
    voter: str


class VoteSubmitted(Event):
    name: Literal["VoteSubmitted"] = "VoteSubmitted"
    candidate: str
    voter: str


class Closed(Event):
    name: Literal["Closed"] = "Closed"
    amount: Decimal


