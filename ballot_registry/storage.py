# ballot_registry/storage.py
import json
import logging
import os
from typing import Optional

from pydantic import ValidationError

from .election import Election
from .errors import InvalidElection, StorageError
from .events import EventLog
from .ledger import Ledger

logger = logging.getLogger(__name__)


class SnapshotStore:
    """JSON file holding the state of the hosted election."""

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def save(self, election: Election) -> None:
        """
        Write the election snapshot, replacing the previous file atomically.

        Raises:
            StorageError: the file could not be written; the old one is kept
        """
        directory = os.path.dirname(self.path)
        tmp_path = f"{self.path}.tmp"
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump(election.snapshot(), f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write election snapshot {self.path}: {e}")
            raise StorageError(f"Cannot write election snapshot to {self.path}: {e}")
        logger.debug(f"Election snapshot written to {self.path}")

    def load(
        self,
        ledger: Optional[Ledger] = None,
        events: Optional[EventLog] = None,
    ) -> Optional[Election]:
        """
        Restore the election saved at this path.

        Returns:
            The election, or None if nothing has been saved yet

        Raises:
            StorageError: file is not a valid election snapshot
        """
        if not self.exists():
            return None
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            election = Election.from_snapshot(data, ledger=ledger, events=events)
        except (json.JSONDecodeError, ValidationError, InvalidElection) as e:
            raise StorageError(f"Invalid election snapshot at {self.path}: {e}")
        logger.info(f"Election restored from {self.path}")
        return election
