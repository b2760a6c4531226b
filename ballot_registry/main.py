# ballot_registry/main.py
import argparse
import logging
import threading
from decimal import Decimal
from typing import List, Optional

from fastapi import Depends, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .election import Election
from .events import EventLog
from .ledger import Amount, Ledger
from .routes import election_router, vote_router
from .routes.dependencies import get_election
from .storage import SnapshotStore

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def deploy(
    candidates: List[str],
    registration_fee: Amount,
    authority: str = None,
    ledger: Optional[Ledger] = None,
    events: Optional[EventLog] = None,
) -> Election:
    """Create an election on behalf of the authority and log where it lives."""
    authority = authority or config.ELECTION_AUTHORITY
    election = Election(
        authority,
        candidates,
        registration_fee,
        ledger=ledger,
        events=events,
        escrow_account=f"{config.ESCROW_ACCOUNT_PREFIX}{authority}",
    )
    logger.info(
        f"Election with candidates [{','.join(election.candidates)}] deployed by {authority}"
    )
    return election


def create_app(
    election: Optional[Election] = None,
    store: Optional[SnapshotStore] = None,
) -> FastAPI:
    """
    Build the API around one election.

    Without an explicit election the saved snapshot is restored, or a new
    election is deployed from the configured candidates. When neither is
    available the app starts without an election and answers 503.
    """
    if election is None and store is not None:
        election = store.load()
    if election is None and config.ELECTION_CANDIDATES:
        election = deploy(config.ELECTION_CANDIDATES, config.REGISTRATION_FEE)
        if store is not None:
            store.save(election)

    app = FastAPI(title="Ballot Registry API")
    app.state.election = election
    app.state.store = store
    app.state.lock = threading.Lock()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(election_router)
    app.include_router(vote_router)

    @app.get("/events", tags=["Election"])
    def list_events(election: Election = Depends(get_election)):
        return {"events": jsonable_encoder(election.events.events)}

    @app.get("/health", tags=["Root"])
    def health_check():
        return {"status": "healthy", "election": app.state.election is not None}

    @app.get("/", tags=["Root"])
    def read_root():
        return {"message": "Welcome to the Ballot Registry API"}

    return app


app = create_app(store=SnapshotStore(config.SNAPSHOT_PATH) if config.SNAPSHOT_PATH else None)


def deploy_cli(argv: List[str] = None) -> int:
    """Deploy an election into the snapshot file served by the API."""
    parser = argparse.ArgumentParser(description="Deploy a new election snapshot.")
    parser.add_argument("candidates", nargs="+", help="candidate identifiers")
    parser.add_argument("--fee", default=str(config.REGISTRATION_FEE), help="registration fee")
    parser.add_argument("--authority", default=config.ELECTION_AUTHORITY)
    parser.add_argument("--snapshot", default=config.SNAPSHOT_PATH)
    parser.add_argument("--force", action="store_true", help="overwrite an existing snapshot")
    args = parser.parse_args(argv)

    store = SnapshotStore(args.snapshot)
    if store.exists() and not args.force:
        logger.error(f"Snapshot {args.snapshot} already exists, use --force to replace it")
        return 1
    election = deploy(args.candidates, Decimal(args.fee), authority=args.authority)
    store.save(election)
    logger.info(f"Election snapshot written to {args.snapshot}")
    return 0


if __name__ == "__main__":
    raise SystemExit(deploy_cli())
