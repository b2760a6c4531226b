# ballot_registry/config.py
# Central place for settings and constants
import os
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

# Candidates seeded when the app deploys its election (comma separated ids)
ELECTION_CANDIDATES = [
    c.strip() for c in os.getenv("ELECTION_CANDIDATES", "").split(",") if c.strip()
]

# Fee every voter pays to register
REGISTRATION_FEE = Decimal(os.getenv("REGISTRATION_FEE", "1.0"))

# Identity recorded as the election authority on deploy
ELECTION_AUTHORITY = os.getenv("ELECTION_AUTHORITY", "owner")

# JSON snapshot of the election state; empty disables persistence
SNAPSHOT_PATH = os.getenv("SNAPSHOT_PATH", "data/election.json")

# Token signing for caller identity
SECRET_KEY = os.getenv("SECRET_KEY", "a_very_secret_key_for_dev_only")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Account name under which an election holds collected fees
ESCROW_ACCOUNT_PREFIX = "escrow:"
