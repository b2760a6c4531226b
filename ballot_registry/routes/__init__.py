from .election_routes import router as election_router
from .vote_routes import vote_router
