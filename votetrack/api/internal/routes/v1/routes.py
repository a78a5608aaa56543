# Third-party imports
from fastapi import APIRouter

# Local application imports
from votetrack.api.internal.routes.v1.parliament import (
    dashboard_router,
    legislator_router,
    motion_router,
    vote_record_router,
)

router = APIRouter()

# Include all internal v1 routers
router.include_router(legislator_router)
router.include_router(motion_router)
router.include_router(vote_record_router)
router.include_router(dashboard_router)
