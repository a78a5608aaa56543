from .dashboard_routes import router as dashboard_router
from .legislator_routes import router as legislator_router
from .motion_routes import router as motion_router
from .vote_record_routes import router as vote_record_router

__all__ = ["dashboard_router", "legislator_router", "motion_router", "vote_record_router"]
