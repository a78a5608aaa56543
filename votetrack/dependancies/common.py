# Standard library imports
import secrets
from typing import Annotated

# Third-party imports
from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from votetrack.core.db import get_async_session
from votetrack.gateway import SQLAlchemyGateway
from votetrack.schemas.common import PaginationMeta
from votetrack.settings import settings


async def get_gateway(db: AsyncSession = Depends(get_async_session)) -> SQLAlchemyGateway:
    """Persistence gateway bound to the request's database session"""
    return SQLAlchemyGateway(db)


async def require_admin(x_admin_token: Annotated[str | None, Header()] = None) -> None:
    """Guard for write endpoints: the X-Admin-Token header must match ADMIN_API_TOKEN"""
    # Headers arrive latin-1 decoded; compare_digest only accepts ASCII str
    if not x_admin_token or not secrets.compare_digest(
        x_admin_token.encode("utf-8"), settings.ADMIN_API_TOKEN.encode("utf-8")
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Administrator token missing or invalid",
        )


class Pagination:
    def __init__(
        self,
        limit: int = Query(settings.PAGINATION_DEFAULT_LIMIT, ge=1, le=settings.PAGINATION_MAX_LIMIT),
        offset: int = Query(0, ge=0),
    ):
        self.limit = limit
        self.offset = offset

    def page(self, items: list) -> tuple[list, PaginationMeta]:
        meta = PaginationMeta(limit=self.limit, offset=self.offset, total_items=len(items))
        return items[self.offset : self.offset + self.limit], meta


GatewayDep = Annotated[SQLAlchemyGateway, Depends(get_gateway)]
PaginationDep = Annotated[Pagination, Depends()]
AdminDep = Depends(require_admin)
