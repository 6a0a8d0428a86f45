"""Global search across members, sites, courses and files."""

from fastapi import APIRouter

from app.api.deps import AuthUser, DbSession
from app.schemas.search import SearchResult
from app.services.search import search_all

router = APIRouter()


@router.get("", response_model=list[SearchResult], response_model_exclude_none=True)
async def search(db: DbSession, _user: AuthUser, q: str = "") -> list[SearchResult]:
    return await search_all(db.get_bind(), q)
