"""Cross-entity search: independent substring queries run concurrently, then concatenated."""

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy import or_
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from app.models import File, Module, Profile, Site
from app.schemas.search import SearchResult

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
USER_LIMIT = 5
SITE_LIMIT = 3
MODULE_LIMIT = 5
FILE_LIMIT = 5


def _like(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_profiles(db: Session, query: str) -> list[SearchResult]:
    pattern = _like(query)
    rows = (
        db.query(Profile)
        .filter(
            or_(
                Profile.first_name.ilike(pattern, escape="\\"),
                Profile.last_name.ilike(pattern, escape="\\"),
            )
        )
        .limit(USER_LIMIT)
        .all()
    )
    return [
        SearchResult(
            type="user",
            id=p.id,
            title=p.display_name,
            subtitle="Administrateur" if p.role == "admin" else "Résident",
            avatar=p.avatar,
            icon="person",
        )
        for p in rows
    ]


def search_sites(db: Session, query: str) -> list[SearchResult]:
    rows = (
        db.query(Site)
        .filter(Site.name.ilike(_like(query), escape="\\"))
        .limit(SITE_LIMIT)
        .all()
    )
    return [
        SearchResult(
            type="site",
            id=s.id,
            title=s.name,
            subtitle=s.type or "Site de stage",
            icon="location_on",
        )
        for s in rows
    ]


def search_modules(db: Session, query: str) -> list[SearchResult]:
    rows = (
        db.query(Module)
        .filter(Module.name.ilike(_like(query), escape="\\"))
        .limit(MODULE_LIMIT)
        .all()
    )
    return [
        SearchResult(
            type="module",
            id=m.id,
            title=m.name,
            subtitle=f"Cours - {m.subject.name if m.subject else 'Général'}",
            icon="school",
        )
        for m in rows
    ]


def search_files(db: Session, query: str) -> list[SearchResult]:
    rows = (
        db.query(File)
        .filter(File.name.ilike(_like(query), escape="\\"))
        .order_by(File.name)
        .limit(FILE_LIMIT)
        .all()
    )
    return [
        SearchResult(
            type="file",
            id=f.id,
            title=f.name,
            subtitle="Fichier",
            url=f.url,
            module_id=f.module_id,
            icon="description",
        )
        for f in rows
    ]


SEARCHERS: tuple[Callable[[Session, str], list[SearchResult]], ...] = (
    search_profiles,
    search_sites,
    search_modules,
    search_files,
)


def _run_one(
    factory: sessionmaker,
    searcher: Callable[[Session, str], list[SearchResult]],
    query: str,
) -> list[SearchResult]:
    with factory() as db:
        return searcher(db, query)


async def search_all(bind: Engine | Connection, query: str) -> list[SearchResult]:
    """
    Run every searcher in its own session concurrently and concatenate the hits.

    No ranking or deduplication across entity types; queries shorter than
    MIN_QUERY_LENGTH return nothing.
    """
    query = (query or "").strip().lower()
    if len(query) < MIN_QUERY_LENGTH:
        return []
    factory = sessionmaker(bind=bind, autoflush=False)
    groups = await asyncio.gather(
        *(run_in_threadpool(_run_one, factory, searcher, query) for searcher in SEARCHERS)
    )
    results = [hit for group in groups for hit in group]
    logger.debug("Search %r returned %s results", query, len(results))
    return results
