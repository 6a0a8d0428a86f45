"""Schemas for cross-entity search results."""

from typing import Literal

from app.schemas.common import CamelModel

ResultType = Literal["user", "site", "module", "file"]


class SearchResult(CamelModel):
    """One hit, tagged with the entity type it came from."""

    type: ResultType
    id: str
    title: str
    subtitle: str
    icon: str
    avatar: str | None = None
    url: str | None = None
    module_id: str | None = None
