import math
from typing import List, Literal, Mapping, Optional, Sequence
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict

from app.schemas.blog import Post

FilterKind = Literal["none", "category", "tag", "search"]


class Filter(BaseModel):
    """The single active listing filter. A new filter replaces the old one."""

    model_config = ConfigDict(frozen=True)

    kind: FilterKind = "none"
    value: str = ""

    @classmethod
    def by_category(cls, name: str) -> "Filter":
        return cls(kind="category", value=name)

    @classmethod
    def by_tag(cls, name: str) -> "Filter":
        return cls(kind="tag", value=name)

    @classmethod
    def by_search(cls, term: str) -> "Filter":
        term = (term or "").strip()
        return cls(kind="search", value=term) if term else NO_FILTER

    @property
    def is_active(self) -> bool:
        return self.kind != "none"

    @property
    def label(self) -> str:
        labels = {"category": "Category", "tag": "Tag", "search": "Search"}
        return f"{labels[self.kind]}: {self.value}" if self.is_active else ""


NO_FILTER = Filter()


def apply_filter(posts: Sequence[Post], active: Filter) -> List[Post]:
    if active.kind == "category":
        return [p for p in posts if active.value in (p.category, p.subcategory)]
    if active.kind == "tag":
        return [p for p in posts if active.value in p.tags]
    if active.kind == "search" and active.value:
        term = active.value.lower()
        return [p for p in posts if _matches_search(p, term)]
    return list(posts)


def _matches_search(post: Post, term: str) -> bool:
    fields = [post.title, post.excerpt or "", post.category, *post.tags]
    return any(term in field.lower() for field in fields)


def paginate(posts: Sequence[Post], page_size: int, page: int) -> List[Post]:
    """1-indexed page window; out-of-range pages are empty, never wrapped."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(posts[start : start + page_size])


def page_count(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total / page_size)


def parse_page(value: Optional[str]) -> int:
    try:
        page = int(value) if value is not None else 1
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def filter_from_query(params: Mapping[str, str]) -> Filter:
    """Derive the active filter from address-bar parameters (category wins over tag)."""
    if params.get("category"):
        return Filter.by_category(params["category"])
    if params.get("tag"):
        return Filter.by_tag(params["tag"])
    return Filter.by_search(params.get("q") or "")


def filter_to_query(active: Filter, page: int = 1) -> str:
    params = {}
    if active.kind == "category":
        params["category"] = active.value
    elif active.kind == "tag":
        params["tag"] = active.value
    elif active.kind == "search":
        params["q"] = active.value
    if page > 1:
        params["page"] = str(page)
    return urlencode(params)


def listing_url(
    base_path: str,
    active: Filter = NO_FILTER,
    page: int = 1,
    anchor: Optional[str] = None,
) -> str:
    query = filter_to_query(active, page)
    url = f"{base_path}?{query}" if query else base_path
    return f"{url}#{anchor}" if anchor else url
