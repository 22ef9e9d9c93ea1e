import datetime
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from app.schemas.blog import Post
from app.schemas.portfolio import Portfolio
from app.services.filters import NO_FILTER, Filter, listing_url
from app.settings import Settings
from app.utils import format_date, read_time

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Pagination links jump back to the results grid
RESULTS_MOUNT = "posts-grid"

LISTING_MOUNTS = (
    "featured-post",
    RESULTS_MOUNT,
    "pagination",
    "active-filter",
    "categories-list",
    "recent-posts",
    "tags-cloud",
    "error",
)

POST_MOUNTS = (
    "post-title",
    "post-date",
    "post-read-time",
    "post-category",
    "post-content",
    "post-tags",
    "prev-post",
    "next-post",
    "related-posts",
    "error",
)

BLOCK_TEMPLATES = {
    "paragraph": "blocks/paragraph.html",
    "image": "blocks/image.html",
    "video": "blocks/video.html",
}


@lru_cache(maxsize=1)
def build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_date"] = format_date
    env.filters["asset_url"] = asset_url
    env.filters["css_url"] = css_url
    return env


def asset_url(path: Optional[str]) -> str:
    if not path:
        return ""
    if path.startswith(("http://", "https://", "/")):
        return path
    return f"/{path}"


def css_url(path: Optional[str]) -> str:
    # Percent-encode so quotes and parens cannot break out of url('...')
    return quote(asset_url(path), safe="/:")


class PageDocument:
    """
    The named mount points of one rendered page. Writing to a mount point
    the layout does not declare is a no-op, so a partial layout still
    renders everything it can.
    """

    def __init__(self, mount_names: Iterable[str], title: str = ""):
        self.title = title
        self._mounts: Dict[str, Markup] = {name: Markup("") for name in mount_names}

    def __contains__(self, name: str) -> bool:
        return name in self._mounts

    def write(self, name: str, html) -> bool:
        if name not in self._mounts:
            logger.debug(f"Mount point {name!r} not present, skipping")
            return False
        self._mounts[name] = escape(html)
        return True

    def read(self, name: str) -> Markup:
        return self._mounts.get(name, Markup(""))

    def clear(self) -> None:
        for name in self._mounts:
            self._mounts[name] = Markup("")

    @property
    def mounts(self) -> Dict[str, Markup]:
        return dict(self._mounts)


class BlogRenderer:
    def __init__(self, settings: Settings, env: Optional[Environment] = None):
        self.settings = settings
        self.env = env or build_environment()

    # --- links ---

    def post_url(self, post: Post) -> str:
        return f"{self.settings.POSTS_PATH}/{quote(post.slug)}.html"

    def filter_url(
        self, active: Filter = NO_FILTER, page: int = 1, anchor: Optional[str] = None
    ) -> str:
        return listing_url(self.settings.BLOG_PATH, active, page, anchor)

    def _fragment(self, template: str, **context) -> Markup:
        rendered = self.env.get_template(template).render(
            post_url=self.post_url,
            filter_url=self.filter_url,
            Filter=Filter,
            read_time=self._read_time,
            settings=self.settings,
            **context,
        )
        return Markup(rendered.strip())

    def _read_time(self, post: Post) -> str:
        return read_time(
            post, self.settings.WORDS_PER_MINUTE, self.settings.CHARS_PER_WORD
        )

    # --- listing fragments ---

    def featured(self, post: Optional[Post]) -> Markup:
        if post is None:
            return Markup("")
        return self._fragment("fragments/featured.html", post=post)

    def cards(self, posts: Sequence[Post], active: Filter = NO_FILTER) -> Markup:
        return self._fragment(
            "fragments/cards.html",
            posts=posts,
            active=active,
            tag_limit=self.settings.CARD_TAG_LIMIT,
        )

    def pagination(
        self, total_pages: int, current: int, active: Filter = NO_FILTER
    ) -> Markup:
        if total_pages <= 1:
            return Markup("")
        return self._fragment(
            "fragments/pagination.html",
            pages=range(1, total_pages + 1),
            current=current,
            total_pages=total_pages,
            active=active,
            results_anchor=RESULTS_MOUNT,
        )

    def active_filter(self, active: Filter) -> Markup:
        if not active.is_active:
            return Markup("")
        return self._fragment("fragments/active_filter.html", active=active)

    def categories(
        self, categories: Mapping[str, int], active: Filter = NO_FILTER
    ) -> Markup:
        return self._fragment(
            "fragments/categories.html", categories=categories.items(), active=active
        )

    def recent(self, posts: Sequence[Post]) -> Markup:
        return self._fragment("fragments/recent.html", posts=posts)

    def tag_cloud(
        self, tags: Sequence[Tuple[str, int]], active: Filter = NO_FILTER
    ) -> Markup:
        return self._fragment("fragments/tag_cloud.html", tags=tags, active=active)

    def render_listing(
        self,
        document: PageDocument,
        *,
        featured: Optional[Post],
        page_posts: Sequence[Post],
        total_pages: int,
        current_page: int,
        active: Filter,
        categories: Mapping[str, int],
        recent: Sequence[Post],
        tags: Sequence[Tuple[str, int]],
    ) -> PageDocument:
        document.clear()
        document.write("featured-post", self.featured(featured))
        document.write(RESULTS_MOUNT, self.cards(page_posts, active))
        document.write("pagination", self.pagination(total_pages, current_page, active))
        document.write("active-filter", self.active_filter(active))
        document.write("categories-list", self.categories(categories, active))
        document.write("recent-posts", self.recent(recent))
        document.write("tags-cloud", self.tag_cloud(tags, active))
        return document

    # --- post page fragments ---

    def post_content(self, post: Post) -> Markup:
        if not post.content:
            return self._fragment("fragments/post_fallback.html", post=post)

        blocks: List[Markup] = []
        for block in post.content:
            template = BLOCK_TEMPLATES.get(block.type)
            if template is None:
                logger.debug(f"Skipping unknown content block type {block.type!r}")
                continue
            if block.type in ("image", "video") and not block.src:
                continue
            blocks.append(self._fragment(template, block=block))
        return Markup("\n").join(blocks)

    def post_tags(self, tags: Sequence[str]) -> Markup:
        return self._fragment("fragments/post_tags.html", tags=tags)

    def adjacent_link(self, post: Optional[Post], direction: str) -> Markup:
        if post is None:
            return Markup("")
        return self._fragment("fragments/adjacent.html", post=post, direction=direction)

    def related(self, posts: Sequence[Post]) -> Markup:
        return self._fragment(
            "fragments/related.html",
            posts=posts,
            excerpt_length=self.settings.RELATED_EXCERPT_LENGTH,
        )

    def render_post(
        self,
        document: PageDocument,
        post: Post,
        *,
        previous: Optional[Post],
        following: Optional[Post],
        related: Sequence[Post],
    ) -> PageDocument:
        document.clear()
        document.title = f"{post.title} | {self.settings.BLOG_TITLE}"
        document.write("post-title", post.title)
        document.write("post-date", format_date(post.date))
        document.write("post-read-time", self._read_time(post))
        document.write("post-category", post.category)
        document.write("post-content", self.post_content(post))
        document.write("post-tags", self.post_tags(post.tags))
        document.write("prev-post", self.adjacent_link(previous, "previous"))
        document.write("next-post", self.adjacent_link(following, "next"))
        document.write("related-posts", self.related(related))
        return document

    # --- error panels ---

    def render_error(
        self, document: PageDocument, message: str, retry_url: str
    ) -> PageDocument:
        document.clear()
        panel = self._fragment(
            "fragments/error.html", message=message, retry_url=retry_url
        )
        document.write("error", panel)
        return document

    def render_not_found(self, document: PageDocument, slug: str) -> PageDocument:
        document.clear()
        document.title = f"Post not found | {self.settings.BLOG_TITLE}"
        document.write("error", self._fragment("fragments/not_found.html", slug=slug))
        return document

    # --- whole pages ---

    def render_page(self, layout: str, document: PageDocument, **context) -> str:
        context.setdefault("current_year", datetime.date.today().year)
        return self.env.get_template(layout).render(
            title=document.title,
            mounts=document.mounts,
            settings=self.settings,
            filter_url=self.filter_url,
            post_url=self.post_url,
            **context,
        )

    def render_portfolio(
        self,
        recent: Sequence[Post],
        portfolio: Optional[Portfolio] = None,
        notice: str = "",
    ) -> str:
        document = PageDocument((), title=self.settings.AUTHOR_NAME)
        return self.render_page(
            "portfolio.html",
            document,
            recent=recent,
            portfolio=portfolio or Portfolio(),
            notice=notice,
        )
