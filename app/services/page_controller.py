import logging
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from app.exceptions import LoadError, NotFoundError
from app.repos.blog_data_repo import BlogDataRepo
from app.schemas.blog import BlogData, Post
from app.services import navigation
from app.services.filters import (
    NO_FILTER,
    Filter,
    apply_filter,
    filter_from_query,
    page_count,
    paginate,
    parse_page,
)
from app.services.renderer import (
    LISTING_MOUNTS,
    POST_MOUNTS,
    RESULTS_MOUNT,
    BlogRenderer,
    PageDocument,
)
from app.settings import Settings

logger = logging.getLogger(__name__)


class PageView(BaseModel):
    """What one render pass produced: the mount contents plus page chrome."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: PageDocument
    url: str
    status_code: int = 200
    scroll_target: Optional[str] = None
    header_image: Optional[str] = None

    @property
    def title(self) -> str:
        return self.document.title

    def fragments(self) -> Dict[str, str]:
        return {name: str(html) for name, html in self.document.mounts.items()}


class ListingState(BaseModel):
    active: Filter = NO_FILTER
    page: int = 1


class ListingController:
    """
    Owns one listing page view: the loaded data, the active filter and the
    current page. Events re-render from the loaded data without re-fetching.
    """

    def __init__(self, repo: BlogDataRepo, renderer: BlogRenderer, settings: Settings):
        self.repo = repo
        self.renderer = renderer
        self.settings = settings
        self.data: Optional[BlogData] = None
        self.error: Optional[LoadError] = None
        self.state = ListingState()
        self.history: List[str] = []
        self.document = PageDocument(LISTING_MOUNTS, title=settings.BLOG_TITLE)

    @property
    def posts(self) -> List[Post]:
        return list(self.data.posts) if self.data else []

    @property
    def url(self) -> str:
        return self.renderer.filter_url(self.state.active, self.state.page)

    # --- lifecycle ---

    def open(self, params: Mapping[str, str]) -> PageView:
        """Page load: derive state from the address bar, fetch once, render."""
        self.state = _state_from_query(params)
        return self.load()

    def load(self) -> PageView:
        try:
            self.data = self.repo.load()
            self.error = None
        except LoadError as e:
            logger.error(f"Could not load blog data: {e}")
            self.data = None
            self.error = e
        return self.render()

    def retry(self) -> PageView:
        return self.load()

    # --- interaction events ---

    def select_category(self, name: str) -> PageView:
        return self._apply(Filter.by_category(name))

    def select_tag(self, name: str) -> PageView:
        return self._apply(Filter.by_tag(name))

    def search(self, term: str) -> PageView:
        return self._apply(Filter.by_search(term))

    def clear_filter(self) -> PageView:
        return self._apply(NO_FILTER)

    def go_to_page(self, page: int) -> PageView:
        self.state = ListingState(active=self.state.active, page=page)
        self._push()
        view = self.render()
        view.scroll_target = RESULTS_MOUNT
        return view

    def pop_state(self, params: Mapping[str, str]) -> PageView:
        """Back/forward: re-derive state from the address bar; nothing is pushed."""
        self.state = _state_from_query(params)
        return self.render()

    def dispatch(
        self, event: str, value: str = "", params: Optional[Mapping[str, str]] = None
    ) -> PageView:
        """Apply one named reader event (a click, search, page or back/forward)."""
        if event == "category":
            return self.select_category(value)
        if event == "tag":
            return self.select_tag(value)
        if event == "search":
            return self.search(value)
        if event == "clear":
            return self.clear_filter()
        if event == "page":
            return self.go_to_page(parse_page(value))
        if event == "popstate":
            return self.pop_state(params or {})
        raise ValueError(f"Unknown listing event: {event!r}")

    def _apply(self, active: Filter) -> PageView:
        self.state = ListingState(active=active, page=1)
        self._push()
        return self.render()

    def _push(self) -> None:
        self.history.append(self.url)

    # --- rendering ---

    def render(self) -> PageView:
        if self.error is not None or self.data is None:
            message = str(self.error) if self.error else "Blog data is not loaded."
            self.renderer.render_error(self.document, message, retry_url=self.url)
            return PageView(document=self.document, url=self.url, status_code=502)

        active = self.state.active
        posts = self.data.posts
        featured = None
        if active.is_active:
            listed = apply_filter(posts, active)
        else:
            featured = navigation.featured_post(posts)
            listed = [p for p in posts if featured is None or p.id != featured.id]

        page_size = self.settings.PAGE_SIZE
        self.renderer.render_listing(
            self.document,
            featured=featured,
            page_posts=paginate(listed, page_size, self.state.page),
            total_pages=page_count(len(listed), page_size),
            current_page=self.state.page,
            active=active,
            categories=self.data.categories,
            recent=navigation.recent_posts(posts, self.settings.RECENT_POSTS_COUNT),
            tags=navigation.tag_frequency(posts, self.settings.TAG_CLOUD_SIZE),
        )
        return PageView(document=self.document, url=self.url)


def _state_from_query(params: Mapping[str, str]) -> ListingState:
    return ListingState(
        active=filter_from_query(params), page=parse_page(params.get("page"))
    )


class PostPageController:
    """One per-post page view: locate the post by slug and render it."""

    def __init__(self, repo: BlogDataRepo, renderer: BlogRenderer, settings: Settings):
        self.repo = repo
        self.renderer = renderer
        self.settings = settings
        self.data: Optional[BlogData] = None
        self.post: Optional[Post] = None
        self.document = PageDocument(POST_MOUNTS, title=settings.BLOG_TITLE)

    def open(self, path: str) -> PageView:
        slug = navigation.slug_from_path(path)
        if not slug:
            self.renderer.render_error(
                self.document, "No post specified in URL", retry_url=path
            )
            return PageView(document=self.document, url=path, status_code=404)

        try:
            self.data = self.repo.load()
            self.post = self._find(slug)
        except LoadError as e:
            logger.error(f"Error loading blog post {slug}: {e}")
            self.renderer.render_error(
                self.document, f"Failed to load post: {e}", retry_url=path
            )
            return PageView(document=self.document, url=path, status_code=502)
        except NotFoundError as e:
            logger.warning(str(e))
            self.renderer.render_not_found(self.document, slug)
            return PageView(document=self.document, url=path, status_code=404)

        posts = self.data.posts
        adjacent = navigation.adjacency(posts, self.post.id)
        limit = self.settings.RELATED_POSTS_COUNT
        self.renderer.render_post(
            self.document,
            self.post,
            previous=adjacent.previous,
            following=adjacent.next,
            related=navigation.related(self.post, posts, limit),
        )
        return PageView(
            document=self.document, url=path, header_image=self.post.coverImage
        )

    def _find(self, slug: str) -> Post:
        post = navigation.find_by_slug(self.data.posts if self.data else [], slug)
        if post is None:
            raise NotFoundError(slug)
        return post
