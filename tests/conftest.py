import json
from pathlib import Path

import pytest

from app.exceptions import LoadError
from app.schemas.blog import BlogData, Post
from app.services.renderer import BlogRenderer
from app.settings import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FIXTURE_JSON = FIXTURES_DIR / "blog-posts.json"


def load_fixture_data() -> BlogData:
    return BlogData.model_validate(json.loads(FIXTURE_JSON.read_text(encoding="utf-8")))


def make_post(post_id, **overrides) -> Post:
    fields = {
        "id": post_id,
        "slug": f"post-{post_id}",
        "title": f"Post {post_id}",
        "excerpt": f"Excerpt {post_id}",
        "date": "2026-01-01",
    }
    fields.update(overrides)
    return Post(**fields)


class FakeRepo:
    """
    Minimal content store stand-in. Pass an exception to simulate a failed load.
    """

    def __init__(self, data: BlogData | None = None, error: LoadError | None = None):
        self.data = data
        self.error = error
        self.calls = 0

    def load(self) -> BlogData:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.data.model_copy(deep=True)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(BLOG_DATA_URL=str(FIXTURE_JSON), PAGE_SIZE=6)


@pytest.fixture
def blog_data() -> BlogData:
    return load_fixture_data()


@pytest.fixture
def renderer(test_settings) -> BlogRenderer:
    return BlogRenderer(test_settings)
