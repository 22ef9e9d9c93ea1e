import pytest

from app.services.navigation import (
    adjacency,
    category_index,
    featured_post,
    find_by_slug,
    recent_posts,
    related,
    slug_from_path,
    tag_frequency,
)
from tests.conftest import make_post


def test_adjacency_uses_list_position(blog_data):
    posts = blog_data.posts

    middle = adjacency(posts, 3)
    assert middle.previous.id == 4
    assert middle.next.id == 2


def test_adjacency_is_empty_at_the_boundaries(blog_data):
    posts = blog_data.posts

    first = adjacency(posts, posts[0].id)
    last = adjacency(posts, posts[-1].id)

    assert first.next is None and first.previous.id == posts[1].id
    assert last.previous is None and last.next.id == posts[-2].id


def test_adjacency_for_unknown_id():
    assert adjacency([make_post(1)], 99) == (None, None)


def test_related_shares_category_and_excludes_self(blog_data):
    kyoto = find_by_slug(blog_data.posts, "kyoto-in-spring")

    result = related(kyoto, blog_data.posts)

    assert [p.slug for p in result] == ["lisbon-weekend", "road-trip-diaries"]


def test_related_respects_limit_and_order():
    posts = [make_post(i, category="A") for i in range(1, 7)]

    result = related(posts[2], posts, limit=3)

    assert [p.id for p in result] == [1, 2, 4]
    assert related(posts[0], posts, limit=0) == []


def test_related_can_be_empty(blog_data):
    python = find_by_slug(blog_data.posts, "python-tips")

    assert related(python, blog_data.posts) == []


def test_tag_frequency_counts_and_keeps_first_seen_order_on_ties():
    posts = [
        make_post(1, tags=["x", "y"]),
        make_post(2, tags=["x"]),
        make_post(3),
    ]

    assert tag_frequency(posts) == [("x", 2), ("y", 1)]


def test_tag_frequency_truncates_to_top_n(blog_data):
    result = tag_frequency(blog_data.posts, top_n=3)

    assert result == [("photos", 3), ("travel", 3), ("new-year", 1)]


def test_tag_frequency_output_is_sorted_descending(blog_data):
    counts = [count for _tag, count in tag_frequency(blog_data.posts)]

    assert counts == sorted(counts, reverse=True)
    assert len(tag_frequency(blog_data.posts, top_n=15)) <= 15


def test_category_index_defaults_missing_categories(blog_data):
    assert category_index(blog_data.posts) == {
        "Life": 2,
        "Travel": 3,
        "Tech": 1,
        "Uncategorized": 1,
    }


def test_featured_post_first_in_list_order_wins():
    posts = [make_post(1), make_post(2, featured=True), make_post(3, featured=True)]

    assert featured_post(posts).id == 2
    assert featured_post([make_post(1)]) is None


def test_recent_posts_are_the_first_entries(blog_data):
    assert [p.id for p in recent_posts(blog_data.posts, 3)] == [1, 2, 3]


def test_find_by_slug(blog_data):
    assert find_by_slug(blog_data.posts, "python-tips").id == 3
    assert find_by_slug(blog_data.posts, "missing") is None


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/blogs/first-january-2026.html", "first-january-2026"),
        ("/blogs/kyoto-in-spring", "kyoto-in-spring"),
        ("/blogs/café.html", "café"),
        ("/blogs/100%25-done.html", "100%25-done"),
        ("/blogs/", ""),
        ("", ""),
    ],
)
def test_slug_from_path(path, expected):
    assert slug_from_path(path) == expected
