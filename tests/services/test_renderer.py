from app.services.filters import NO_FILTER, Filter
from app.services.renderer import (
    LISTING_MOUNTS,
    POST_MOUNTS,
    PageDocument,
    asset_url,
    css_url,
)
from tests.conftest import make_post

EVIL_TITLE = '<script>alert("x")</script>'


def test_page_document_ignores_unknown_mount_points():
    document = PageDocument(["posts-grid"])

    assert document.write("posts-grid", "<b>plain text</b>") is True
    assert document.write("tags-cloud", "ignored") is False
    assert "tags-cloud" not in document
    assert str(document.read("posts-grid")) == "&lt;b&gt;plain text&lt;/b&gt;"
    assert str(document.read("tags-cloud")) == ""


def test_asset_url_and_css_url():
    assert asset_url("images/a.jpg") == "/images/a.jpg"
    assert asset_url("https://cdn/a.jpg") == "https://cdn/a.jpg"
    assert asset_url(None) == ""
    assert css_url("images/a b').jpg") == "/images/a%20b%27%29.jpg"


def test_cards_escape_post_supplied_text(renderer):
    post = make_post(1, title=EVIL_TITLE, excerpt="<img src=x onerror=alert(1)>", tags=["<i>t</i>"])

    html = str(renderer.cards([post]))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "<img src=x" not in html
    assert "&lt;i&gt;t&lt;/i&gt;" in html


def test_cards_limit_tags_and_link_to_post(renderer):
    post = make_post(1, slug="hello", tags=["a", "b", "c", "d"])

    html = str(renderer.cards([post]))

    assert 'href="/blogs/hello.html"' in html
    assert 'href="/blog?tag=c"' in html
    assert 'href="/blog?tag=d"' not in html


def test_cards_use_default_cover_image(renderer, test_settings):
    html = str(renderer.cards([make_post(1)]))

    assert f'src="/{test_settings.DEFAULT_COVER_IMAGE}"' in html


def test_cards_empty_state_offers_clear_action(renderer):
    html = str(renderer.cards([], Filter.by_category("Cooking")))

    assert "No posts found for Category: Cooking" in html
    assert 'href="/blog"' in html


def test_pagination_omitted_for_single_page(renderer):
    assert str(renderer.pagination(1, 1)) == ""
    assert str(renderer.pagination(0, 1)) == ""


def test_pagination_keeps_active_filter_in_links(renderer):
    html = str(renderer.pagination(3, 2, Filter.by_tag("travel")))

    assert 'href="/blog?tag=travel&amp;page=3#posts-grid"' in html
    assert 'href="/blog?tag=travel#posts-grid"' in html
    assert 'aria-current="page">2<' in html


def test_active_filter_indicator(renderer):
    assert str(renderer.active_filter(NO_FILTER)) == ""
    html = str(renderer.active_filter(Filter.by_tag("japan")))
    assert "Tag: japan" in html
    assert "Clear filter" in html


def test_sidebar_fragments(renderer, blog_data):
    categories = str(renderer.categories(blog_data.categories, Filter.by_category("Travel")))
    cloud = str(renderer.tag_cloud([("photos", 3), ("travel", 3)]))
    recent = str(renderer.recent(blog_data.posts[:3]))

    assert 'href="/blog?category=Travel"' in categories
    assert '<li class="active">' in categories
    assert '<span class="count">3</span>' in categories
    assert cloud.index("photos") < cloud.index("travel")
    assert "January 1, 2026" in recent


def test_featured_block_shows_video_and_all_tags(renderer, blog_data):
    html = str(renderer.featured(blog_data.posts[0]))

    assert "First January 2026" in html
    assert 'src="/videos/new-year.mp4"' in html
    assert html.count('class="tag"') == 3
    assert str(renderer.featured(None)) == ""


def test_post_content_renders_blocks_in_order_and_skips_unknown(renderer, blog_data):
    html = str(renderer.post_content(blog_data.posts[0]))

    assert html.index("The first morning") < html.index("Sunrise over the lake")
    assert html.index("Sunrise over the lake") < html.index("videos/new-year.mp4")
    assert "Unknown blocks are skipped" not in html


def test_post_content_escapes_paragraphs(renderer):
    post = make_post(1, content=[{"type": "paragraph", "text": EVIL_TITLE}])

    assert "&lt;script&gt;" in str(renderer.post_content(post))


def test_post_content_falls_back_to_excerpt(renderer):
    html = str(renderer.post_content(make_post(1, excerpt="Only an excerpt", video="v.mp4")))

    assert "Only an excerpt" in html
    assert "Watch the video" in html
    assert "Full content coming soon..." in html

    empty = str(renderer.post_content(make_post(2, excerpt=None)))
    assert "No content available for this post." in empty


def test_post_tags_and_empty_tags(renderer):
    html = str(renderer.post_tags(["new year"]))

    assert 'href="/blog?tag=new+year"' in html
    assert "No tags for this post." in str(renderer.post_tags([]))


def test_adjacent_links_hidden_when_missing(renderer):
    assert str(renderer.adjacent_link(None, "previous")) == ""
    html = str(renderer.adjacent_link(make_post(2, title="Older"), "previous"))
    assert "&larr; Older" in html or "← Older" in html


def test_related_truncates_excerpt_and_handles_empty(renderer, test_settings):
    long_excerpt = "x" * 250
    html = str(renderer.related([make_post(2, excerpt=long_excerpt)]))

    assert "Related Posts" in html
    assert "x" * test_settings.RELATED_EXCERPT_LENGTH + "..." in html
    assert "x" * (test_settings.RELATED_EXCERPT_LENGTH + 1) not in html
    assert "No related posts found." in str(renderer.related([]))


def test_render_post_sets_title_and_mounts(renderer, blog_data):
    document = PageDocument(POST_MOUNTS)
    post = blog_data.posts[3]

    renderer.render_post(document, post, previous=None, following=blog_data.posts[2], related=[])

    assert document.title == "A Weekend in Lisbon | Riddhi's Blog"
    assert str(document.read("post-date")) == "Date unavailable"
    assert str(document.read("post-category")) == "Travel"
    assert str(document.read("prev-post")) == ""
    assert "Small Python Tips" in str(document.read("next-post"))


def test_render_listing_into_partial_layout(renderer, blog_data):
    document = PageDocument(["posts-grid"])

    renderer.render_listing(
        document,
        featured=blog_data.posts[0],
        page_posts=blog_data.posts[1:3],
        total_pages=1,
        current_page=1,
        active=NO_FILTER,
        categories=blog_data.categories,
        recent=blog_data.posts[:3],
        tags=[],
    )

    assert "Kyoto in Spring" in str(document.read("posts-grid"))
    assert set(document.mounts) == {"posts-grid"}


def test_error_and_not_found_panels(renderer):
    document = PageDocument(LISTING_MOUNTS)
    renderer.render_error(document, "Failed to load blog data: 404 Not Found", retry_url="/blog?tag=x")
    error = str(document.read("error"))

    assert "Failed to load blog data: 404 Not Found" in error
    assert 'href="/blog?tag=x"' in error
    assert "Try Again" in error

    renderer.render_not_found(document, "<missing>")
    not_found = str(document.read("error"))
    assert "Post not found" in not_found
    assert "&lt;missing&gt;" in not_found
    assert 'href="/blog"' in not_found
