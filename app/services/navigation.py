import os
from collections import Counter
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from app.schemas.blog import Post

PostId = Union[int, str]


class Adjacent(NamedTuple):
    previous: Optional[Post]
    next: Optional[Post]


def adjacency(posts: Sequence[Post], current_id: PostId) -> Adjacent:
    """
    List-position neighbours of a post. "previous" is the entry listed after
    it (older in a newest-first feed), "next" the entry listed before it.
    """
    index = next((i for i, post in enumerate(posts) if post.id == current_id), None)
    if index is None:
        return Adjacent(None, None)
    previous = posts[index + 1] if index + 1 < len(posts) else None
    following = posts[index - 1] if index > 0 else None
    return Adjacent(previous, following)


def related(post: Post, all_posts: Sequence[Post], limit: int = 3) -> List[Post]:
    if limit <= 0:
        return []
    matches = [p for p in all_posts if p.id != post.id and p.category == post.category]
    return matches[:limit]


def tag_frequency(posts: Sequence[Post], top_n: int = 15) -> List[Tuple[str, int]]:
    counts = Counter(tag for post in posts for tag in post.tags)
    # sorted() is stable, so Counter's first-seen order breaks ties
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[: max(top_n, 0)]


def category_index(posts: Sequence[Post]) -> Dict[str, int]:
    return dict(Counter(post.category for post in posts))


def featured_post(posts: Sequence[Post]) -> Optional[Post]:
    # First in list order wins when several are marked featured
    return next((post for post in posts if post.featured), None)


def recent_posts(posts: Sequence[Post], limit: int = 3) -> List[Post]:
    return list(posts[: max(limit, 0)])


def find_by_slug(posts: Sequence[Post], slug: str) -> Optional[Post]:
    return next((post for post in posts if post.slug == slug), None)


def slug_from_path(path: str) -> str:
    """Last segment of an already-decoded path without its extension."""
    filename = path.rsplit("/", 1)[-1]
    base, _ = os.path.splitext(filename)
    return base
