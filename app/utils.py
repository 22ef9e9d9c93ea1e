import datetime
import math
from typing import Optional

from app.schemas.blog import Post

DATE_PLACEHOLDER = "Date unavailable"


def format_date(value: Optional[str]) -> str:
    """ISO date -> "January 1, 2026"; anything unparseable gets a placeholder."""
    if not value:
        return DATE_PLACEHOLDER
    try:
        parsed = datetime.datetime.fromisoformat(value.strip())
    except (TypeError, ValueError):
        return DATE_PLACEHOLDER
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def post_text(post: Post) -> str:
    if not post.content:
        return post.excerpt or ""
    parts = [block.text or block.caption or "" for block in post.content]
    return " ".join(part for part in parts if part)


def calculate_reading_time(
    text: str, words_per_minute: int = 200, chars_per_word: int = 5
) -> str:
    # Heuristic: character count / chars_per_word approximates the word count
    words = len(text) / chars_per_word
    minutes = math.ceil(words / words_per_minute) or 1
    return f"{minutes} min read"


def read_time(post: Post, words_per_minute: int = 200, chars_per_word: int = 5) -> str:
    if post.readTime:
        return post.readTime
    return calculate_reading_time(post_text(post), words_per_minute, chars_per_word)
