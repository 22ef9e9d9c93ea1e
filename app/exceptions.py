from typing import Optional


class BlogError(Exception):
    """Base class for errors surfaced to readers as a visible panel."""


class LoadError(BlogError):
    """The blog data document could not be loaded."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(message)


class FetchError(LoadError):
    def __init__(self, source: str, status: Optional[int] = None, reason: str = ""):
        self.status = status
        self.reason = reason
        if status is None:
            detail = reason or "unreachable"
            message = f"Failed to load blog data from {source}: {detail}"
        else:
            message = f"Failed to load blog data: {status} {reason}".rstrip()
        super().__init__(source, message)


class ParseError(LoadError):
    def __init__(self, source: str, detail: str):
        self.detail = detail
        super().__init__(source, f"Blog data at {source} is malformed: {detail}")


class NotFoundError(BlogError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Post not found: {slug}")
