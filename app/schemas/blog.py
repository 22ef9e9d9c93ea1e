from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

UNCATEGORIZED = "Uncategorized"


def _optional_text(value) -> Optional[str]:
    """Numbers become text; anything else that is not a string becomes None."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class ContentBlock(BaseModel):
    """One body block: paragraph{text}, image{src, caption?} or video{src}.

    Unknown block types are kept here and skipped at render time.
    """

    type: str
    text: Optional[str] = None
    src: Optional[str] = None
    caption: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _block_type(cls, value):
        return _optional_text(value) or ""

    @field_validator("text", "src", "caption", mode="before")
    @classmethod
    def _block_text(cls, value):
        return _optional_text(value)


class Post(BaseModel):
    id: Union[int, str]
    slug: str
    title: str = ""
    excerpt: Optional[str] = None
    date: Optional[str] = None
    category: str = UNCATEGORIZED
    subcategory: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    coverImage: Optional[str] = None
    video: Optional[str] = None
    readTime: Optional[str] = None
    featured: bool = False
    content: Optional[List[ContentBlock]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value):
        return _optional_text(value) or ""

    @field_validator(
        "excerpt", "subcategory", "coverImage", "video", "readTime", mode="before"
    )
    @classmethod
    def _tolerate_scalars(cls, value):
        return _optional_text(value)

    @field_validator("date", mode="before")
    @classmethod
    def _text_date(cls, value):
        # Only ISO strings are dates; anything else renders the placeholder
        return value if isinstance(value, str) else None

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value):
        return _optional_text(value) or UNCATEGORIZED

    @field_validator("tags", mode="before")
    @classmethod
    def _default_tags(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return [text for text in map(_optional_text, value) if text]

    @field_validator("featured", mode="before")
    @classmethod
    def _default_featured(cls, value):
        return bool(value)

    @field_validator("content", mode="before")
    @classmethod
    def _tolerate_content(cls, value):
        if not isinstance(value, list):
            return None
        return [block for block in value if isinstance(block, dict)]


class BlogData(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    categories: Dict[str, int] = Field(default_factory=dict)

    @field_validator("posts", "categories", mode="before")
    @classmethod
    def _tolerate_null(cls, value, info):
        if value is None:
            return [] if info.field_name == "posts" else {}
        return value
