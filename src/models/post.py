# src/models/post.py

"""Generated blog post ready for local export or publishing."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Post:
    """A rendered post: the content record sent to WordPress."""

    title: str
    slug: str
    content: str
    excerpt: str
    categories: list[str] = field(
        default_factory=lambda: list[str]()
    )
    tags: list[str] = field(
        default_factory=lambda: list[str]()
    )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
