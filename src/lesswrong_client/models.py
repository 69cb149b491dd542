from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    id: str
    username: Optional[str]
    display_name: Optional[str]
    slug: Optional[str]
    bio: Optional[str]


@dataclass(frozen=True)
class Post:
    id: str
    title: str
    author: str
    user: Optional[User]
    slug: str
    page_url: str
    html_body: str
    markdown: Optional[str]
    base_score: float
    comment_count: Optional[int]
    word_count: Optional[int]
    posted_at: datetime


@dataclass(frozen=True)
class Comment:
    id: str
    post_id: Optional[str]
    parent_comment_id: Optional[str]  # None for top-level comments
    author: str
    user: Optional[User]
    page_url: str
    html_body: str
    markdown: Optional[str]
    base_score: float
    vote_count: int
    posted_at: datetime
    deleted: bool = False

    @property
    def is_top_level(self) -> bool:
        return self.parent_comment_id is None
