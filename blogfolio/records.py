"""
Record types held by the document stores.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class ProjectStatus(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    PLANNED = "planned"


class ProjectCategory(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_APP = "Mobile App"
    DESKTOP_APP = "Desktop App"
    API = "API"
    GAME = "Game"
    OTHER = "Other"


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class ContactStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserRecord:
    name: str
    email: str
    password_hash: str
    # Stored as a plain string so unknown roles in existing data stay readable.
    role: str = Role.ADMIN.value
    avatar: Optional[str] = None
    bio: Optional[str] = None
    social_links: dict = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@dataclass
class PostRecord:
    title: str
    slug: str
    content: str
    category: str
    author_id: str
    excerpt: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    featured_image: Optional[str] = None
    status: str = PostStatus.DRAFT.value
    views: int = 0
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class ProjectRecord:
    title: str
    description: str
    short_description: str
    category: str
    featured_image: str
    technologies: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: bool = False
    status: str = ProjectStatus.COMPLETED.value
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    difficulty: str = Difficulty.INTERMEDIATE.value
    highlights: list[str] = field(default_factory=list)
    challenges: Optional[str] = None
    solutions: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class ContactRecord:
    name: str
    email: str
    subject: str
    message: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: str = ContactStatus.UNREAD.value
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
