"""
Pydantic schemas for the blog/portfolio API.

JSON keys are camelCase on the wire; request bodies also accept the
snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from blogfolio.records import (
    Difficulty,
    PostStatus,
    ProjectCategory,
    ProjectStatus,
)

NonEmptyStr = Annotated[str, Field(min_length=1)]
Highlight = Annotated[str, Field(max_length=200)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class MessageResponse(BaseModel):
    message: str


# Auth


class RegisterRequest(ApiModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=6)


class CreateAdminRequest(RegisterRequest):
    admin_key: NonEmptyStr


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


class ProfileUpdateRequest(ApiModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    social_links: Optional[dict[str, str]] = None


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    social_links: dict[str, str] = Field(default_factory=dict)


class AuthResponse(ApiModel):
    token: str
    user: UserResponse


# Posts


class PostCreateRequest(ApiModel):
    title: NonEmptyStr
    content: NonEmptyStr
    category: NonEmptyStr
    excerpt: Optional[str] = None
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    status: Optional[PostStatus] = None


class PostUpdateRequest(ApiModel):
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    status: Optional[PostStatus] = None


class AuthorSummary(ApiModel):
    id: str
    name: str
    avatar: Optional[str] = None


class AuthorDetail(AuthorSummary):
    bio: Optional[str] = None
    social_links: dict[str, str] = Field(default_factory=dict)


class PostResponse(ApiModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    category: str
    tags: list[str] = Field(default_factory=list)
    featured_image: Optional[str] = None
    status: str
    views: int
    author: Optional[AuthorSummary] = None
    created_at: datetime
    updated_at: datetime


class PostDetailResponse(PostResponse):
    author: Optional[AuthorDetail] = None


class PostListResponse(ApiModel):
    posts: list[PostResponse]
    current_page: int
    total_pages: int
    total_posts: int


class ViewsResponse(BaseModel):
    views: int


# Projects


class ProjectCreateRequest(ApiModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    short_description: str = Field(..., min_length=1, max_length=200)
    category: ProjectCategory
    technologies: list[str] = Field(..., min_length=1)
    featured_image: NonEmptyStr
    images: Optional[list[str]] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    difficulty: Optional[Difficulty] = None
    highlights: Optional[list[Highlight]] = None
    challenges: Optional[str] = Field(default=None, max_length=500)
    solutions: Optional[str] = Field(default=None, max_length=500)


class ProjectUpdateRequest(ApiModel):
    title: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    short_description: Optional[str] = Field(default=None, max_length=200)
    category: Optional[ProjectCategory] = None
    technologies: Optional[list[str]] = None
    featured_image: Optional[str] = None
    images: Optional[list[str]] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    difficulty: Optional[Difficulty] = None
    highlights: Optional[list[Highlight]] = None
    challenges: Optional[str] = Field(default=None, max_length=500)
    solutions: Optional[str] = Field(default=None, max_length=500)


class ProjectResponse(ApiModel):
    id: str
    title: str
    description: str
    short_description: str
    technologies: list[str]
    category: str
    images: list[str]
    featured_image: str
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: bool
    status: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    difficulty: str
    highlights: list[str]
    challenges: Optional[str] = None
    solutions: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(ApiModel):
    projects: list[ProjectResponse]
    current_page: int
    total_pages: int
    total_projects: int


# Contacts


class ContactCreateRequest(ApiModel):
    name: NonEmptyStr
    email: EmailStr
    subject: NonEmptyStr
    message: NonEmptyStr


class ContactStatusRequest(ApiModel):
    # Checked by the route so bad values get the "Invalid status" message.
    status: Optional[str] = None


class ContactResponse(ApiModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ContactListResponse(ApiModel):
    contacts: list[ContactResponse]
    current_page: int
    total_pages: int
    total_contacts: int


# Upload


class UploadResponse(BaseModel):
    url: str
    public_id: str
    width: int
    height: int
