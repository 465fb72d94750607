"""
Blog post routes.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query

from blogfolio.db import DbClient
from blogfolio.dependencies import get_db_client, require_admin
from blogfolio.errors import NotFoundError
from blogfolio.patches import POST_PATCH_POLICY, select_changes
from blogfolio.query import POST_LISTING, ListingParams, build_query, paginate
from blogfolio.records import PostRecord, PostStatus, UserRecord
from blogfolio.schemas import (
    MessageResponse,
    PostCreateRequest,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostUpdateRequest,
    ViewsResponse,
)
from blogfolio.slugs import slugify

router = APIRouter()

POST_NOT_FOUND = "Post not found"


def _with_author(
    db: DbClient, post: PostRecord, model: type[PostResponse] = PostResponse
) -> PostResponse:
    author = db.get_user(post.author_id)
    payload = asdict(post)
    payload["author"] = asdict(author) if author else None
    return model.model_validate(payload)


def _get_post_or_404(db: DbClient, post_id: str) -> PostRecord:
    post = db.get_post(post_id)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return post


@router.get("", response_model=PostListResponse)
@router.get("/", response_model=PostListResponse, include_in_schema=False)
def list_posts(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(
        None, description='Defaults to "published"; "all" includes drafts.'
    ),
    db: DbClient = Depends(get_db_client),
):
    query = build_query(
        ListingParams(
            page=page, limit=limit, category=category, status=status, search=search
        ),
        POST_LISTING,
    )
    posts, total = db.list_posts(query)
    result = paginate([_with_author(db, post) for post in posts], total, query)
    return PostListResponse(
        posts=result.items,
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_posts=result.total_count,
    )


@router.get("/slug/{slug}", response_model=PostDetailResponse)
def get_post_by_slug_admin(
    slug: str,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    """
    Fetch a post by slug regardless of status (admin editor).
    """
    post = db.get_post_by_slug(slug)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return _with_author(db, post, PostDetailResponse)


@router.get("/{slug}", response_model=PostDetailResponse)
def get_post_by_slug(slug: str, db: DbClient = Depends(get_db_client)):
    post = db.get_post_by_slug(slug, status=PostStatus.PUBLISHED.value)
    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return _with_author(db, post, PostDetailResponse)


@router.put("/{post_id}/view", response_model=ViewsResponse)
def increment_views(post_id: str, db: DbClient = Depends(get_db_client)):
    views = db.increment_post_views(post_id)
    if views is None:
        raise NotFoundError(POST_NOT_FOUND)
    return ViewsResponse(views=views)


@router.post("", response_model=PostResponse)
@router.post("/", response_model=PostResponse, include_in_schema=False)
def create_post(
    payload: PostCreateRequest,
    user: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    post = PostRecord(
        title=payload.title,
        slug=slugify(payload.title),
        content=payload.content,
        excerpt=payload.excerpt,
        category=payload.category,
        tags=payload.tags or [],
        featured_image=payload.featured_image,
        status=payload.status or PostStatus.DRAFT.value,
        author_id=user.id,
    )
    db.create_post(post)
    return _with_author(db, post)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    payload: PostUpdateRequest,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    post = _get_post_or_404(db, post_id)
    changes = select_changes(payload.model_dump(exclude_unset=True), POST_PATCH_POLICY)
    if changes:
        post = db.update_post(post_id, changes) or post
    return _with_author(db, post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if not db.delete_post(post_id):
        raise NotFoundError(POST_NOT_FOUND)
    return MessageResponse(message="Post deleted successfully")
