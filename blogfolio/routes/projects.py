"""
Portfolio project routes.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query

from blogfolio.db import DbClient
from blogfolio.dependencies import get_db_client, require_admin
from blogfolio.errors import NotFoundError
from blogfolio.patches import PROJECT_PATCH_POLICY, select_changes
from blogfolio.query import PROJECT_LISTING, ListingParams, build_query, paginate
from blogfolio.records import Difficulty, ProjectRecord, ProjectStatus, UserRecord
from blogfolio.schemas import (
    MessageResponse,
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)

router = APIRouter()

PROJECT_NOT_FOUND = "Project not found"


def _project_response(project: ProjectRecord) -> ProjectResponse:
    return ProjectResponse.model_validate(asdict(project))


@router.get("", response_model=ProjectListResponse)
@router.get("/", response_model=ProjectListResponse, include_in_schema=False)
def list_projects(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    featured: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: DbClient = Depends(get_db_client),
):
    query = build_query(
        ListingParams(
            page=page,
            limit=limit,
            category=category,
            status=status,
            featured=featured,
            search=search,
        ),
        PROJECT_LISTING,
    )
    projects, total = db.list_projects(query)
    result = paginate([_project_response(p) for p in projects], total, query)
    return ProjectListResponse(
        projects=result.items,
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_projects=result.total_count,
    )


# Declared before /{project_id} so "categories" is not taken as an id.
@router.get("/categories", response_model=list[str])
def list_categories(db: DbClient = Depends(get_db_client)):
    """
    Distinct categories currently in use, for populating client filters.
    """
    return db.list_project_categories()


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, db: DbClient = Depends(get_db_client)):
    project = db.get_project(project_id)
    if not project:
        raise NotFoundError(PROJECT_NOT_FOUND)
    return _project_response(project)


@router.post("", response_model=ProjectResponse)
@router.post("/", response_model=ProjectResponse, include_in_schema=False)
def create_project(
    payload: ProjectCreateRequest,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    project = ProjectRecord(
        title=payload.title,
        description=payload.description,
        short_description=payload.short_description,
        technologies=payload.technologies,
        category=payload.category,
        images=payload.images or [],
        featured_image=payload.featured_image,
        live_url=payload.live_url,
        github_url=payload.github_url,
        demo_url=payload.demo_url,
        featured=payload.featured or False,
        status=payload.status or ProjectStatus.COMPLETED.value,
        start_date=payload.start_date,
        end_date=payload.end_date,
        difficulty=payload.difficulty or Difficulty.INTERMEDIATE.value,
        highlights=payload.highlights or [],
        challenges=payload.challenges,
        solutions=payload.solutions,
    )
    db.create_project(project)
    return _project_response(project)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectUpdateRequest,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    project = db.get_project(project_id)
    if not project:
        raise NotFoundError(PROJECT_NOT_FOUND)
    changes = select_changes(
        payload.model_dump(exclude_unset=True), PROJECT_PATCH_POLICY
    )
    # The featured flag takes part in sorting, so null clears it to False.
    if "featured" in changes and changes["featured"] is None:
        changes["featured"] = False
    if changes:
        project = db.update_project(project_id, changes) or project
    return _project_response(project)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: str,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if not db.delete_project(project_id):
        raise NotFoundError(PROJECT_NOT_FOUND)
    return MessageResponse(message="Project removed")
