"""
Document store abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any, Dict, Optional, Protocol, TypeVar

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    cast,
    create_engine,
    func,
    literal,
    or_,
    select,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from blogfolio.errors import DuplicateEmailError
from blogfolio.query import (
    WORD_SEPARATORS,
    ListingQuery,
    record_matches,
    sort_records,
)
from blogfolio.records import (
    ContactRecord,
    PostRecord,
    ProjectRecord,
    UserRecord,
    utcnow,
)

R = TypeVar("R")


class DbClient(Protocol):
    """Interface for document store access."""

    # Users
    def create_user(self, user: UserRecord) -> UserRecord:
        ...

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        ...

    # Posts
    def create_post(self, post: PostRecord) -> PostRecord:
        ...

    def get_post(self, post_id: str) -> Optional[PostRecord]:
        ...

    def get_post_by_slug(
        self, slug: str, status: Optional[str] = None
    ) -> Optional[PostRecord]:
        ...

    def list_posts(self, query: ListingQuery) -> tuple[list[PostRecord], int]:
        ...

    def update_post(self, post_id: str, changes: dict) -> Optional[PostRecord]:
        ...

    def increment_post_views(self, post_id: str) -> Optional[int]:
        ...

    def delete_post(self, post_id: str) -> bool:
        ...

    # Projects
    def create_project(self, project: ProjectRecord) -> ProjectRecord:
        ...

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        ...

    def list_projects(self, query: ListingQuery) -> tuple[list[ProjectRecord], int]:
        ...

    def list_project_categories(self) -> list[str]:
        ...

    def update_project(
        self, project_id: str, changes: dict
    ) -> Optional[ProjectRecord]:
        ...

    def delete_project(self, project_id: str) -> bool:
        ...

    # Contacts
    def create_contact(self, contact: ContactRecord) -> ContactRecord:
        ...

    def get_contact(self, contact_id: str) -> Optional[ContactRecord]:
        ...

    def list_contacts(self, query: ListingQuery) -> tuple[list[ContactRecord], int]:
        ...

    def update_contact(
        self, contact_id: str, changes: dict
    ) -> Optional[ContactRecord]:
        ...

    def delete_contact(self, contact_id: str) -> bool:
        ...


class InMemoryDbClient:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self.posts: Dict[str, PostRecord] = {}
        self.projects: Dict[str, ProjectRecord] = {}
        self.contacts: Dict[str, ContactRecord] = {}

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()
        self.posts.clear()
        self.projects.clear()
        self.contacts.clear()

    @staticmethod
    def _list(collection: Dict[str, R], query: ListingQuery) -> tuple[list[R], int]:
        matched = [r for r in list(collection.values()) if record_matches(r, query)]
        ordered = sort_records(matched, query.sort)
        return ordered[query.skip : query.skip + query.limit], len(matched)

    @staticmethod
    def _update(collection: Dict[str, R], record_id: str, changes: dict) -> Optional[R]:
        record = collection.get(record_id)
        if not record:
            return None
        for name, value in changes.items():
            setattr(record, name, value)
        record.updated_at = utcnow()
        return record

    def create_user(self, user: UserRecord) -> UserRecord:
        if self.get_user_by_email(user.email):
            raise DuplicateEmailError()
        self.users[user.id] = user
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for user in list(self.users.values()):
            if user.email == email:
                return user
        return None

    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        return self._update(self.users, user_id, changes)

    def create_post(self, post: PostRecord) -> PostRecord:
        self.posts[post.id] = post
        return post

    def get_post(self, post_id: str) -> Optional[PostRecord]:
        return self.posts.get(post_id)

    def get_post_by_slug(
        self, slug: str, status: Optional[str] = None
    ) -> Optional[PostRecord]:
        for post in list(self.posts.values()):
            if post.slug == slug and (status is None or post.status == status):
                return post
        return None

    def list_posts(self, query: ListingQuery) -> tuple[list[PostRecord], int]:
        return self._list(self.posts, query)

    def update_post(self, post_id: str, changes: dict) -> Optional[PostRecord]:
        return self._update(self.posts, post_id, changes)

    def increment_post_views(self, post_id: str) -> Optional[int]:
        post = self.posts.get(post_id)
        if not post:
            return None
        views = post.views + 1
        self._update(self.posts, post_id, {"views": views})
        return views

    def delete_post(self, post_id: str) -> bool:
        return self.posts.pop(post_id, None) is not None

    def create_project(self, project: ProjectRecord) -> ProjectRecord:
        self.projects[project.id] = project
        return project

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        return self.projects.get(project_id)

    def list_projects(self, query: ListingQuery) -> tuple[list[ProjectRecord], int]:
        return self._list(self.projects, query)

    def list_project_categories(self) -> list[str]:
        return sorted({p.category for p in list(self.projects.values())})

    def update_project(
        self, project_id: str, changes: dict
    ) -> Optional[ProjectRecord]:
        return self._update(self.projects, project_id, changes)

    def delete_project(self, project_id: str) -> bool:
        return self.projects.pop(project_id, None) is not None

    def create_contact(self, contact: ContactRecord) -> ContactRecord:
        self.contacts[contact.id] = contact
        return contact

    def get_contact(self, contact_id: str) -> Optional[ContactRecord]:
        return self.contacts.get(contact_id)

    def list_contacts(self, query: ListingQuery) -> tuple[list[ContactRecord], int]:
        return self._list(self.contacts, query)

    def update_contact(
        self, contact_id: str, changes: dict
    ) -> Optional[ContactRecord]:
        return self._update(self.contacts, contact_id, changes)

    def delete_contact(self, contact_id: str) -> bool:
        return self.contacts.pop(contact_id, None) is not None


def _word_text(column):
    """
    Lowercased column text with every word separator replaced by a space and
    a space on each end, so `LIKE '% term %'` only matches whole words.
    """
    text = func.lower(cast(column, String))
    for char in WORD_SEPARATORS:
        if char != " ":
            text = func.replace(text, char, " ", type_=String)
    return literal(" ", String).concat(text).concat(" ")


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    Rows mirror the record dataclasses attribute for attribute, so records are
    copied in and out by field name.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    @staticmethod
    def _to_record(row: Any, record_cls: type[R]) -> R:
        return record_cls(**{f.name: getattr(row, f.name) for f in fields(record_cls)})

    def _insert(self, record: R, row_cls: type) -> R:
        with self.Session() as session:
            session.add(row_cls(**asdict(record)))
            session.commit()
        return record

    def _get(self, row_cls: type, record_cls: type[R], record_id: str) -> Optional[R]:
        with self.Session() as session:
            row = session.get(row_cls, record_id)
            return self._to_record(row, record_cls) if row else None

    def _update(
        self, row_cls: type, record_cls: type[R], record_id: str, changes: dict
    ) -> Optional[R]:
        with self.Session() as session:
            row = session.get(row_cls, record_id)
            if not row:
                return None
            for name, value in changes.items():
                setattr(row, name, value)
            row.updated_at = utcnow()
            session.commit()
            session.refresh(row)
            return self._to_record(row, record_cls)

    def _delete(self, row_cls: type, record_id: str) -> bool:
        with self.Session() as session:
            row = session.get(row_cls, record_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    def _list(
        self, row_cls: type, record_cls: type[R], query: ListingQuery
    ) -> tuple[list[R], int]:
        conditions = [
            getattr(row_cls, name) == value for name, value in query.filters.items()
        ]
        if query.search_terms:
            word_texts = [
                _word_text(getattr(row_cls, name)) for name in query.search_fields
            ]
            conditions.append(
                or_(
                    *[
                        text.contains(f" {term} ", autoescape=True)
                        for text in word_texts
                        for term in query.search_terms
                    ]
                )
            )
        order_by = [
            getattr(row_cls, name).desc() if descending else getattr(row_cls, name).asc()
            for name, descending in query.sort
        ]
        with self.Session() as session:
            total = session.execute(
                select(func.count()).select_from(row_cls).where(*conditions)
            ).scalar_one()
            rows = (
                session.execute(
                    select(row_cls)
                    .where(*conditions)
                    .order_by(*order_by)
                    .offset(query.skip)
                    .limit(query.limit)
                )
                .scalars()
                .all()
            )
            return [self._to_record(row, record_cls) for row in rows], total

    def create_user(self, user: UserRecord) -> UserRecord:
        try:
            return self._insert(user, UserRow)
        except IntegrityError as exc:
            raise DuplicateEmailError() from exc

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._get(UserRow, UserRecord, user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.execute(
                select(UserRow).where(UserRow.email == email).limit(1)
            ).scalar_one_or_none()
            return self._to_record(row, UserRecord) if row else None

    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        return self._update(UserRow, UserRecord, user_id, changes)

    def create_post(self, post: PostRecord) -> PostRecord:
        return self._insert(post, PostRow)

    def get_post(self, post_id: str) -> Optional[PostRecord]:
        return self._get(PostRow, PostRecord, post_id)

    def get_post_by_slug(
        self, slug: str, status: Optional[str] = None
    ) -> Optional[PostRecord]:
        stmt = select(PostRow).where(PostRow.slug == slug)
        if status is not None:
            stmt = stmt.where(PostRow.status == status)
        with self.Session() as session:
            row = session.execute(stmt.limit(1)).scalars().first()
            return self._to_record(row, PostRecord) if row else None

    def list_posts(self, query: ListingQuery) -> tuple[list[PostRecord], int]:
        return self._list(PostRow, PostRecord, query)

    def update_post(self, post_id: str, changes: dict) -> Optional[PostRecord]:
        return self._update(PostRow, PostRecord, post_id, changes)

    def increment_post_views(self, post_id: str) -> Optional[int]:
        # Read-modify-write: concurrent increments may be lost.
        with self.Session() as session:
            row = session.get(PostRow, post_id)
            if not row:
                return None
            row.views = (row.views or 0) + 1
            row.updated_at = utcnow()
            session.commit()
            return row.views

    def delete_post(self, post_id: str) -> bool:
        return self._delete(PostRow, post_id)

    def create_project(self, project: ProjectRecord) -> ProjectRecord:
        return self._insert(project, ProjectRow)

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        return self._get(ProjectRow, ProjectRecord, project_id)

    def list_projects(self, query: ListingQuery) -> tuple[list[ProjectRecord], int]:
        return self._list(ProjectRow, ProjectRecord, query)

    def list_project_categories(self) -> list[str]:
        with self.Session() as session:
            rows = session.execute(
                select(ProjectRow.category).distinct().order_by(ProjectRow.category)
            ).scalars()
            return list(rows)

    def update_project(
        self, project_id: str, changes: dict
    ) -> Optional[ProjectRecord]:
        return self._update(ProjectRow, ProjectRecord, project_id, changes)

    def delete_project(self, project_id: str) -> bool:
        return self._delete(ProjectRow, project_id)

    def create_contact(self, contact: ContactRecord) -> ContactRecord:
        return self._insert(contact, ContactRow)

    def get_contact(self, contact_id: str) -> Optional[ContactRecord]:
        return self._get(ContactRow, ContactRecord, contact_id)

    def list_contacts(self, query: ListingQuery) -> tuple[list[ContactRecord], int]:
        return self._list(ContactRow, ContactRecord, query)

    def update_contact(
        self, contact_id: str, changes: dict
    ) -> Optional[ContactRecord]:
        return self._update(ContactRow, ContactRecord, contact_id, changes)

    def delete_contact(self, contact_id: str) -> bool:
        return self._delete(ContactRow, contact_id)


Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="admin")
    avatar = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    social_links = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class PostRow(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)
    featured_image = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    author_id = Column(String, nullable=False, index=True)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class ProjectRow(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    short_description = Column(String(200), nullable=False)
    technologies = Column(JSON, nullable=False, default=list)
    category = Column(String, nullable=False, index=True)
    images = Column(JSON, nullable=False, default=list)
    featured_image = Column(String, nullable=False)
    live_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)
    demo_url = Column(String, nullable=True)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    status = Column(String, nullable=False, index=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    difficulty = Column(String, nullable=False)
    highlights = Column(JSON, nullable=False, default=list)
    challenges = Column(Text, nullable=True)
    solutions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class ContactRow(Base):
    __tablename__ = "contacts"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
