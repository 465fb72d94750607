"""
HTTP routes for the blog/portfolio API.
"""

from fastapi import APIRouter

from blogfolio.routes import auth, contacts, posts, projects, upload

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(contacts.router, prefix="/contact", tags=["contact"])
router.include_router(upload.router, prefix="/upload", tags=["upload"])
