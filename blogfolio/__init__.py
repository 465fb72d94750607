"""
Backend package for the blog/portfolio site.

This package provides a FastAPI application with an admin-only auth layer,
post/project/contact stores and an image upload proxy to the media host.
"""
