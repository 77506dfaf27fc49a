"""Query-parameter dependencies for paged list endpoints."""

from fastapi import Query

from tasktrack.config import settings
from tasktrack.db.pagination import Page, PageRequest


def project_page(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(settings.default_project_page_size, ge=1, le=settings.max_page_size),
    sort: str = Query("id", description='Sort spec, e.g. "title,desc"'),
) -> PageRequest:
    return PageRequest(page=page, size=size, sort=sort)


def task_page(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(settings.default_task_page_size, ge=1, le=settings.max_page_size),
    sort: str = Query("id", description='Sort spec, e.g. "due_date,asc"'),
) -> PageRequest:
    return PageRequest(page=page, size=size, sort=sort)


def page_body(page: Page, content: list) -> dict:
    """Serialize a Page with already-converted content items."""
    return {
        "content": content,
        "page": page.page,
        "size": page.size,
        "total_elements": page.total_elements,
        "total_pages": page.total_pages,
    }
