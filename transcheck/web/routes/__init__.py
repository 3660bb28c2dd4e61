"""Route blueprints for the HTTP transport."""

from .documents import documents_bp
from .projects import projects_bp
from .queries import queries_bp

__all__ = [
    "documents_bp",
    "projects_bp",
    "queries_bp",
]
