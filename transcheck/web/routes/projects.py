"""Project list notifications."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from transcheck.core.models import Project
from transcheck.exceptions import PayloadError
from transcheck.logger import get_logger
from transcheck.web.state import get_state

projects_bp = Blueprint("projects", __name__)
logger = get_logger(__name__)


@projects_bp.get("/projects")
def list_projects():
    """Return the current project list."""
    state = get_state()
    with state.lock:
        projects = [project.to_dict() for project in state.provider.projects]
    return jsonify({"projects": projects})


@projects_bp.post("/projects")
def update_projects():
    """Replace the project list wholesale and re-validate open markup."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        data = data.get("projects")
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise PayloadError("Expected a list of project objects", code="invalid_projects")

    try:
        projects = [Project.from_dict(item) for item in data]
    except KeyError as e:
        raise PayloadError(f"Project is missing field {e}", code="invalid_projects") from e

    state = get_state()
    with state.lock:
        state.provider.projects_updated(projects)

    logger.info("Projects updated: %s", ", ".join(project.label for project in projects) or "none")
    return jsonify({"projects": len(projects)})
