"""
Project module - Project membership and workspace loading

This module provides:
- index: ProjectIndex and the membership predicates
- workspace: angular.json loading and bulk document discovery
"""

from transcheck.project.index import (
    ProjectIndex,
    belongs,
    glob_match,
    is_excluded,
)

from transcheck.project.workspace import (
    find_files,
    load_angular_projects,
    load_document,
    load_workspace,
    read_angular_workspace,
)
