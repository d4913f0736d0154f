"""Dependency declarations and their local resolution."""

from .coordinates import MavenCoordinate, is_coordinate
from .resolver import (
    DEFAULT_LOCAL_REPOSITORY,
    DependencyResolver,
    Repository,
    to_class_path,
)

__all__ = [
    "DEFAULT_LOCAL_REPOSITORY",
    "DependencyResolver",
    "MavenCoordinate",
    "Repository",
    "is_coordinate",
    "to_class_path",
]
