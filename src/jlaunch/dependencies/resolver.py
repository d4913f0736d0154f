"""Collects dependency declarations and maps them onto local artifacts."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..errors import DependencyError
from .coordinates import MavenCoordinate

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_REPOSITORY = Path.home() / ".m2" / "repository"

# Well-known repository aliases accepted by //REPOS and the config file
REPOSITORY_ALIASES: Dict[str, str] = {
    "mavencentral": "https://repo1.maven.org/maven2/",
    "google": "https://maven.google.com/",
    "jitpack": "https://jitpack.io/",
}


@dataclass(frozen=True)
class Repository:
    """A named remote repository declaration."""

    name: str
    url: str

    @classmethod
    def parse(cls, declaration: str) -> "Repository":
        """Parse ``name=url``, a bare alias or a bare URL."""
        declaration = declaration.strip()
        if "=" in declaration:
            name, url = declaration.split("=", 1)
            return cls(name=name.strip(), url=url.strip())
        alias = declaration.lower()
        if alias in REPOSITORY_ALIASES:
            return cls(name=alias, url=REPOSITORY_ALIASES[alias])
        return cls(name=declaration, url=declaration)


class DependencyResolver:
    """Pending dependency declarations for one build or launch.

    Every ``add_*`` method returns the resolver so calls can be chained.
    Resolution is local: coordinates are looked up in a Maven-layout
    repository, nothing is downloaded and no transitive graph is walked.
    """

    def __init__(self, local_repository: Optional[Union[str, Path]] = None):
        self.local_repository = Path(
            local_repository if local_repository is not None else DEFAULT_LOCAL_REPOSITORY
        ).expanduser()
        self.dependencies: List[str] = []
        self.repositories: List[Repository] = []
        self.class_paths: List[str] = []

    def add_dependency(self, coordinate: str) -> "DependencyResolver":
        if coordinate not in self.dependencies:
            self.dependencies.append(coordinate)
        return self

    def add_dependencies(self, coordinates: Iterable[str]) -> "DependencyResolver":
        for coordinate in coordinates:
            self.add_dependency(coordinate)
        return self

    def add_repository(self, repository: Union[str, Repository]) -> "DependencyResolver":
        if isinstance(repository, str):
            repository = Repository.parse(repository)
        if repository not in self.repositories:
            self.repositories.append(repository)
        return self

    def add_repositories(self, repositories: Iterable[Union[str, Repository]]) -> "DependencyResolver":
        for repository in repositories:
            self.add_repository(repository)
        return self

    def add_class_paths(self, class_paths: Iterable[str]) -> "DependencyResolver":
        for class_path in class_paths:
            if class_path not in self.class_paths:
                self.class_paths.append(class_path)
        return self

    def resolve(self) -> List[Path]:
        """Map every declaration onto a local file.

        Returns:
            Artifact paths in declaration order, followed by class paths

        Raises:
            ValueError: If a coordinate is malformed
            DependencyError: If any artifact is missing from the local repository
        """
        resolved: List[Path] = []
        missing: List[str] = []

        for dependency in self.dependencies:
            coordinate = MavenCoordinate.parse(dependency)
            artifact = coordinate.repository_path(self.local_repository)
            if artifact.is_file():
                resolved.append(artifact)
            else:
                logger.debug(f"Artifact for {dependency} not found at {artifact}")
                missing.append(dependency)

        if missing:
            raise DependencyError(missing, str(self.local_repository))

        resolved.extend(Path(class_path) for class_path in self.class_paths)
        return resolved


def to_class_path(paths: Iterable[Union[str, Path]]) -> str:
    """Join entries with the platform path separator."""
    return os.pathsep.join(str(path) for path in paths)
