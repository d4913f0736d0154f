"""Maven coordinates (``group:artifact:version``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_COORDINATE = re.compile(
    r"^(?P<group>[^:@\s]+)"
    r":(?P<artifact>[^:@\s]+)"
    r":(?P<version>[^:@\s]+)"
    r"(?::(?P<classifier>[^:@\s]+))?"
    r"(?:@(?P<type>[^:@\s]+))?$"
)


def is_coordinate(reference: str) -> bool:
    """Check if a reference looks like a Maven coordinate rather than a path."""
    return _COORDINATE.match(reference.strip()) is not None


@dataclass(frozen=True)
class MavenCoordinate:
    """A parsed ``group:artifact:version[:classifier][@type]`` coordinate."""

    group_id: str
    artifact_id: str
    version: str
    classifier: Optional[str] = None
    type: str = "jar"

    @classmethod
    def parse(cls, coordinate: str) -> "MavenCoordinate":
        """Parse a coordinate string.

        Raises:
            ValueError: If the string is not a valid coordinate
        """
        match = _COORDINATE.match(coordinate.strip())
        if not match:
            raise ValueError(
                f"Invalid dependency coordinate '{coordinate}', "
                f"expected group:artifact:version[:classifier][@type]"
            )
        return cls(
            group_id=match.group("group"),
            artifact_id=match.group("artifact"),
            version=match.group("version"),
            classifier=match.group("classifier"),
            type=match.group("type") or "jar",
        )

    def repository_path(self, local_repository: Path) -> Path:
        """Location of the artifact inside a Maven-layout repository."""
        file_name = f"{self.artifact_id}-{self.version}"
        if self.classifier:
            file_name += f"-{self.classifier}"
        file_name += f".{self.type}"
        return (
            Path(local_repository)
            / Path(*self.group_id.split("."))
            / self.artifact_id
            / self.version
            / file_name
        )

    def __str__(self) -> str:
        text = f"{self.group_id}:{self.artifact_id}:{self.version}"
        if self.classifier:
            text += f":{self.classifier}"
        if self.type != "jar":
            text += f"@{self.type}"
        return text
