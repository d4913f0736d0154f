"""Reference to a piece of code and the local file backing it."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

JAR_SUFFIX = ".jar"
JSH_SUFFIX = ".jsh"


def is_jar(backing_file: Optional[Union[str, Path]]) -> bool:
    """True when the file name ends in the archive suffix."""
    return backing_file is not None and str(backing_file).endswith(JAR_SUFFIX)


def is_jshell(backing_file: Optional[Union[str, Path]]) -> bool:
    """True when the file name ends in the JShell script suffix."""
    return backing_file is not None and str(backing_file).endswith(JSH_SUFFIX)


@dataclass(frozen=True)
class ResourceRef:
    """Origin of a piece of code plus the file currently representing it.

    Attributes:
        original_reference: What the user asked for (path, URL or GAV)
        file: Locally materialized file, possibly a cached/temporary copy.
            ``None`` when nothing has been materialized.
    """

    original_reference: str
    file: Optional[Path] = None

    @classmethod
    def for_file(cls, path: Union[str, Path]) -> "ResourceRef":
        return cls(original_reference=str(path), file=Path(path))

    @classmethod
    def for_reference(
        cls, original_reference: str, file: Optional[Union[str, Path]] = None
    ) -> "ResourceRef":
        return cls(
            original_reference=original_reference,
            file=Path(file) if file is not None else None,
        )

    def is_jar(self) -> bool:
        return is_jar(self.file)

    def is_jshell(self) -> bool:
        return is_jshell(self.file)

    def __repr__(self) -> str:
        if self.file is None or str(self.file) == self.original_reference:
            return f"<ResourceRef {self.original_reference}>"
        return f"<ResourceRef {self.original_reference} @ {self.file}>"
