"""Code bases (sources or jars) that can be run, or turned into something runnable.

``Code`` is the shared base; ``Jar`` and ``SourceSet`` are the only variants.
Optional capabilities are plain fields with defaults, fixed at construction,
so a code object never changes after it has been created.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..dependencies import DependencyResolver
from ..locations import DEFAULT_JAR_CACHE_DIR
from .context import RunContext
from .resource import ResourceRef, is_jar, is_jshell

if TYPE_CHECKING:
    from .builder import Builder
    from .cmd_generator import CmdGenerator


def needs_build(code: "Code", context: RunContext) -> bool:
    """Decide whether ``code`` has to be built before it can be launched.

    Jars are already packaged and JShell scripts are interpreted directly;
    forcing JShell mode or asking for an interactive session skips the
    build whatever the file is.
    """
    return not (
        code.is_jar() or code.is_jshell() or context.force_jsh or context.interactive
    )


@dataclass(frozen=True)
class Code(ABC):
    """Common contract of every runnable code base.

    Not constructed directly; use ``Jar`` or ``SourceSet``.

    Attributes:
        resource_ref: Where the code came from and the file backing it
        main_class: Entry point, ``None`` when it can't be determined
        runtime_options: Options for the ``java`` launcher
        enable_cds: Whether a class-data sharing archive should be used
        java_version: Requested Java version (``"17"`` or ``"17+"``)
        description: Human readable description
        gav: Maven coordinate of the code itself
        dependencies: Coordinates the code needs at compile and run time
        repositories: Extra repositories the dependencies come from
        class_paths: Extra local class path entries
    """

    resource_ref: ResourceRef
    main_class: Optional[str] = None
    runtime_options: Tuple[str, ...] = ()
    enable_cds: bool = False
    java_version: Optional[str] = None
    description: Optional[str] = None
    gav: Optional[str] = None
    dependencies: Tuple[str, ...] = ()
    repositories: Tuple[str, ...] = ()
    class_paths: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # An empty description means there is none
        if not self.description:
            object.__setattr__(self, "description", None)
        if not self.gav:
            object.__setattr__(self, "gav", None)

    @property
    @abstractmethod
    def jar_file(self) -> Path:
        """The jar that is, or will be, run."""

    def is_jar(self) -> bool:
        return is_jar(self.resource_ref.file)

    def is_jshell(self) -> bool:
        return is_jshell(self.resource_ref.file)

    def as_jar(self) -> Optional["Jar"]:
        return None

    def as_source_set(self) -> Optional["SourceSet"]:
        return None

    def needs_build(self, context: RunContext) -> bool:
        return needs_build(self, context)

    def contribute_dependencies(self, resolver: DependencyResolver) -> DependencyResolver:
        """Add this code's declarations to ``resolver`` and return it."""
        return (
            resolver.add_repositories(self.repositories)
            .add_dependencies(self.dependencies)
            .add_class_paths(self.class_paths)
        )

    @abstractmethod
    def builder(self, context: RunContext) -> "Builder":
        """Get the builder that makes this code runnable."""

    def cmd_generator(self, context: RunContext) -> "CmdGenerator":
        """Get the generator that assembles the launch command."""
        from .cmd_generator import JavaCmdGenerator, JshCmdGenerator

        if self.is_jshell() or context.force_jsh or context.interactive:
            return JshCmdGenerator(self, context)
        return JavaCmdGenerator(self, context)


@dataclass(frozen=True)
class Jar(Code):
    """An already packaged jar, local or taken from a Maven repository."""

    @property
    def jar_file(self) -> Path:
        if self.resource_ref.file is not None:
            return self.resource_ref.file
        return Path(self.resource_ref.original_reference)

    def as_jar(self) -> Optional["Jar"]:
        return self

    def builder(self, context: RunContext) -> "Builder":
        from .builder import JarBuilder

        return JarBuilder(self, context)


@dataclass(frozen=True)
class SourceSet(Code):
    """One or more not yet compiled source files sharing a class path.

    The main file is the one behind ``resource_ref``; ``sources`` lists the
    additional ones pulled in with ``//SOURCES``.
    """

    sources: Tuple[ResourceRef, ...] = ()
    compile_options: Tuple[str, ...] = ()
    jar_cache_dir: Path = DEFAULT_JAR_CACHE_DIR

    @property
    def source_files(self) -> List[Path]:
        """All backing source files, main file first."""
        refs = (self.resource_ref,) + tuple(self.sources)
        return [ref.file for ref in refs if ref.file is not None]

    @property
    def jar_file(self) -> Path:
        stem = self._stem()
        return self.jar_cache_dir / f"{stem}.{self._digest()}" / f"{stem}.jar"

    def as_source_set(self) -> Optional["SourceSet"]:
        return self

    def builder(self, context: RunContext) -> "Builder":
        from .builder import SourceSetBuilder

        return SourceSetBuilder(self, context)

    def _stem(self) -> str:
        if self.resource_ref.file is not None:
            return self.resource_ref.file.stem
        name = self.resource_ref.original_reference.rstrip("/").rsplit("/", 1)[-1]
        return name.split(".", 1)[0] or "code"

    def _digest(self) -> str:
        """Stable digest of the inputs that identify this source set."""
        sha = hashlib.sha256()
        sha.update(self.resource_ref.original_reference.encode("utf-8"))
        for source in self.source_files:
            sha.update(b"\0")
            sha.update(str(source).encode("utf-8"))
        return sha.hexdigest()[:16]
