"""Turns a user supplied reference into the matching ``Code`` variant."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from ..dependencies import DEFAULT_LOCAL_REPOSITORY, MavenCoordinate, is_coordinate
from ..errors import DependencyError, ResourceNotFoundError
from ..locations import DEFAULT_JAR_CACHE_DIR
from .code import Code, Jar, SourceSet
from .directives import Directives, read_directives
from .resource import ResourceRef

if TYPE_CHECKING:
    from ..config import LaunchConfig

logger = logging.getLogger(__name__)

JAVA_SUFFIX = ".java"


def resolve_reference_path(reference: str, base_dir: Union[str, Path]) -> Path:
    """Resolve a path reference relative to ``base_dir``.

    Examples:
        >>> resolve_reference_path("hello.java", "/project")
        Path("/project/hello.java")
        >>> resolve_reference_path("/abs/app.jar", "/project")
        Path("/abs/app.jar")
    """
    path = Path(reference).expanduser()
    if path.is_absolute():
        return path
    return Path(base_dir) / path


def create_code(
    reference: str,
    config: Optional["LaunchConfig"] = None,
    base_dir: Optional[Union[str, Path]] = None,
) -> Code:
    """Create the code object for a reference.

    Args:
        reference: Path to a .jar/.java/.jsh file, or a Maven coordinate
        config: Configuration supplying cache and repository locations
        base_dir: Directory relative paths are resolved against
            (defaults to the config's project root, then the working directory)

    Returns:
        ``Jar`` for archives and coordinates, ``SourceSet`` for anything else

    Raises:
        ResourceNotFoundError: If the file (or an extra source) doesn't exist
        DependencyError: If a coordinate's artifact is not in the local repository
    """
    if base_dir is None:
        base_dir = config.project_root if config else Path.cwd()
    local_repository = (
        config.dependencies.local_repository if config else DEFAULT_LOCAL_REPOSITORY
    )
    jar_cache_dir = config.cache.jars_dir if config else DEFAULT_JAR_CACHE_DIR

    path = resolve_reference_path(reference, base_dir)
    if not path.is_file() and is_coordinate(reference):
        return _jar_from_coordinate(reference, Path(local_repository).expanduser())

    if not path.is_file():
        raise ResourceNotFoundError(reference)

    ref = ResourceRef.for_reference(reference, path)
    if ref.is_jar():
        return Jar(resource_ref=ref)

    return _source_set_from_file(ref, jar_cache_dir)


def _jar_from_coordinate(reference: str, local_repository: Path) -> Jar:
    coordinate = MavenCoordinate.parse(reference)
    artifact = coordinate.repository_path(local_repository)
    if not artifact.is_file():
        raise DependencyError([reference], str(local_repository))

    return Jar(
        resource_ref=ResourceRef.for_reference(reference, artifact),
        gav=str(coordinate),
    )


def _source_set_from_file(ref: ResourceRef, jar_cache_dir: Path) -> SourceSet:
    directives = read_directives(ref.file)

    return SourceSet(
        resource_ref=ref,
        main_class=directives.main_class or _infer_main_class(ref.file, directives),
        runtime_options=tuple(directives.runtime_options),
        enable_cds=directives.enable_cds,
        java_version=directives.java_version,
        description=directives.description,
        gav=directives.gav,
        dependencies=tuple(directives.dependencies),
        repositories=tuple(directives.repositories),
        sources=tuple(_extra_sources(ref.file, directives)),
        compile_options=tuple(directives.compile_options),
        jar_cache_dir=Path(jar_cache_dir).expanduser(),
    )


def _infer_main_class(path: Path, directives: Directives) -> Optional[str]:
    """Derive ``package.FileStem`` for a single Java file."""
    if path.suffix != JAVA_SUFFIX:
        return None
    if directives.package:
        return f"{directives.package}.{path.stem}"
    return path.stem


def _extra_sources(main_file: Path, directives: Directives) -> List[ResourceRef]:
    """Resolve ``//SOURCES`` entries (globs allowed) next to the main file."""
    refs: List[ResourceRef] = []
    for entry in directives.sources:
        if any(char in entry for char in "*?["):
            matches = sorted(main_file.parent.glob(entry))
            if not matches:
                logger.warning(f"//SOURCES pattern {entry} in {main_file} matched nothing")
            paths = [p for p in matches if p.is_file()]
        else:
            path = resolve_reference_path(entry, main_file.parent)
            if not path.is_file():
                raise ResourceNotFoundError(entry, f"listed in //SOURCES of {main_file}")
            paths = [path]
        for path in paths:
            if path != main_file:
                refs.append(ResourceRef.for_reference(entry, path))
    return refs
