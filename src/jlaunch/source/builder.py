"""Builders turn code into a runnable jar (or confirm it already is one)."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
import zipfile
from pathlib import Path
from typing import List, Optional, Protocol

from ..dependencies import DependencyResolver, to_class_path
from ..errors import BuildError, ResourceNotFoundError
from ..runtime import JdkResolver
from .code import Code, Jar, SourceSet
from .context import RunContext

logger = logging.getLogger(__name__)

MANIFEST_PATH = "META-INF/MANIFEST.MF"
CDS_SUFFIX = ".jsa"


class Builder(Protocol):
    """Prepares code for launching."""

    def build(self) -> Code:
        """Build if necessary and return the code to launch."""
        ...


def effective_java_version(code: Code, context: RunContext) -> Optional[str]:
    """The context's Java version override wins over the code's own."""
    return context.java_version or code.java_version


def effective_main_class(code: Code, context: RunContext) -> Optional[str]:
    return context.main_class or code.main_class


def resolve_class_path(code: Code, context: RunContext) -> List[Path]:
    """Resolve the code's dependencies plus whatever the context adds.

    Raises:
        DependencyError: If an artifact is missing
    """
    resolver = DependencyResolver(context.local_repository)
    code.contribute_dependencies(resolver)
    resolver.add_dependencies(context.additional_dependencies)
    resolver.add_class_paths(context.additional_class_paths)
    return resolver.resolve()


def cds_archive(jar_file: Path) -> Path:
    """Class-data sharing archive kept next to a jar."""
    return jar_file.with_suffix(CDS_SUFFIX)


class JarBuilder:
    """Jars are already built; only make sure the archive is there."""

    def __init__(self, code: Jar, context: RunContext):
        self.code = code
        self.context = context

    def build(self) -> Code:
        if not self.code.jar_file.is_file():
            raise ResourceNotFoundError(
                self.code.resource_ref.original_reference, "jar file does not exist"
            )
        return self.code


class SourceSetBuilder:
    """Compiles a source set with ``javac`` and packages it into its jar.

    The jar lives at ``SourceSet.jar_file`` and is reused while it is
    newer than every source file, unless the context asks for a fresh build.
    """

    def __init__(
        self,
        code: SourceSet,
        context: RunContext,
        jdk_resolver: Optional[JdkResolver] = None,
    ):
        self.code = code
        self.context = context
        self.jdk_resolver = jdk_resolver or JdkResolver(context.java_home)

    def build(self) -> Code:
        """Build the jar unless it is up to date.

        Raises:
            DependencyError: If dependencies can't be resolved
            JdkNotFoundError: If no suitable javac is available
            BuildError: If compilation fails
        """
        if not self.code.needs_build(self.context):
            return self.code

        jar_file = self.code.jar_file
        if not self.context.fresh and self.is_up_to_date():
            logger.debug(f"Using cached build {jar_file}")
            return self.code

        class_path = resolve_class_path(self.code, self.context)
        javac = self.jdk_resolver.resolve_tool(
            "javac", effective_java_version(self.code, self.context)
        )

        with tempfile.TemporaryDirectory(prefix="jlaunch-build-") as tmp_dir:
            classes_dir = Path(tmp_dir)
            self._compile(javac.path, classes_dir, class_path)
            self._package(classes_dir, jar_file)

        logger.debug(f"Built {jar_file}")
        return self.code

    def is_up_to_date(self) -> bool:
        jar_file = self.code.jar_file
        if not jar_file.is_file():
            return False
        built_at = jar_file.stat().st_mtime
        for source in self.code.source_files:
            try:
                if source.stat().st_mtime > built_at:
                    return False
            except FileNotFoundError:
                logger.debug(f"Source {source} disappeared since it was listed")
                return False
        return True

    def _compile(self, javac: str, classes_dir: Path, class_path: List[Path]) -> None:
        cmd = [javac, *self.code.compile_options, "-d", str(classes_dir)]
        if class_path:
            cmd += ["-classpath", to_class_path(class_path)]
        cmd += [str(source) for source in self.code.source_files]

        logger.debug(f"Compiling: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise BuildError(f"Could not run {javac}: {e}") from e

        if result.returncode != 0:
            raise BuildError(
                f"Error compiling {self.code.resource_ref.original_reference}",
                returncode=result.returncode,
                output=result.stdout + result.stderr,
            )

    def _package(self, classes_dir: Path, jar_file: Path) -> None:
        jar_file.parent.mkdir(parents=True, exist_ok=True)

        # A stale class-data sharing archive would not match the new classes
        stale_cds = cds_archive(jar_file)
        if stale_cds.exists():
            stale_cds.unlink()

        tmp_jar = jar_file.with_name(jar_file.name + ".tmp")
        with zipfile.ZipFile(tmp_jar, "w", zipfile.ZIP_DEFLATED) as jar:
            jar.writestr(MANIFEST_PATH, self._manifest())
            for path in sorted(classes_dir.rglob("*")):
                if path.is_file():
                    jar.write(path, path.relative_to(classes_dir).as_posix())
        os.replace(tmp_jar, jar_file)

    def _manifest(self) -> str:
        lines = ["Manifest-Version: 1.0", "Created-By: jlaunch"]
        # The jar is cached across runs, so a per-run main class override stays out
        if self.code.main_class:
            lines.append(f"Main-Class: {self.code.main_class}")
        if self.code.gav:
            lines.append(f"Implementation-Title: {self.code.gav}")
        return "\r\n".join(lines) + "\r\n\r\n"
