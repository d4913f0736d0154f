"""Assemble the command line that launches code."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol

from ..dependencies import to_class_path
from ..runtime import JdkResolver, RuntimeInfo
from .builder import (
    cds_archive,
    effective_java_version,
    effective_main_class,
    resolve_class_path,
)
from .code import Code
from .context import RunContext

logger = logging.getLogger(__name__)

# First release with -XX:ArchiveClassesAtExit
MIN_CDS_JAVA_VERSION = 13


class CmdGenerator(Protocol):
    """Produces the full launch command for a piece of code."""

    def generate(self) -> List[str]:
        ...


class JavaCmdGenerator:
    """Runs a jar with the ``java`` launcher."""

    def __init__(
        self,
        code: Code,
        context: RunContext,
        jdk_resolver: Optional[JdkResolver] = None,
    ):
        self.code = code
        self.context = context
        self.jdk_resolver = jdk_resolver or JdkResolver(context.java_home)

    def generate(self) -> List[str]:
        """Build the ``java`` invocation.

        Raises:
            JdkNotFoundError: If no suitable java launcher is available
            DependencyError: If dependencies can't be resolved
        """
        java = self.jdk_resolver.resolve_tool(
            "java", effective_java_version(self.code, self.context)
        )
        class_path = resolve_class_path(self.code, self.context)
        jar_file = self.code.jar_file
        main_class = effective_main_class(self.code, self.context)

        cmd = [java.path]
        cmd += self.code.runtime_options
        cmd += self.context.runtime_options
        if self._cds_enabled():
            cmd += self._cds_options(java, jar_file)

        if main_class:
            cmd += ["-classpath", to_class_path([jar_file, *class_path]), main_class]
        else:
            if class_path:
                logger.warning(
                    f"No main class known for {jar_file}; launching with -jar, "
                    f"so extra class path entries are left to its manifest"
                )
            cmd += ["-jar", str(jar_file)]

        cmd += self.context.arguments
        logger.debug(f"Generated command: {cmd}")
        return cmd

    def _cds_enabled(self) -> bool:
        if self.context.enable_cds is not None:
            return self.context.enable_cds
        return self.code.enable_cds

    def _cds_options(self, java: RuntimeInfo, jar_file: Path) -> List[str]:
        major = java.major_version
        if major is not None and major < MIN_CDS_JAVA_VERSION:
            logger.warning(
                f"Class-data sharing needs Java {MIN_CDS_JAVA_VERSION}+, "
                f"{java.path} is Java {major}; ignoring"
            )
            return []
        archive = cds_archive(jar_file)
        if archive.exists():
            return [f"-XX:SharedArchiveFile={archive}"]
        return [f"-XX:ArchiveClassesAtExit={archive}"]


class JshCmdGenerator:
    """Runs a script, or an interactive session, with ``jshell``."""

    def __init__(
        self,
        code: Code,
        context: RunContext,
        jdk_resolver: Optional[JdkResolver] = None,
    ):
        self.code = code
        self.context = context
        self.jdk_resolver = jdk_resolver or JdkResolver(context.java_home)

    def generate(self) -> List[str]:
        """Build the ``jshell`` invocation.

        Raises:
            JdkNotFoundError: If no suitable jshell is available
            DependencyError: If dependencies can't be resolved
        """
        jshell = self.jdk_resolver.resolve_tool(
            "jshell", effective_java_version(self.code, self.context)
        )
        class_path = resolve_class_path(self.code, self.context)
        if self.code.is_jar():
            class_path = [self.code.jar_file, *class_path]

        cmd = [jshell.path]
        cmd += [f"-J{option}" for option in self.code.runtime_options]
        cmd += [f"-J{option}" for option in self.context.runtime_options]
        cmd += self.context.jshell_options
        if class_path:
            cmd += ["--class-path", to_class_path(class_path)]
        cmd.append("--startup=DEFAULT")

        script = self.code.resource_ref.file
        if script is not None and not self.code.is_jar():
            cmd.append(str(script))

        if self.context.arguments:
            logger.warning("JShell scripts don't receive program arguments; ignoring them")

        source_set = self.code.as_source_set()
        if source_set is not None and source_set.sources:
            extra = ", ".join(ref.original_reference for ref in source_set.sources)
            logger.warning(f"JShell only loads {script}; ignoring additional sources {extra}")

        logger.debug(f"Generated command: {cmd}")
        return cmd
