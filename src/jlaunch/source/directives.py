"""Metadata declared inside source files as ``//NAME value`` comment lines.

Example::

    ///usr/bin/env jlaunch "$0" "$@" ; exit $?
    //DEPS info.picocli:picocli:4.7.5
    //JAVA 17+
    //JAVA_OPTIONS -Xmx256m "-Dgreeting=hello world"
    //DESCRIPTION Greets people

Lines beginning with ``///`` are ordinary comments, never directives.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .options import quoted_string_to_list

logger = logging.getLogger(__name__)

_DIRECTIVE = re.compile(r"^//(?P<name>[A-Z][A-Z_]*)(?:[ \t]+(?P<value>.*))?$")
_PACKAGE = re.compile(r"^\s*package\s+(?P<name>[\w.]+)\s*;", re.MULTILINE)
_LIST_SEPARATOR = re.compile(r"[\s,;]+")


@dataclass
class Directives:
    """Everything the directives of one file declared."""

    dependencies: List[str] = field(default_factory=list)
    repositories: List[str] = field(default_factory=list)
    java_version: Optional[str] = None
    runtime_options: List[str] = field(default_factory=list)
    compile_options: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    description_lines: List[str] = field(default_factory=list)
    gav: Optional[str] = None
    main_class: Optional[str] = None
    enable_cds: bool = False
    package: Optional[str] = None

    @property
    def description(self) -> Optional[str]:
        text = "\n".join(self.description_lines).strip()
        return text or None


def _split_list(value: str) -> List[str]:
    return [item for item in _LIST_SEPARATOR.split(value) if item]


def parse_directives(text: str) -> Directives:
    """Collect the directives found in source text."""
    directives = Directives()

    for line in text.splitlines():
        if line.startswith("///"):
            continue
        match = _DIRECTIVE.match(line.rstrip())
        if not match:
            continue

        name = match.group("name")
        value = (match.group("value") or "").strip()

        if name == "DEPS":
            directives.dependencies.extend(_split_list(value))
        elif name == "REPOS":
            directives.repositories.extend(_split_list(value))
        elif name == "JAVA":
            if value:
                directives.java_version = value.split()[0]
        elif name in ("JAVA_OPTIONS", "RUNTIME_OPTIONS"):
            directives.runtime_options.extend(quoted_string_to_list(value))
        elif name in ("JAVAC_OPTIONS", "COMPILE_OPTIONS"):
            directives.compile_options.extend(quoted_string_to_list(value))
        elif name == "SOURCES":
            directives.sources.extend(_split_list(value))
        elif name == "DESCRIPTION":
            directives.description_lines.append(value)
        elif name == "GAV":
            directives.gav = value or None
        elif name == "MAIN":
            directives.main_class = value or None
        elif name == "CDS":
            directives.enable_cds = True
        else:
            logger.debug(f"Ignoring unknown directive //{name}")

    package = _PACKAGE.search(text)
    if package:
        directives.package = package.group("name")

    return directives


def read_directives(path: Path) -> Directives:
    """Read and parse the directives of a source file."""
    # Directives are ASCII; other bytes in the file only need to survive decoding
    return parse_directives(Path(path).read_text(encoding="utf-8", errors="replace"))
