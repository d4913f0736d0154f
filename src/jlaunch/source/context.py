"""Per-invocation execution intent."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class RunContext:
    """What the caller wants to happen for one build-and-run cycle.

    Attributes:
        force_jsh: Treat the code as a JShell script whatever its suffix
        interactive: Open an interactive JShell session instead of a batch run
        fresh: Ignore cached build output
        java_version: Java version override (``"17"`` or ``"17+"``)
        main_class: Entry point override
        enable_cds: Class-data sharing override, ``None`` defers to the code
        runtime_options: Extra options for the Java launcher
        jshell_options: Extra options for JShell itself
        additional_dependencies: Coordinates added on top of the code's own
        additional_class_paths: Local class path entries added on top
        arguments: Arguments passed to the program itself
        local_repository: Maven-layout directory used to resolve coordinates
        java_home: Explicit JDK installation to use
    """

    force_jsh: bool = False
    interactive: bool = False
    fresh: bool = False
    java_version: Optional[str] = None
    main_class: Optional[str] = None
    enable_cds: Optional[bool] = None
    runtime_options: Tuple[str, ...] = ()
    jshell_options: Tuple[str, ...] = ()
    additional_dependencies: Tuple[str, ...] = ()
    additional_class_paths: Tuple[str, ...] = ()
    arguments: Tuple[str, ...] = ()
    local_repository: Optional[Path] = None
    java_home: Optional[Path] = None
