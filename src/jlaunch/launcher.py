"""Prepare and run code: the end-to-end build-and-launch cycle."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Union

from .config import LaunchConfig, load_config
from .errors import LaunchError
from .source import Code, RunContext, create_code

logger = logging.getLogger(__name__)


@dataclass
class LaunchPlan:
    """Everything needed to start the code.

    Attributes:
        code: The code that will run (built already when ``built`` is set)
        context: Run context after configuration defaults were merged in
        command: Full command line
        built: Whether a build step ran (or was satisfied from the cache)
    """

    code: Code
    context: RunContext
    command: List[str]
    built: bool = False


class Launcher:
    """Ties configuration, code creation, building and command generation together."""

    def __init__(
        self,
        config: Optional[LaunchConfig] = None,
        project_path: Optional[Union[str, Path]] = None,
    ):
        if config is None:
            config = load_config(Path(project_path) if project_path else Path.cwd())
        self.config = config

    def apply_defaults(self, code: Code, context: RunContext) -> RunContext:
        """Merge configured defaults into a run context.

        Configured options go before the caller's so later ones win on the
        command line. The configured Java version and CDS setting only apply
        when neither the caller nor the code expressed a preference.
        """
        run = self.config.run
        context = replace(
            context,
            runtime_options=(*self.config.java_options(), *context.runtime_options),
            jshell_options=(*self.config.jshell_options(), *context.jshell_options),
            local_repository=context.local_repository
            or self.config.dependencies.local_repository,
            java_home=context.java_home
            or (Path(self.config.jdk.java_home) if self.config.jdk.java_home else None),
        )
        if context.java_version is None and code.java_version is None and run.java_version:
            context = replace(context, java_version=run.java_version)
        if context.enable_cds is None and run.enable_cds:
            context = replace(context, enable_cds=True)
        return context

    def prepare(self, reference: str, context: Optional[RunContext] = None) -> LaunchPlan:
        """Create, build if needed, and generate the launch command for a reference.

        Raises:
            LaunchError: Any collaborator failure, unchanged
        """
        code = create_code(reference, self.config)
        context = self.apply_defaults(code, context or RunContext())

        built = False
        if code.needs_build(context):
            code = code.builder(context).build()
            built = True

        command = code.cmd_generator(context).generate()
        return LaunchPlan(code=code, context=context, command=command, built=built)

    def run(self, plan: LaunchPlan) -> int:
        """Execute a prepared plan and return its exit code."""
        logger.debug(f"Running: {' '.join(plan.command)}")
        try:
            result = subprocess.run(plan.command)
        except OSError as e:
            raise LaunchError(f"Could not start {plan.command[0]}: {e}") from e
        return result.returncode
