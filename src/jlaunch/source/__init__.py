"""Executable code: references, variants, and the decisions made about them."""

from .builder import Builder, JarBuilder, SourceSetBuilder
from .cmd_generator import CmdGenerator, JavaCmdGenerator, JshCmdGenerator
from .code import Code, Jar, SourceSet, needs_build
from .context import RunContext
from .factory import create_code
from .options import quoted_string_to_list
from .resource import ResourceRef, is_jar, is_jshell

__all__ = [
    # Model
    "Code",
    "Jar",
    "SourceSet",
    "ResourceRef",
    "RunContext",
    # Decisions
    "needs_build",
    "is_jar",
    "is_jshell",
    "quoted_string_to_list",
    "create_code",
    # Collaborators
    "Builder",
    "JarBuilder",
    "SourceSetBuilder",
    "CmdGenerator",
    "JavaCmdGenerator",
    "JshCmdGenerator",
]
