"""Errors raised by the launch collaborators."""

from __future__ import annotations

from typing import List, Optional


class LaunchError(Exception):
    """Base class for everything that stops code from being launched."""


class ResourceNotFoundError(LaunchError):
    """Raised when a reference does not point at a readable file."""

    def __init__(self, reference: str, detail: Optional[str] = None):
        self.reference = reference
        message = f"Could not find resource: {reference}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DependencyError(LaunchError):
    """Raised when declared dependencies are missing from the local repository."""

    def __init__(self, missing: List[str], local_repository: Optional[str] = None):
        self.missing = missing
        self.local_repository = local_repository
        message = self._format_error_message(missing)
        super().__init__(message)

    def _format_error_message(self, missing: List[str]) -> str:
        """Format a user-friendly error message."""
        lines = [
            "❌ Unresolved Dependencies",
            "",
            "The following dependencies could not be found:",
            "",
        ]

        for coordinate in missing:
            lines.append(f"  • {coordinate}")

        lines.append("")
        if self.local_repository:
            lines.append(f"Looked in local repository: {self.local_repository}")
            lines.append("")
        lines.append("💡 Fetch them first, e.g. mvn dependency:get -Dartifact=<coordinate>")

        return "\n".join(lines)


class BuildError(LaunchError):
    """Raised when compiling or packaging a source set fails."""

    def __init__(self, message: str, returncode: Optional[int] = None, output: str = ""):
        self.returncode = returncode
        self.output = output
        if output:
            message = f"{message}\n\n{output.rstrip()}"
        super().__init__(message)


class JdkNotFoundError(LaunchError, RuntimeError):
    """Raised when no JDK satisfies the requested tool and version."""
