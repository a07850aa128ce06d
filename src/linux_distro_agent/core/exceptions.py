"""
Error taxonomy for distribution resolution.

Every error carries the path or id that caused it, and a distinct exit code
the CLI uses so scripts can tell the failures apart.
"""

from pathlib import Path


class AgentError(Exception):
    """Base class for all linux-distro-agent errors."""

    exit_code = 1


class ResolutionError(AgentError):
    """The distribution or its package manager could not be resolved."""


class DistroNotFoundError(ResolutionError):
    """The os-release descriptor does not exist or cannot be read."""

    exit_code = 3

    def __init__(self, paths: list[Path] | tuple[Path, ...], reason: str | None = None):
        self.paths = tuple(Path(p) for p in paths)
        self.reason = reason
        joined = ", ".join(str(p) for p in self.paths)
        message = f"could not detect distribution: no readable descriptor at {joined}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MalformedDescriptorError(ResolutionError):
    """The descriptor exists but lacks mandatory fields or is not text."""

    exit_code = 4

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"malformed distribution descriptor {path}: {reason}")


class UnsupportedDistroError(ResolutionError):
    """Neither the distro id nor any id_like ancestor has a package manager."""

    exit_code = 5

    def __init__(self, distro_id: str, id_like: tuple[str, ...] = ()):
        self.distro_id = distro_id
        self.id_like = tuple(id_like)
        message = f"unsupported distribution: {distro_id}"
        if self.id_like:
            message += f" (id_like: {' '.join(self.id_like)})"
        super().__init__(message)
