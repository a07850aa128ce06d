"""
Linux Distro Agent - Distribution-aware package command helper.

Detects the host Linux distribution from os-release, resolves its native
package manager, and translates canonical package names and operations
into the matching distribution-specific commands.
"""

__version__ = "0.3.0"


def __getattr__(name: str):
    """Lazy import so ``import linux_distro_agent`` stays cheap for the CLI."""
    if name == "DistroInfo":
        from linux_distro_agent.models.distro import DistroInfo

        return DistroInfo
    if name == "CompatibilityLayer":
        from linux_distro_agent.compat.layer import CompatibilityLayer

        return CompatibilityLayer
    if name == "resolve":
        from linux_distro_agent.core.os_release import resolve

        return resolve
    if name == "build":
        from linux_distro_agent.core.synthesizer import build

        return build
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["DistroInfo", "CompatibilityLayer", "resolve", "build", "__version__"]
