"""
Exporter Protocol — Base interface for compatibility database export backends.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from linux_distro_agent.models.package import CanonicalPackage


@runtime_checkable
class Exporter(Protocol):
    """
    Interface shared by the database exporters.

    ``export`` is called once per CanonicalPackage in declaration order;
    ``finalize`` runs once afterwards and owns any flushing to disk.
    """

    async def export(self, package: CanonicalPackage) -> None:
        """Persist or queue one package entry."""
        ...

    async def finalize(self) -> None:
        """Write out anything buffered and release resources."""
        ...
