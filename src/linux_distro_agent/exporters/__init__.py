"""Export backends for the compatibility database."""

import logging
from collections.abc import Iterable

from linux_distro_agent.exporters.base import Exporter
from linux_distro_agent.exporters.json_export import JSONExporter
from linux_distro_agent.exporters.sqlite import SQLiteExporter
from linux_distro_agent.models.package import CanonicalPackage

logger = logging.getLogger(__name__)


def get_exporter(format_name: str, output_dir: str) -> Exporter:
    """Factory function to create an exporter by format name."""
    from pathlib import Path

    out = Path(output_dir)
    match format_name:
        case "json":
            return JSONExporter(output_dir=out)
        case "sqlite":
            return SQLiteExporter(db_path=out / "compatibility.db")
        case _:
            raise ValueError(f"Unknown export format: {format_name!r}. Use 'json' or 'sqlite'.")


async def export_database(exporters: list[Exporter], packages: Iterable[CanonicalPackage]) -> int:
    """Send every package to every exporter, then finalize them. Returns the package count."""
    count = 0
    for package in packages:
        for exporter in exporters:
            await exporter.export(package)
        count += 1

    for exporter in exporters:
        await exporter.finalize()

    logger.debug(f"Exported {count} packages to {len(exporters)} exporter(s)")
    return count


__all__ = ["Exporter", "JSONExporter", "SQLiteExporter", "get_exporter", "export_database"]
