"""
JSON Exporter — Writes the compatibility database as one JSON document.
"""

import json
import logging
from pathlib import Path

import aiofiles

from linux_distro_agent.models.package import CanonicalPackage

logger = logging.getLogger(__name__)

JSON_FILENAME = "compatibility.json"


class JSONExporter:
    """
    Collects CanonicalPackage entries and writes them to a single file.

    Output:
        output_dir/compatibility.json  ->  {"packages": [ {...}, ... ]}
    """

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.output_dir / JSON_FILENAME
        self.entries: list[dict] = []

    @property
    def count(self) -> int:
        return len(self.entries)

    async def export(self, package: CanonicalPackage) -> None:
        """Queue a package for the final document."""
        self.entries.append(package.to_dict())
        logger.debug(f"[JSON] Queued {package.canonical_name}")

    async def finalize(self) -> None:
        """Write the collected entries to disk."""
        async with aiofiles.open(self.path, "w") as f:
            await f.write(json.dumps({"packages": self.entries}, indent=2))

        logger.info(f"[JSON] Export complete: {self.count} packages exported to {self.path}")
