"""
Example: Show native install commands for a few distributions.

Usage:
    python examples/show_commands.py
"""

import asyncio
from pathlib import Path

from linux_distro_agent.compat.layer import get_layer
from linux_distro_agent.core.synthesizer import build_plan
from linux_distro_agent.exporters import export_database
from linux_distro_agent.exporters.json_export import JSONExporter
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package_manager import Operation


async def main():
    distros = [
        DistroInfo.from_id("cachyos"),
        DistroInfo.from_id("pop", id_like=["ubuntu", "debian"]),
        DistroInfo.from_id("gentoo"),
        DistroInfo.from_id("nixos"),
    ]

    for distro in distros:
        print(f"\n{distro.id}:")
        for package in ("python3", "docker", "fd"):
            for cmd in build_plan(distro, Operation.INSTALL, package, translate=True):
                print(f"  {cmd.display()}")
        for cmd in build_plan(distro, Operation.UPDATE):
            print(f"  {cmd.display()}")

    # Dump the whole database next to the commands
    output_dir = Path("./compat_export")
    count = await export_database([JSONExporter(output_dir=output_dir)], get_layer().packages)

    print(f"\n✅ {count} packages exported to: {output_dir.absolute()}")


if __name__ == "__main__":
    asyncio.run(main())
