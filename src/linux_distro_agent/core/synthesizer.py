"""
Command Synthesizer — Turns an operation request into a concrete command.

Combines the registry (which tool, which template) with the compatibility
layer (which package name) and returns pure data. Running the command, and
elevating privileges for it, is the caller's business.
"""

import logging

from linux_distro_agent.compat.layer import classify_distro, get_layer
from linux_distro_agent.core.registry import lookup
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package_manager import Operation, QueryKind, SynthesizedCommand

logger = logging.getLogger(__name__)


def build(
    distro: DistroInfo,
    op: Operation,
    package_or_query: str = "",
    translate: bool = False,
) -> SynthesizedCommand:
    """
    Build the native command for an operation on a distribution.

    Args:
        distro: Target distribution.
        op: Operation to perform.
        package_or_query: Package name (install/remove) or query (search).
            Ignored for update.
        translate: Translate canonical package names for install/remove.
            Search queries are never translated.

    Returns:
        SynthesizedCommand with the argument vector and the sudo flag.

    Raises:
        UnsupportedDistroError: No package manager for the distribution.
        ValueError: A target-taking operation got an empty target.
    """
    manager = lookup(distro)

    target = package_or_query
    if translate and op.translatable:
        family = classify_distro(distro)
        result = get_layer().translate(package_or_query, family)
        if result.overridden:
            logger.debug(
                f"Translated '{result.canonical_name}' -> '{result.package_name}' for {family.value}"
            )
        target = result.package_name

    argv = manager.command_for(op, target if op.takes_target else "")
    return SynthesizedCommand(
        program=argv[0],
        args=tuple(argv[1:]),
        requires_sudo=manager.requires_sudo(op),
    )


def build_plan(
    distro: DistroInfo,
    op: Operation,
    package_or_query: str = "",
    translate: bool = False,
) -> list[SynthesizedCommand]:
    """
    Build every command needed for an operation, in run order.

    Updates on managers that keep a local package index (apt, apk, portage)
    refresh it first; everything else is a single command.
    """
    command = build(distro, op, package_or_query, translate)

    manager = lookup(distro)
    if op is Operation.UPDATE and manager.refresh:
        refresh = SynthesizedCommand(
            program=manager.refresh[0],
            args=tuple(manager.refresh[1:]),
            requires_sudo=manager.requires_sudo(Operation.UPDATE),
        )
        return [refresh, command]

    return [command]


def build_query(
    distro: DistroInfo,
    kind: QueryKind,
    package: str = "",
    detailed: bool = False,
    translate: bool = False,
) -> SynthesizedCommand:
    """
    Build a read-only inspection command (installed list or package info).

    Queries never need elevated privileges. With ``translate``, the INFO
    package name goes through the compatibility layer like an install.
    """
    manager = lookup(distro)

    target = package
    if translate and kind is QueryKind.INFO:
        target = get_layer().translate(package, classify_distro(distro)).package_name

    argv = manager.query_command(kind, target, detailed=detailed)
    return SynthesizedCommand(program=argv[0], args=tuple(argv[1:]), requires_sudo=False)
