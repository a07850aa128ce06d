"""
Package Manager Model — Calling conventions of native package tools.

A PackageManager holds one argv template per operation. Templates are
rendered into discrete argument tokens; nothing here ever goes through a
shell parser.
"""

import shlex
from dataclasses import dataclass, field
from enum import Enum

TARGET_PLACEHOLDER = "{target}"


class Operation(Enum):
    """The package-management intents the agent understands."""

    INSTALL = "install"
    SEARCH = "search"
    REMOVE = "remove"
    UPDATE = "update"

    @property
    def takes_target(self) -> bool:
        return self is not Operation.UPDATE

    @property
    def translatable(self) -> bool:
        """Only exact package identities are translated, never queries."""
        return self in (Operation.INSTALL, Operation.REMOVE)


class QueryKind(Enum):
    """Read-only inspections of the local package database."""

    LIST = "list"
    INFO = "info"


@dataclass(frozen=True)
class PackageManager:
    """
    One package-management tool's calling convention.

    Every template starts with the program to run. ``{target}`` marks where
    the package name or search query goes; it may sit inside a token
    (``nixpkgs.{target}``).
    """

    name: str
    binary: str
    install: tuple[str, ...]
    search: tuple[str, ...]
    remove: tuple[str, ...]
    update: tuple[str, ...]
    sudo: frozenset[Operation] = frozenset(
        {Operation.INSTALL, Operation.REMOVE, Operation.UPDATE}
    )
    refresh: tuple[str, ...] | None = None  # index refresh run before update
    list_installed: tuple[str, ...] = ()
    list_detailed: tuple[str, ...] | None = None
    package_info: tuple[str, ...] = ()

    def template(self, op: Operation) -> tuple[str, ...]:
        match op:
            case Operation.INSTALL:
                return self.install
            case Operation.SEARCH:
                return self.search
            case Operation.REMOVE:
                return self.remove
            case Operation.UPDATE:
                return self.update

    def requires_sudo(self, op: Operation) -> bool:
        return op in self.sudo

    def command_for(self, op: Operation, target: str = "") -> list[str]:
        """
        Render the template for ``op`` into an argument vector.

        Args:
            op: Operation to render.
            target: Package name or search query. Ignored for UPDATE.

        Returns:
            Argument tokens, program first.
        """
        if op.takes_target and not target.strip():
            raise ValueError(f"{op.value} requires a package name or query")

        return [token.replace(TARGET_PLACEHOLDER, target) for token in self.template(op)]

    def query_command(self, kind: QueryKind, target: str = "", detailed: bool = False) -> list[str]:
        """
        Render a list-installed or package-info template.

        ``detailed`` picks the verbose listing where the tool has one; the
        target is only used by INFO.
        """
        match kind:
            case QueryKind.LIST:
                template = (self.list_detailed if detailed else None) or self.list_installed
            case QueryKind.INFO:
                if not target.strip():
                    raise ValueError("info requires a package name")
                template = self.package_info

        if not template:
            raise ValueError(f"{self.name} has no {kind.value} command")
        return [token.replace(TARGET_PLACEHOLDER, target) for token in template]

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "name": self.name,
            "binary": self.binary,
            "install": list(self.install),
            "search": list(self.search),
            "remove": list(self.remove),
            "update": list(self.update),
            "refresh": list(self.refresh) if self.refresh else None,
            "list": list(self.list_installed),
            "list_detailed": list(self.list_detailed) if self.list_detailed else None,
            "info": list(self.package_info),
            "sudo": sorted(op.value for op in self.sudo),
        }


@dataclass(frozen=True)
class SynthesizedCommand:
    """A ready-to-run command expressed as data. Executing it is up to the caller."""

    program: str
    args: tuple[str, ...] = field(default_factory=tuple)
    requires_sudo: bool = False

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def display(self, sudo_prefix: bool = True) -> str:
        """Render as a shell-quoted string for humans to copy."""
        argv = self.argv
        if sudo_prefix and self.requires_sudo:
            argv = ["sudo", *argv]
        return shlex.join(argv)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "program": self.program,
            "args": list(self.args),
            "requires_sudo": self.requires_sudo,
        }
