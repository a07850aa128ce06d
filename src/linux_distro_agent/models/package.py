"""
Canonical Package Model — Entries of the cross-distribution compatibility database.

A canonical package name is the stable identifier users type. Each entry
may override that name per distribution family; a family without an
override uses the canonical name verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Category(Enum):
    """Fixed set of package categories."""

    DEV_TOOLS = "dev-tools"
    LANGUAGES = "languages"
    EDITORS = "editors"
    NETWORK = "network"
    MEDIA = "media"
    SYSTEM = "system"
    SHELLS = "shells"


class DistroFamily(Enum):
    """Distributions that share a package-naming convention."""

    ARCH = "arch-based"
    DEBIAN = "debian-based"
    REDHAT = "redhat-based"
    SUSE = "suse-based"
    GENTOO = "gentoo"
    NIXOS = "nixos"
    ALPINE = "alpine"
    VOID = "void"
    OTHER = "other"


@dataclass(frozen=True)
class CanonicalPackage:
    """One entry in the compatibility database."""

    canonical_name: str
    category: Category
    description: str
    overrides: Mapping[DistroFamily, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Freeze the overrides so shared database entries can't be mutated
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    def name_for(self, family: DistroFamily) -> str:
        """Package name on ``family``, falling back to the canonical name."""
        return self.overrides.get(family, self.canonical_name)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "canonical_name": self.canonical_name,
            "category": self.category.value,
            "description": self.description,
            "overrides": {family.value: name for family, name in self.overrides.items()},
        }


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of translating a canonical name for one distribution family."""

    canonical_name: str
    family: DistroFamily
    package_name: str
    known: bool  # present in the database
    overridden: bool  # an override differs from the canonical name

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "canonical_name": self.canonical_name,
            "family": self.family.value,
            "package_name": self.package_name,
            "known": self.known,
            "overridden": self.overridden,
        }
