"""
Compatibility Layer — Cross-distribution package name translation.

Translation degrades gracefully: a package missing from the database, or a
distribution outside every known family, simply keeps its canonical name.
Only strict lookups (``reverse_lookup``, ``get_package``) report absence,
and they do it with ``None`` rather than an exception.
"""

from collections.abc import Iterable
from types import MappingProxyType

from linux_distro_agent.compat.database import CANONICAL_PACKAGES, validate_database
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package import (
    CanonicalPackage,
    Category,
    DistroFamily,
    TranslationResult,
)

_FAMILY_MEMBERS = {
    DistroFamily.ARCH: ("arch", "cachyos", "endeavouros", "manjaro", "garuda", "artix"),
    DistroFamily.DEBIAN: (
        "debian", "ubuntu", "pop", "elementary", "linuxmint", "raspbian", "kali", "zorin", "neon",
    ),
    DistroFamily.REDHAT: ("fedora", "rhel", "centos", "rocky", "almalinux", "ol", "nobara"),
    DistroFamily.SUSE: ("opensuse", "opensuse-leap", "opensuse-tumbleweed", "suse", "sles"),
    DistroFamily.GENTOO: ("gentoo",),
    DistroFamily.NIXOS: ("nixos",),
    DistroFamily.ALPINE: ("alpine",),
    DistroFamily.VOID: ("void",),
}

DISTRO_FAMILIES = MappingProxyType(
    {distro_id: family for family, ids in _FAMILY_MEMBERS.items() for distro_id in ids}
)


def classify_family(distro_id: str, id_like: Iterable[str] = ()) -> DistroFamily:
    """
    Map a distribution id to its naming family.

    The exact id wins; otherwise the id_like chain is walked in order.
    Anything unmatched is ``DistroFamily.OTHER``.
    """
    for candidate in (distro_id, *id_like):
        family = DISTRO_FAMILIES.get(candidate.strip().lower())
        if family:
            return family
    return DistroFamily.OTHER


def classify_distro(distro: DistroInfo) -> DistroFamily:
    """Family of a resolved distribution, using its id_like chain."""
    return classify_family(distro.id, distro.id_like)


class CompatibilityLayer:
    """
    Read-only view over a canonical package database.

    The default instance wraps the compiled-in CANONICAL_PACKAGES; tests or
    embedding applications can build one over their own package tuple.
    """

    def __init__(self, packages: Iterable[CanonicalPackage] = CANONICAL_PACKAGES):
        self.packages: tuple[CanonicalPackage, ...] = tuple(packages)
        validate_database(self.packages)
        self._by_name = MappingProxyType({pkg.canonical_name: pkg for pkg in self.packages})

    def __len__(self) -> int:
        return len(self.packages)

    def get_package(self, canonical_name: str) -> CanonicalPackage | None:
        return self._by_name.get(canonical_name)

    def translate(self, canonical_name: str, family: DistroFamily) -> TranslationResult:
        """
        Translate a canonical name into the name used by ``family``.

        Unknown packages are assumed to share their canonical name across all
        distributions; that's a fallback, not a failure.
        """
        package = self._by_name.get(canonical_name)
        if package is None:
            return TranslationResult(
                canonical_name=canonical_name,
                family=family,
                package_name=canonical_name,
                known=False,
                overridden=False,
            )

        package_name = package.name_for(family)
        return TranslationResult(
            canonical_name=canonical_name,
            family=family,
            package_name=package_name,
            known=True,
            overridden=package_name != canonical_name,
        )

    def search(self, term: str) -> list[CanonicalPackage]:
        """Case-insensitive substring match on canonical name and description."""
        needle = term.strip().lower()
        if not needle:
            return []
        return [
            pkg
            for pkg in self.packages
            if needle in pkg.canonical_name.lower() or needle in pkg.description.lower()
        ]

    def list_category(self, category: Category | str) -> list[CanonicalPackage]:
        """
        Packages in one category, in declaration order.

        Raises:
            ValueError: ``category`` is a string naming no known category.
        """
        if not isinstance(category, Category):
            category = Category(category.strip().lower())
        return [pkg for pkg in self.packages if pkg.category is category]

    def list_categories(self) -> list[Category]:
        """Categories holding at least one package, in enum order."""
        used = {pkg.category for pkg in self.packages}
        return [category for category in Category if category in used]

    def list_packages(self) -> list[CanonicalPackage]:
        return list(self.packages)

    def reverse_lookup(self, distro_specific_name: str, family: DistroFamily) -> CanonicalPackage | None:
        """Find the canonical entry that ``family`` calls ``distro_specific_name``."""
        for pkg in self.packages:
            if pkg.name_for(family) == distro_specific_name:
                return pkg
        return None


_default_layer = CompatibilityLayer()


def get_layer() -> CompatibilityLayer:
    """The process-wide layer over the compiled-in database."""
    return _default_layer


def translate(canonical_name: str, family: DistroFamily) -> TranslationResult:
    return _default_layer.translate(canonical_name, family)


def search(term: str) -> list[CanonicalPackage]:
    return _default_layer.search(term)


def list_category(category: Category | str) -> list[CanonicalPackage]:
    return _default_layer.list_category(category)


def reverse_lookup(distro_specific_name: str, family: DistroFamily) -> CanonicalPackage | None:
    return _default_layer.reverse_lookup(distro_specific_name, family)
