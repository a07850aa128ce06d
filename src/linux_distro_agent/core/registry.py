"""
Package Manager Registry — Static tables mapping distributions to package tools.

Lookup tries the exact distro id first, then walks ``id_like`` in declared
order. Derivatives (CachyOS, Pop!_OS, ...) that declare an ancestor inherit
its package manager without needing an entry of their own.
"""

import logging
from types import MappingProxyType

from linux_distro_agent.core.exceptions import UnsupportedDistroError
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package_manager import Operation, PackageManager

logger = logging.getLogger(__name__)

T = "{target}"

_MANAGERS = (
    PackageManager(
        name="pacman",
        binary="pacman",
        install=("pacman", "-S", T),
        search=("pacman", "-Ss", T),
        remove=("pacman", "-R", T),
        update=("pacman", "-Syu"),
        list_installed=("pacman", "-Q"),
        list_detailed=("pacman", "-Qi"),
        package_info=("pacman", "-Qi", T),
    ),
    PackageManager(
        name="apt",
        binary="apt",
        install=("apt", "install", T),
        search=("apt", "search", T),
        remove=("apt", "remove", T),
        update=("apt", "upgrade"),
        refresh=("apt", "update"),
        list_installed=("apt", "list", "--installed"),
        list_detailed=("dpkg-query", "-l"),
        package_info=("apt", "show", T),
    ),
    PackageManager(
        name="dnf",
        binary="dnf",
        install=("dnf", "install", T),
        search=("dnf", "search", T),
        remove=("dnf", "remove", T),
        update=("dnf", "upgrade"),
        list_installed=("dnf", "list", "--installed"),
        package_info=("dnf", "info", T),
    ),
    PackageManager(
        name="zypper",
        binary="zypper",
        install=("zypper", "install", T),
        search=("zypper", "search", T),
        remove=("zypper", "remove", T),
        update=("zypper", "update"),
        list_installed=("zypper", "search", "--installed-only"),
        list_detailed=("zypper", "search", "--installed-only", "--details"),
        package_info=("zypper", "info", T),
    ),
    PackageManager(
        name="portage",
        binary="emerge",
        install=("emerge", T),
        search=("emerge", "--search", T),
        remove=("emerge", "--unmerge", T),
        update=("emerge", "--update", "--deep", "--newuse", "@world"),
        refresh=("emerge", "--sync"),
        list_installed=("qlist", "-I"),
        list_detailed=("qlist", "-Iv"),
        package_info=("equery", "list", T),
    ),
    PackageManager(
        name="nix",
        binary="nix-env",
        install=("nix-env", "-iA", f"nixpkgs.{T}"),
        search=("nix", "search", "nixpkgs", T),
        remove=("nix-env", "-e", T),
        update=("nixos-rebuild", "switch", "--upgrade"),
        # nix-env acts on the user's profile
        sudo=frozenset({Operation.UPDATE}),
        list_installed=("nix-env", "-q"),
        list_detailed=("nix-env", "-q", "--description"),
        package_info=("nix-env", "-qa", "--description", T),
    ),
    PackageManager(
        name="apk",
        binary="apk",
        install=("apk", "add", T),
        search=("apk", "search", T),
        remove=("apk", "del", T),
        update=("apk", "upgrade"),
        refresh=("apk", "update"),
        list_installed=("apk", "list", "--installed"),
        package_info=("apk", "info", T),
    ),
    PackageManager(
        name="xbps",
        binary="xbps-install",
        install=("xbps-install", T),
        search=("xbps-query", "-Rs", T),
        remove=("xbps-remove", T),
        update=("xbps-install", "-Su"),
        list_installed=("xbps-query", "-l"),
        package_info=("xbps-query", "-R", T),
    ),
)

PACKAGE_MANAGERS = MappingProxyType({pm.name: pm for pm in _MANAGERS})

# Package manager name -> distro ids it serves directly. Derivatives not
# listed here resolve through their ID_LIKE chain.
_DISTRO_GROUPS = {
    "pacman": ("arch", "cachyos", "endeavouros", "manjaro", "garuda", "artix"),
    "apt": ("debian", "ubuntu", "pop", "elementary", "linuxmint", "raspbian", "kali", "zorin", "neon"),
    "dnf": ("fedora", "rhel", "centos", "rocky", "almalinux", "ol", "nobara"),
    "zypper": ("opensuse", "opensuse-leap", "opensuse-tumbleweed", "suse", "sles"),
    "portage": ("gentoo",),
    "nix": ("nixos",),
    "apk": ("alpine",),
    "xbps": ("void",),
}

DISTRO_MANAGERS = MappingProxyType(
    {distro_id: pm_name for pm_name, ids in _DISTRO_GROUPS.items() for distro_id in ids}
)


def get_manager(name: str) -> PackageManager | None:
    """Get a package manager descriptor by name (e.g. "pacman")."""
    return PACKAGE_MANAGERS.get(name.lower())


def lookup(distro: DistroInfo) -> PackageManager:
    """
    Resolve the package manager for a distribution.

    Args:
        distro: Resolved distribution identity.

    Returns:
        The PackageManager for the distro or its nearest declared ancestor.

    Raises:
        UnsupportedDistroError: Neither the id nor any id_like entry matches.
    """
    pm_name = DISTRO_MANAGERS.get(distro.id)
    if pm_name:
        return PACKAGE_MANAGERS[pm_name]

    for ancestor in distro.id_like:
        pm_name = DISTRO_MANAGERS.get(ancestor)
        if pm_name:
            logger.debug(f"{distro.id}: no direct entry, using {pm_name} via id_like '{ancestor}'")
            return PACKAGE_MANAGERS[pm_name]

    raise UnsupportedDistroError(distro.id, distro.id_like)


def supported_distros() -> list[tuple[PackageManager, tuple[str, ...]]]:
    """List each package manager with the distro ids it serves directly."""
    return [(PACKAGE_MANAGERS[pm_name], ids) for pm_name, ids in _DISTRO_GROUPS.items()]
