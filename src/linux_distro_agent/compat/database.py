"""
Compatibility Database — Canonical package names and their per-family overrides.

Entries are listed in declaration order, which is also the order search
and category listings return them in. A family absent from ``overrides``
uses the canonical name unchanged.
"""

from collections.abc import Iterable

from linux_distro_agent.models.package import CanonicalPackage, Category, DistroFamily

ARCH = DistroFamily.ARCH
DEBIAN = DistroFamily.DEBIAN
REDHAT = DistroFamily.REDHAT
SUSE = DistroFamily.SUSE
GENTOO = DistroFamily.GENTOO
NIXOS = DistroFamily.NIXOS
ALPINE = DistroFamily.ALPINE
VOID = DistroFamily.VOID


def _pkg(name: str, category: Category, description: str, **overrides: str) -> CanonicalPackage:
    """Shorthand: keyword overrides are DistroFamily member names, lowercased."""
    return CanonicalPackage(
        canonical_name=name,
        category=category,
        description=description,
        overrides={DistroFamily[key.upper()]: value for key, value in overrides.items()},
    )


CANONICAL_PACKAGES: tuple[CanonicalPackage, ...] = (
    # ── Development tools ──
    _pkg("git", Category.DEV_TOOLS, "Distributed version control system", gentoo="dev-vcs/git"),
    _pkg("gcc", Category.DEV_TOOLS, "GNU C and C++ compiler collection", gentoo="sys-devel/gcc"),
    _pkg("clang", Category.DEV_TOOLS, "C language family frontend for LLVM", gentoo="llvm-core/clang"),
    _pkg("make", Category.DEV_TOOLS, "GNU make build automation tool", gentoo="dev-build/make", nixos="gnumake"),
    _pkg("cmake", Category.DEV_TOOLS, "Cross-platform build system generator", gentoo="dev-build/cmake"),
    _pkg("gdb", Category.DEV_TOOLS, "GNU project debugger", gentoo="dev-debug/gdb"),
    _pkg(
        "docker",
        Category.DEV_TOOLS,
        "Container runtime and tooling",
        debian="docker.io",
        gentoo="app-containers/docker",
    ),
    _pkg("jq", Category.DEV_TOOLS, "Command-line JSON processor", gentoo="app-misc/jq"),
    # ── Languages ──
    _pkg(
        "python3",
        Category.LANGUAGES,
        "Python 3 programming language interpreter",
        arch="python",
        gentoo="dev-lang/python",
    ),
    _pkg(
        "pip",
        Category.LANGUAGES,
        "Package installer for Python",
        arch="python-pip",
        debian="python3-pip",
        redhat="python3-pip",
        suse="python3-pip",
        gentoo="dev-python/pip",
        nixos="python3Packages.pip",
        alpine="py3-pip",
        void="python3-pip",
    ),
    _pkg("nodejs", Category.LANGUAGES, "JavaScript runtime built on V8", gentoo="net-libs/nodejs"),
    _pkg(
        "go",
        Category.LANGUAGES,
        "Go programming language toolchain",
        debian="golang-go",
        redhat="golang",
        gentoo="dev-lang/go",
    ),
    _pkg(
        "rust",
        Category.LANGUAGES,
        "Rust compiler and standard library",
        debian="rustc",
        gentoo="dev-lang/rust",
        nixos="rustc",
    ),
    _pkg(
        "openjdk",
        Category.LANGUAGES,
        "OpenJDK Java development kit",
        arch="jdk-openjdk",
        debian="default-jdk",
        redhat="java-latest-openjdk",
        suse="java-21-openjdk",
        gentoo="dev-java/openjdk",
        nixos="jdk",
        alpine="openjdk21",
        void="openjdk21",
    ),
    # ── Editors ──
    _pkg("vim", Category.EDITORS, "Vi IMproved text editor", redhat="vim-enhanced", gentoo="app-editors/vim"),
    _pkg("neovim", Category.EDITORS, "Hyperextensible Vim-based text editor", gentoo="app-editors/neovim"),
    _pkg("emacs", Category.EDITORS, "Extensible, customizable text editor", gentoo="app-editors/emacs"),
    _pkg("nano", Category.EDITORS, "Small and friendly console text editor", gentoo="app-editors/nano"),
    # ── Network ──
    _pkg("curl", Category.NETWORK, "Command-line tool for transferring data with URLs", gentoo="net-misc/curl"),
    _pkg("wget", Category.NETWORK, "Non-interactive network downloader", gentoo="net-misc/wget"),
    _pkg(
        "openssh",
        Category.NETWORK,
        "Secure shell client and server",
        debian="openssh-client",
        gentoo="net-misc/openssh",
    ),
    _pkg("rsync", Category.NETWORK, "Fast incremental file transfer", gentoo="net-misc/rsync"),
    _pkg("nmap", Category.NETWORK, "Network exploration and security scanner", gentoo="net-analyzer/nmap"),
    _pkg(
        "networkmanager",
        Category.NETWORK,
        "Network connection manager daemon",
        debian="network-manager",
        redhat="NetworkManager",
        suse="NetworkManager",
        gentoo="net-misc/networkmanager",
        void="NetworkManager",
    ),
    _pkg("firefox", Category.NETWORK, "Mozilla Firefox web browser", gentoo="www-client/firefox"),
    # ── Media ──
    _pkg("ffmpeg", Category.MEDIA, "Audio and video conversion toolkit", gentoo="media-video/ffmpeg"),
    _pkg("vlc", Category.MEDIA, "Multi-platform media player", gentoo="media-video/vlc"),
    _pkg("mpv", Category.MEDIA, "Minimalist command-line media player", gentoo="media-video/mpv"),
    _pkg("gimp", Category.MEDIA, "GNU image manipulation program", gentoo="media-gfx/gimp"),
    # ── System ──
    _pkg("htop", Category.SYSTEM, "Interactive process viewer", gentoo="sys-process/htop"),
    _pkg("tmux", Category.SYSTEM, "Terminal multiplexer", gentoo="app-misc/tmux"),
    _pkg(
        "fd",
        Category.SYSTEM,
        "Simple, fast alternative to find",
        debian="fd-find",
        redhat="fd-find",
        gentoo="sys-apps/fd",
    ),
    _pkg("ripgrep", Category.SYSTEM, "Recursive regex search tool (rg)", gentoo="sys-apps/ripgrep"),
    _pkg("bat", Category.SYSTEM, "Cat clone with syntax highlighting", gentoo="sys-apps/bat"),
    _pkg("tree", Category.SYSTEM, "Recursive directory listing", gentoo="app-text/tree"),
    _pkg("unzip", Category.SYSTEM, "Extraction utility for ZIP archives", gentoo="app-arch/unzip"),
    _pkg(
        "sqlite",
        Category.SYSTEM,
        "Self-contained SQL database engine",
        debian="sqlite3",
        gentoo="dev-db/sqlite",
    ),
    # ── Shells ──
    _pkg("bash", Category.SHELLS, "GNU Bourne-Again shell", gentoo="app-shells/bash"),
    _pkg("zsh", Category.SHELLS, "Z shell", gentoo="app-shells/zsh"),
    _pkg("fish", Category.SHELLS, "Friendly interactive shell", gentoo="app-shells/fish"),
)


def validate_database(packages: Iterable[CanonicalPackage]) -> None:
    """
    Check database consistency.

    Raises:
        ValueError: Duplicate canonical names, overrides keyed on an unknown
            or ``other`` family, empty override names, or two packages
            resolving to the same name within one family.
    """
    packages = list(packages)
    seen: set[str] = set()
    for package in packages:
        if package.canonical_name in seen:
            raise ValueError(f"Duplicate canonical package: {package.canonical_name!r}")
        seen.add(package.canonical_name)

        for family, name in package.overrides.items():
            if not isinstance(family, DistroFamily) or family is DistroFamily.OTHER:
                raise ValueError(f"{package.canonical_name}: invalid override family {family!r}")
            if not name.strip():
                raise ValueError(f"{package.canonical_name}: empty override for {family.value}")

    # Reverse lookups must be unambiguous
    for family in DistroFamily:
        owners: dict[str, str] = {}
        for package in packages:
            name = package.name_for(family)
            if name in owners:
                raise ValueError(
                    f"{family.value}: {name!r} claimed by both {owners[name]!r} and {package.canonical_name!r}"
                )
            owners[name] = package.canonical_name


validate_database(CANONICAL_PACKAGES)
