"""Tests for the package manager registry and command templates."""

import pytest

from linux_distro_agent.core.exceptions import UnsupportedDistroError
from linux_distro_agent.core.registry import (
    DISTRO_MANAGERS,
    PACKAGE_MANAGERS,
    get_manager,
    lookup,
    supported_distros,
)
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package_manager import (
    TARGET_PLACEHOLDER,
    Operation,
    PackageManager,
    QueryKind,
    SynthesizedCommand,
)


# ═══════════════════════════════════════════
# Lookup
# ═══════════════════════════════════════════


class TestLookup:
    @pytest.mark.parametrize(
        "distro_id,expected",
        [
            ("arch", "pacman"),
            ("cachyos", "pacman"),
            ("ubuntu", "apt"),
            ("debian", "apt"),
            ("fedora", "dnf"),
            ("opensuse-tumbleweed", "zypper"),
            ("gentoo", "portage"),
            ("nixos", "nix"),
            ("alpine", "apk"),
            ("void", "xbps"),
        ],
    )
    def test_direct_entries(self, distro_id, expected):
        assert lookup(DistroInfo(id=distro_id)).name == expected

    def test_id_like_fallback(self):
        distro = DistroInfo(id="myspin", id_like=("arch",))
        assert lookup(distro).name == "pacman"

    def test_id_like_first_match_wins(self):
        distro = DistroInfo(id="hybrid", id_like=("unknown", "fedora", "debian"))
        assert lookup(distro).name == "dnf"

    def test_exact_id_beats_id_like(self):
        distro = DistroInfo(id="ubuntu", id_like=("arch",))
        assert lookup(distro).name == "apt"

    def test_unsupported(self):
        with pytest.raises(UnsupportedDistroError) as exc_info:
            lookup(DistroInfo(id="haiku"))
        assert exc_info.value.distro_id == "haiku"
        assert "unsupported distribution: haiku" in str(exc_info.value)

    def test_unsupported_mentions_id_like(self):
        with pytest.raises(UnsupportedDistroError) as exc_info:
            lookup(DistroInfo(id="odd", id_like=("weird", "strange")))
        assert "weird" in str(exc_info.value)

    def test_every_registered_distro_resolves(self):
        for distro_id, pm_name in DISTRO_MANAGERS.items():
            assert lookup(DistroInfo(id=distro_id)) is PACKAGE_MANAGERS[pm_name]

    def test_get_manager(self):
        assert get_manager("pacman").binary == "pacman"
        assert get_manager("PORTAGE").binary == "emerge"
        assert get_manager("brew") is None

    def test_supported_distros_covers_registry(self):
        listed = {distro_id for _, ids in supported_distros() for distro_id in ids}
        assert listed == set(DISTRO_MANAGERS)


# ═══════════════════════════════════════════
# Templates
# ═══════════════════════════════════════════


class TestTemplates:
    def test_every_manager_has_all_templates(self):
        for pm in PACKAGE_MANAGERS.values():
            for op in Operation:
                template = pm.template(op)
                assert template, f"{pm.name} has no {op.value} template"
                joined = " ".join(template)
                if op.takes_target:
                    assert TARGET_PLACEHOLDER in joined
                else:
                    assert TARGET_PLACEHOLDER not in joined

    def test_pacman_install(self):
        pm = PACKAGE_MANAGERS["pacman"]
        assert pm.command_for(Operation.INSTALL, "vim") == ["pacman", "-S", "vim"]
        assert pm.requires_sudo(Operation.INSTALL)

    def test_search_without_sudo(self):
        for pm in PACKAGE_MANAGERS.values():
            assert not pm.requires_sudo(Operation.SEARCH)

    def test_update_ignores_target(self):
        pm = PACKAGE_MANAGERS["dnf"]
        assert pm.command_for(Operation.UPDATE) == ["dnf", "upgrade"]
        assert pm.command_for(Operation.UPDATE, "ignored") == ["dnf", "upgrade"]

    def test_placeholder_inside_token(self):
        pm = PACKAGE_MANAGERS["nix"]
        assert pm.command_for(Operation.INSTALL, "ripgrep") == ["nix-env", "-iA", "nixpkgs.ripgrep"]
        assert not pm.requires_sudo(Operation.INSTALL)
        assert pm.requires_sudo(Operation.UPDATE)

    def test_target_is_one_token(self):
        pm = PACKAGE_MANAGERS["apt"]
        argv = pm.command_for(Operation.SEARCH, "text editor; rm -rf /")
        assert argv == ["apt", "search", "text editor; rm -rf /"]

    def test_blank_target_rejected(self):
        pm = PACKAGE_MANAGERS["apk"]
        with pytest.raises(ValueError):
            pm.command_for(Operation.INSTALL, "")
        with pytest.raises(ValueError):
            pm.command_for(Operation.SEARCH, "   ")

    def test_refresh_templates(self):
        assert PACKAGE_MANAGERS["apt"].refresh == ("apt", "update")
        assert PACKAGE_MANAGERS["pacman"].refresh is None

    def test_to_dict(self):
        d = PACKAGE_MANAGERS["portage"].to_dict()
        assert d["name"] == "portage"
        assert d["binary"] == "emerge"
        assert d["refresh"] == ["emerge", "--sync"]
        assert d["sudo"] == ["install", "remove", "update"]


# ═══════════════════════════════════════════
# Synthesized Commands
# ═══════════════════════════════════════════


class TestSynthesizedCommand:
    def test_argv(self):
        cmd = SynthesizedCommand("pacman", ("-S", "vim"), True)
        assert cmd.argv == ["pacman", "-S", "vim"]

    def test_display_with_sudo(self):
        cmd = SynthesizedCommand("pacman", ("-S", "vim"), True)
        assert cmd.display() == "sudo pacman -S vim"
        assert cmd.display(sudo_prefix=False) == "pacman -S vim"

    def test_display_quotes_arguments(self):
        cmd = SynthesizedCommand("apt", ("search", "text editor"), False)
        assert cmd.display() == "apt search 'text editor'"

    def test_custom_manager(self):
        pm = PackageManager(
            name="brew",
            binary="brew",
            install=("brew", "install", TARGET_PLACEHOLDER),
            search=("brew", "search", TARGET_PLACEHOLDER),
            remove=("brew", "uninstall", TARGET_PLACEHOLDER),
            update=("brew", "upgrade"),
            sudo=frozenset(),
        )
        assert pm.command_for(Operation.REMOVE, "jq") == ["brew", "uninstall", "jq"]
        assert not pm.requires_sudo(Operation.UPDATE)


# ═══════════════════════════════════════════
# Inspection Queries
# ═══════════════════════════════════════════


class TestQueryCommands:
    def test_every_manager_has_queries(self):
        for pm in PACKAGE_MANAGERS.values():
            assert pm.query_command(QueryKind.LIST), f"{pm.name} has no list command"
            info = pm.query_command(QueryKind.INFO, "vim")
            assert "vim" in info, f"{pm.name} info ignores the package"
            assert TARGET_PLACEHOLDER not in " ".join(pm.list_installed)

    def test_pacman_list(self):
        pm = PACKAGE_MANAGERS["pacman"]
        assert pm.query_command(QueryKind.LIST) == ["pacman", "-Q"]
        assert pm.query_command(QueryKind.LIST, detailed=True) == ["pacman", "-Qi"]

    def test_detailed_falls_back_to_plain_list(self):
        pm = PACKAGE_MANAGERS["dnf"]
        assert pm.list_detailed is None
        assert pm.query_command(QueryKind.LIST, detailed=True) == ["dnf", "list", "--installed"]

    def test_list_ignores_target(self):
        pm = PACKAGE_MANAGERS["apk"]
        assert pm.query_command(QueryKind.LIST, "vim") == ["apk", "list", "--installed"]

    def test_info(self):
        pm = PACKAGE_MANAGERS["apt"]
        assert pm.query_command(QueryKind.INFO, "curl") == ["apt", "show", "curl"]

    def test_info_blank_target_rejected(self):
        pm = PACKAGE_MANAGERS["zypper"]
        with pytest.raises(ValueError):
            pm.query_command(QueryKind.INFO, " ")

    def test_manager_without_query_templates(self):
        pm = PackageManager(
            name="bare",
            binary="bare",
            install=("bare", "in", TARGET_PLACEHOLDER),
            search=("bare", "find", TARGET_PLACEHOLDER),
            remove=("bare", "out", TARGET_PLACEHOLDER),
            update=("bare", "up"),
        )
        with pytest.raises(ValueError):
            pm.query_command(QueryKind.LIST)

    def test_to_dict_includes_queries(self):
        d = PACKAGE_MANAGERS["nix"].to_dict()
        assert d["list"] == ["nix-env", "-q"]
        assert d["list_detailed"] == ["nix-env", "-q", "--description"]
        assert d["info"] == ["nix-env", "-qa", "--description", "{target}"]
