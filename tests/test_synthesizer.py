"""Tests for command synthesis."""

import pytest

from linux_distro_agent.core.exceptions import UnsupportedDistroError
from linux_distro_agent.core.synthesizer import build, build_plan, build_query
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package_manager import Operation, QueryKind, SynthesizedCommand

ARCH = DistroInfo(id="arch")
GENTOO = DistroInfo(id="gentoo")
UBUNTU = DistroInfo(id="ubuntu", id_like=("debian",))


# ═══════════════════════════════════════════
# Single Commands
# ═══════════════════════════════════════════


class TestBuild:
    def test_install_untranslated(self):
        cmd = build(ARCH, Operation.INSTALL, "vim")
        assert cmd == SynthesizedCommand("pacman", ("-S", "vim"), True)

    def test_install_translated(self):
        cmd = build(GENTOO, Operation.INSTALL, "python3", translate=True)
        assert cmd.argv == ["emerge", "dev-lang/python"]
        assert cmd.requires_sudo

    def test_remove_translated(self):
        cmd = build(UBUNTU, Operation.REMOVE, "docker", translate=True)
        assert cmd.argv == ["apt", "remove", "docker.io"]

    def test_translate_flag_off(self):
        cmd = build(GENTOO, Operation.INSTALL, "python3")
        assert cmd.argv == ["emerge", "python3"]

    def test_search_never_translated(self):
        cmd = build(GENTOO, Operation.SEARCH, "python3", translate=True)
        assert cmd.argv == ["emerge", "--search", "python3"]
        assert not cmd.requires_sudo

    def test_unknown_package_verbatim(self):
        cmd = build(ARCH, Operation.INSTALL, "yay-bin", translate=True)
        assert cmd.argv == ["pacman", "-S", "yay-bin"]

    def test_update(self):
        cmd = build(ARCH, Operation.UPDATE)
        assert cmd.argv == ["pacman", "-Syu"]
        assert cmd.requires_sudo

    def test_derivative_uses_ancestor_family(self):
        distro = DistroInfo(id="myspin", id_like=("arch",))
        cmd = build(distro, Operation.INSTALL, "python3", translate=True)
        assert cmd.argv == ["pacman", "-S", "python"]

    def test_unsupported(self):
        with pytest.raises(UnsupportedDistroError):
            build(DistroInfo(id="haiku"), Operation.INSTALL, "vim")

    def test_empty_target(self):
        with pytest.raises(ValueError):
            build(ARCH, Operation.INSTALL, "")

    def test_deterministic(self):
        assert build(UBUNTU, Operation.INSTALL, "fd", True) == build(UBUNTU, Operation.INSTALL, "fd", True)


# ═══════════════════════════════════════════
# Command Plans
# ═══════════════════════════════════════════


class TestBuildPlan:
    def test_apt_update_refreshes_first(self):
        plan = build_plan(UBUNTU, Operation.UPDATE)
        assert [cmd.argv for cmd in plan] == [["apt", "update"], ["apt", "upgrade"]]
        assert all(cmd.requires_sudo for cmd in plan)

    def test_pacman_update_single(self):
        plan = build_plan(ARCH, Operation.UPDATE)
        assert [cmd.argv for cmd in plan] == [["pacman", "-Syu"]]

    def test_install_single(self):
        plan = build_plan(GENTOO, Operation.INSTALL, "git", translate=True)
        assert len(plan) == 1
        assert plan[0].argv == ["emerge", "dev-vcs/git"]

    def test_nixos_update_sudo(self):
        plan = build_plan(DistroInfo(id="nixos"), Operation.UPDATE)
        assert plan[0].display() == "sudo nixos-rebuild switch --upgrade"


# ═══════════════════════════════════════════
# Inspection Queries
# ═══════════════════════════════════════════


class TestBuildQuery:
    def test_list_without_sudo(self):
        cmd = build_query(UBUNTU, QueryKind.LIST)
        assert cmd == SynthesizedCommand("apt", ("list", "--installed"), False)

    def test_list_detailed(self):
        cmd = build_query(UBUNTU, QueryKind.LIST, detailed=True)
        assert cmd.argv == ["dpkg-query", "-l"]

    def test_info_translated(self):
        cmd = build_query(GENTOO, QueryKind.INFO, "python3", translate=True)
        assert cmd.argv == ["equery", "list", "dev-lang/python"]
        assert not cmd.requires_sudo

    def test_info_untranslated(self):
        cmd = build_query(GENTOO, QueryKind.INFO, "python3")
        assert cmd.argv == ["equery", "list", "python3"]

    def test_unsupported(self):
        with pytest.raises(UnsupportedDistroError):
            build_query(DistroInfo(id="haiku"), QueryKind.LIST)
