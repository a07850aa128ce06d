"""
Linux Distro Agent CLI — Distribution-aware package command helper.

Usage:
    lda detect --extended
    lda install vim
    lda --distro gentoo install python3
    lda -q update
    lda list --detailed
    lda package-info vim
    lda compat translate python3 --target-distro gentoo
    lda compat export --format sqlite --output-dir ./out
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linux_distro_agent.compat.layer import classify_distro, classify_family, get_layer
from linux_distro_agent.core import os_release, registry, synthesizer
from linux_distro_agent.core.exceptions import ResolutionError, UnsupportedDistroError
from linux_distro_agent.models.distro import DistroInfo
from linux_distro_agent.models.package import CanonicalPackage, DistroFamily
from linux_distro_agent.models.package_manager import Operation, QueryKind, SynthesizedCommand

logger = logging.getLogger("linux_distro_agent")

console = Console()
err_console = Console(stderr=True)


@dataclass
class AgentContext:
    """Options shared by every command, plus the lazily resolved distro."""

    os_release_path: str | None = None
    distro_override: str | None = None
    verbose: bool = False
    quiet: bool = False
    _distro: DistroInfo | None = field(default=None, repr=False)

    def distro(self) -> DistroInfo:
        """Resolve the distribution once per invocation."""
        if self._distro is None:
            if self.distro_override:
                self._distro = DistroInfo.from_id(self.distro_override)
                logger.debug(f"Using distro override: {self._distro.id}")
            else:
                self._distro = os_release.resolve(self.os_release_path)
        return self._distro


pass_agent = click.make_pass_decorator(AgentContext)


def _fail(ctx: click.Context, error: ResolutionError) -> NoReturn:
    """Report a resolution failure and exit with its distinct code."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", soft_wrap=True)
    if isinstance(error, UnsupportedDistroError):
        err_console.print(
            "Run 'lda list-supported' to see supported distributions, "
            "or pass --distro with a supported id.",
            soft_wrap=True,
        )
    else:
        err_console.print("Pass --distro <id> (or set LDA_DISTRO) to skip detection.", soft_wrap=True)
    ctx.exit(error.exit_code)


def _info(agent: AgentContext, message: str) -> None:
    if not agent.quiet:
        console.print(message, soft_wrap=True)


def _emit_commands(
    agent: AgentContext,
    distro: DistroInfo,
    op: Operation | QueryKind,
    phrase: str,
    commands: list[SynthesizedCommand],
    as_json: bool,
) -> None:
    """Print synthesized commands for humans, for scripts (quiet), or as JSON."""
    if as_json:
        payload = {
            "distro": distro.id,
            "package_manager": registry.lookup(distro).name,
            "operation": op.value,
            "commands": [{**cmd.to_dict(), "display": cmd.display()} for cmd in commands],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    if agent.quiet:
        for cmd in commands:
            click.echo(cmd.display())
        return

    rendered = " && ".join(cmd.display() for cmd in commands)
    console.print(f"To {escape(phrase)}, run: [bold]{escape(rendered)}[/bold]", soft_wrap=True)


def _run_operation(
    ctx: click.Context,
    agent: AgentContext,
    op: Operation,
    target: str,
    phrase: str,
    translate: bool,
    as_json: bool,
) -> None:
    try:
        distro = agent.distro()
        commands = synthesizer.build_plan(distro, op, target, translate=translate)
    except ResolutionError as e:
        _fail(ctx, e)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    _emit_commands(agent, distro, op, phrase, commands, as_json)


# ──────────────────────────────────────────────
# Root group
# ──────────────────────────────────────────────


@click.group()
@click.version_option(package_name="linux-distro-agent")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only print commands and errors.")
@click.option(
    "--os-release",
    "os_release_path",
    type=click.Path(dir_okay=False),
    envvar="LDA_OS_RELEASE",
    default=None,
    help="Read the distribution descriptor from this file.",
)
@click.option(
    "--distro",
    "distro_override",
    envvar="LDA_DISTRO",
    default=None,
    help="Skip detection and act as this distribution id.",
)
@click.pass_context
def cli(ctx, verbose, quiet, os_release_path, distro_override):
    """Linux Distro Agent — native package commands for any distribution."""
    if verbose and quiet:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if distro_override is not None and not distro_override.strip():
        raise click.BadParameter("must not be empty", param_hint="--distro")

    # Configure logging
    log_level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ctx.obj = AgentContext(
        os_release_path=os_release_path,
        distro_override=distro_override,
        verbose=verbose,
        quiet=quiet,
    )


# ──────────────────────────────────────────────
# Detection
# ──────────────────────────────────────────────


@cli.command()
@click.option("--extended", "-e", is_flag=True, help="Show id_like chain and URLs.")
@pass_agent
@click.pass_context
def detect(ctx, agent, extended):
    """Detect and display the current Linux distribution."""
    try:
        distro = agent.distro()
    except ResolutionError as e:
        _fail(ctx, e)

    console.print(f"Detected Linux distribution: [bold]{escape(distro.display_name)}[/bold]", soft_wrap=True)
    if distro.version:
        console.print(f"Version: {escape(distro.version)}", soft_wrap=True)
    console.print(f"ID: {escape(distro.id)}")
    console.print(f"Family: {classify_distro(distro).value}")

    try:
        console.print(f"Package Manager: {registry.lookup(distro).name}")
    except UnsupportedDistroError:
        console.print("Package Manager: [yellow]unsupported[/yellow]")

    if extended:
        rows = [
            ("ID Like", " ".join(distro.id_like) or None),
            ("Name", distro.name),
            ("Pretty Name", distro.pretty_name),
            ("Version ID", distro.version_id),
            ("Home URL", distro.home_url),
            ("Support URL", distro.support_url),
            ("Bug Report URL", distro.bug_report_url),
        ]
        for label, value in rows:
            if value:
                console.print(f"{label}: {escape(value)}", soft_wrap=True)


@cli.command()
@click.option("--pretty", "-p", is_flag=True, help="Pretty-print the JSON.")
@pass_agent
@click.pass_context
def info(ctx, agent, pretty):
    """Print distribution information as JSON."""
    try:
        distro = agent.distro()
    except ResolutionError as e:
        _fail(ctx, e)

    payload = distro.to_dict()
    payload["family"] = classify_distro(distro).value
    try:
        payload["package_manager"] = registry.lookup(distro).name
    except UnsupportedDistroError:
        payload["package_manager"] = None

    click.echo(json.dumps(payload, indent=2 if pretty else None))


# ──────────────────────────────────────────────
# Package operations
# ──────────────────────────────────────────────


@cli.command()
@click.argument("package")
@click.option("--no-translate", is_flag=True, help="Use the package name verbatim.")
@click.option("--json", "as_json", is_flag=True, help="Print the command as JSON.")
@pass_agent
@click.pass_context
def install(ctx, agent, package, no_translate, as_json):
    """Show the command that installs PACKAGE."""
    _run_operation(ctx, agent, Operation.INSTALL, package, f"install '{package}'", not no_translate, as_json)


@cli.command()
@click.argument("package")
@click.option("--no-translate", is_flag=True, help="Use the package name verbatim.")
@click.option("--json", "as_json", is_flag=True, help="Print the command as JSON.")
@pass_agent
@click.pass_context
def remove(ctx, agent, package, no_translate, as_json):
    """Show the command that removes PACKAGE."""
    _run_operation(ctx, agent, Operation.REMOVE, package, f"remove '{package}'", not no_translate, as_json)


@cli.command()
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Print the command as JSON.")
@pass_agent
@click.pass_context
def search(ctx, agent, query, as_json):
    """Show the command that searches native repositories for QUERY."""
    _run_operation(ctx, agent, Operation.SEARCH, query, f"search for '{query}'", False, as_json)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the commands as JSON.")
@pass_agent
@click.pass_context
def update(ctx, agent, as_json):
    """Show the command(s) that update the whole system."""
    _run_operation(ctx, agent, Operation.UPDATE, "", "update the system", False, as_json)


def _run_query(
    ctx: click.Context,
    agent: AgentContext,
    kind: QueryKind,
    package: str,
    phrase: str,
    detailed: bool,
    translate: bool,
    as_json: bool,
) -> None:
    try:
        distro = agent.distro()
        command = synthesizer.build_query(distro, kind, package, detailed=detailed, translate=translate)
    except ResolutionError as e:
        _fail(ctx, e)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    _emit_commands(agent, distro, kind, phrase, [command], as_json)


@cli.command("list")
@click.option("--detailed", "-d", is_flag=True, help="Use the verbose listing where available.")
@click.option("--json", "as_json", is_flag=True, help="Print the command as JSON.")
@pass_agent
@click.pass_context
def list_installed(ctx, agent, detailed, as_json):
    """Show the command that lists installed packages."""
    _run_query(ctx, agent, QueryKind.LIST, "", "list installed packages", detailed, False, as_json)


@cli.command("package-info")
@click.argument("package")
@click.option("--no-translate", is_flag=True, help="Use the package name verbatim.")
@click.option("--json", "as_json", is_flag=True, help="Print the command as JSON.")
@pass_agent
@click.pass_context
def package_info(ctx, agent, package, no_translate, as_json):
    """Show the command that prints details about PACKAGE."""
    _run_query(
        ctx, agent, QueryKind.INFO, package, f"show details for '{package}'", False, not no_translate, as_json
    )


# ──────────────────────────────────────────────
# Support overview
# ──────────────────────────────────────────────


@cli.command("list-supported")
def list_supported():
    """List supported distributions and their package managers."""
    table = Table(title="Supported Distributions")
    table.add_column("Package Manager", style="cyan")
    table.add_column("Binary")
    table.add_column("Distribution IDs")

    for manager, ids in registry.supported_distros():
        table.add_row(manager.name, manager.binary, ", ".join(ids))

    console.print(table)
    console.print("Derivatives declaring one of these ids in ID_LIKE are supported too.")


@cli.command()
@pass_agent
@click.pass_context
def doctor(ctx, agent):
    """Check how well this system is supported."""
    console.print("[bold]System Compatibility Check[/bold]\n")

    try:
        distro = agent.distro()
    except ResolutionError as e:
        _fail(ctx, e)

    console.print(f"[green]✓[/green] Distribution: {escape(distro.display_name)} ({escape(distro.id)})")

    failure: ResolutionError | None = None
    try:
        manager = registry.lookup(distro)
        console.print(f"[green]✓[/green] Package Manager: {manager.name}")
    except UnsupportedDistroError as e:
        failure = e
        console.print("[yellow]⚠[/yellow] Package Manager: unknown - limited functionality")

    family = classify_distro(distro)
    if family is DistroFamily.OTHER:
        console.print("[yellow]⚠[/yellow] Package family: unknown - canonical names used verbatim")
    else:
        console.print(f"[green]✓[/green] Package family: {family.value}")

    if distro.version or distro.version_id:
        console.print("[green]✓[/green] Version information available")
    else:
        console.print("[yellow]⚠[/yellow] Version information not available")

    console.print("\n[cyan]Recommendations:[/cyan]")
    if failure:
        console.print("  • Check whether your distribution uses a supported package manager")
        console.print("  • Pass --distro with the closest supported id as a workaround")
        ctx.exit(failure.exit_code)
    else:
        console.print("  • Your system is fully supported!")


# ──────────────────────────────────────────────
# Compatibility layer
# ──────────────────────────────────────────────


def target_distro_option(func):
    return click.option(
        "--target-distro",
        "-t",
        envvar="LDA_TARGET_DISTRO",
        default=None,
        help="Distribution id to translate for (defaults to the detected one).",
    )(func)


def _target(ctx: click.Context, agent: AgentContext, target_distro: str | None) -> tuple[DistroInfo, DistroFamily]:
    """Resolve the distro and family compat queries are answered for."""
    if target_distro is not None:
        try:
            distro = DistroInfo.from_id(target_distro)
        except ValueError:
            raise click.BadParameter("must not be empty", param_hint="--target-distro") from None
        return distro, classify_family(distro.id)

    try:
        distro = agent.distro()
    except ResolutionError as e:
        _fail(ctx, e)
    return distro, classify_distro(distro)


def _query_target(ctx: click.Context, agent: AgentContext, target_distro: str | None) -> tuple[str, DistroFamily]:
    """Column label and family for database-only queries; detection failures fall back to canonical names."""
    if target_distro is not None:
        distro, family = _target(ctx, agent, target_distro)
        return distro.id, family

    try:
        distro = agent.distro()
    except ResolutionError as e:
        logger.debug(f"Detection failed, listing canonical names: {e}")
        return "canonical", DistroFamily.OTHER
    return distro.id, classify_distro(distro)


def _package_table(packages: list[CanonicalPackage], label: str, family: DistroFamily) -> Table:
    table = Table()
    table.add_column("Canonical", style="cyan")
    table.add_column(f"{escape(label)} ({family.value})")
    table.add_column("Category")
    table.add_column("Description")
    for pkg in packages:
        table.add_row(
            escape(pkg.canonical_name),
            escape(pkg.name_for(family)),
            pkg.category.value,
            escape(pkg.description),
        )
    return table


def _print_packages(
    agent: AgentContext,
    packages: list[CanonicalPackage],
    label: str,
    family: DistroFamily,
    as_json: bool,
    empty_message: str,
) -> None:
    if as_json:
        payload = [{**pkg.to_dict(), "package_name": pkg.name_for(family)} for pkg in packages]
        click.echo(json.dumps(payload, indent=2))
    elif not packages:
        _info(agent, empty_message)
    else:
        console.print(_package_table(packages, label, family))


@cli.group()
def compat():
    """Cross-distribution package name compatibility layer."""
    pass


@compat.command("translate")
@click.argument("name")
@target_distro_option
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@pass_agent
@click.pass_context
def compat_translate(ctx, agent, name, target_distro, as_json):
    """Translate canonical package NAME for a distribution."""
    if not name.strip():
        raise click.BadParameter("must not be empty", param_hint="NAME")
    distro, family = _target(ctx, agent, target_distro)
    result = get_layer().translate(name, family)

    install_cmd: SynthesizedCommand | None = None
    try:
        install_cmd = synthesizer.build(distro, Operation.INSTALL, name, translate=True)
    except UnsupportedDistroError:
        logger.debug(f"No package manager for {distro.id}; skipping install command")

    if as_json:
        payload = result.to_dict()
        payload["distro"] = distro.id
        payload["install_command"] = install_cmd.to_dict() if install_cmd else None
        click.echo(json.dumps(payload, indent=2))
        return

    if agent.quiet:
        click.echo(result.package_name)
        return

    console.print(f"Translating '{escape(name)}' for {escape(distro.id)} ({family.value}):", soft_wrap=True)
    console.print(
        f"[green]Canonical:[/green] {escape(name)} -> [green]Distro-specific:[/green] "
        f"{escape(result.package_name)}",
        soft_wrap=True,
    )
    if not result.known:
        console.print("[yellow]Not in the compatibility database; using the name verbatim.[/yellow]")
    if install_cmd:
        console.print(f"Install command: {escape(install_cmd.display())}", soft_wrap=True)
    else:
        console.print(f"[yellow]No install command available for {escape(distro.id)}[/yellow]", soft_wrap=True)


@compat.command("reverse")
@click.argument("name")
@target_distro_option
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@pass_agent
@click.pass_context
def compat_reverse(ctx, agent, name, target_distro, as_json):
    """Find the canonical package a distribution calls NAME."""
    distro, family = _target(ctx, agent, target_distro)
    package = get_layer().reverse_lookup(name, family)

    if as_json:
        click.echo(json.dumps(package.to_dict() if package else None, indent=2))
        if package is None:
            ctx.exit(1)
        return

    if package is None:
        _info(agent, f"No canonical package is called '{escape(name)}' on {escape(distro.id)}")
        ctx.exit(1)

    if agent.quiet:
        click.echo(package.canonical_name)
        return

    console.print(
        f"'{escape(name)}' on {escape(distro.id)} is canonical package "
        f"[bold]{escape(package.canonical_name)}[/bold] ({package.category.value})",
        soft_wrap=True,
    )
    others = {
        fam.value: pkg_name for fam, pkg_name in package.overrides.items() if fam is not family
    }
    for fam_name, pkg_name in others.items():
        console.print(f"  {fam_name}: {escape(pkg_name)}", soft_wrap=True)


@compat.command("search")
@click.argument("term")
@target_distro_option
@click.option("--json", "as_json", is_flag=True, help="Print matches as JSON.")
@pass_agent
@click.pass_context
def compat_search(ctx, agent, term, target_distro, as_json):
    """Find canonical packages whose name or description contains TERM."""
    label, family = _query_target(ctx, agent, target_distro)
    packages = get_layer().search(term)
    _print_packages(agent, packages, label, family, as_json, "No packages found matching the search term")


@compat.command("category")
@click.argument("name")
@target_distro_option
@click.option("--json", "as_json", is_flag=True, help="Print packages as JSON.")
@pass_agent
@click.pass_context
def compat_category(ctx, agent, name, target_distro, as_json):
    """Show packages in category NAME."""
    layer = get_layer()
    try:
        packages = layer.list_category(name)
    except ValueError:
        valid = ", ".join(c.value for c in layer.list_categories())
        raise click.BadParameter(f"unknown category {name!r} (choose from: {valid})", param_hint="NAME") from None

    label, family = _query_target(ctx, agent, target_distro)
    _print_packages(agent, packages, label, family, as_json, "No packages found in this category")


@compat.command("categories")
def compat_categories():
    """List package categories."""
    for category in get_layer().list_categories():
        click.echo(category.value)


@compat.command("packages")
@click.option("--json", "as_json", is_flag=True, help="Print packages as JSON.")
def compat_packages(as_json):
    """List every canonical package name."""
    packages = get_layer().list_packages()
    if as_json:
        click.echo(json.dumps([pkg.to_dict() for pkg in packages], indent=2))
        return
    for pkg in sorted(packages, key=lambda p: p.canonical_name):
        click.echo(f"{pkg.canonical_name} - {pkg.description}")


@compat.command("export")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["json", "sqlite"]),
    default="json",
    help="Export format.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="./compat_export",
    help="Output directory for the exported database.",
)
@pass_agent
def compat_export(agent, fmt, output_dir):
    """Export the compatibility database to JSON or SQLite."""
    from linux_distro_agent.exporters import export_database, get_exporter

    exporter = get_exporter(fmt, output_dir)
    count = asyncio.run(export_database([exporter], get_layer().packages))
    _info(agent, f"[green]Exported {count} packages ({fmt}) to {escape(output_dir)}[/green]")


if __name__ == "__main__":
    cli()
