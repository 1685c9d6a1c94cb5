"""repoguard CLI — Typer application: branch, scan, check, rules, install, init, audit."""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from repoguard import __version__

app = typer.Typer(
    name="repoguard",
    help="Enforce branch naming and block secrets before they reach protected branches.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _detect_ci() -> bool:
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from repoguard.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _repo_root_or_cwd() -> Path:
    from repoguard.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError:
        return Path.cwd()


def _load(repo_root: Path, config: Optional[str]):
    from repoguard.config.loader import ConfigError, load_config

    try:
        return load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _registry(cfg, repo_root: Path):
    from repoguard.rules.models import RuleError
    from repoguard.rules.registry import build_registry

    try:
        return build_registry(cfg, repo_root)
    except RuleError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _apply_overrides(cfg, *, ci_mode: bool, format: Optional[str], fail_on: Optional[str]) -> None:
    from repoguard.config.schema import OUTPUT_FORMATS, SEVERITY_ORDER

    if ci_mode and cfg.output.format == "terminal" and format is None:
        cfg.output.format = "json"
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format
    if fail_on:
        if fail_on not in SEVERITY_ORDER:
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {escape(fail_on)}")
            raise typer.Exit(code=2)
        cfg.scan.fail_on = fail_on


# ── branch ────────────────────────────────────────────────────────────────────


def _check_branch(cfg, repo_root: Path, name: Optional[str]):
    """Return (check, exempt) for *name*, or the current branch when omitted."""
    from repoguard.branches.validator import is_exempt, validate_branch_name
    from repoguard.git.adapter import GitError, resolve_branch_name

    exempt = False
    if name is None:
        try:
            name = resolve_branch_name(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc
        exempt = is_exempt(name, cfg.branches.exempt)
    return validate_branch_name(name, cfg.branches.prefixes), exempt


@app.command()
def branch(
    name: Optional[str] = typer.Argument(None, help="Branch name to check (default: current branch)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .repoguard.toml"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Check a branch name against the allowed prefix/description convention."""
    from repoguard.output import branch as branch_report

    if format not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
        raise typer.Exit(code=2)

    repo_root = _repo_root_or_cwd() if name is not None else _resolve_repo_root()
    cfg = _load(repo_root, config)
    check, exempt = _check_branch(cfg, repo_root, name)

    if format == "json":
        print(branch_report.render_json(check, exempt=exempt))
    else:
        branch_report.render(check, exempt=exempt, console=console)

    if not (check.valid or exempt):
        raise typer.Exit(code=1)


# ── scan ──────────────────────────────────────────────────────────────────────


def _run_scan(
    cfg,
    repo_root: Path,
    *,
    paths: Optional[List[Path]],
    all_files: bool,
    ci_mode: bool,
    from_ref: Optional[str],
    to_ref: Optional[str],
    verbose: bool,
    dry_run: bool,
):
    """Collect the input, scan it, and return a ScanResult (None if nothing to scan)."""
    from repoguard.git.adapter import GitError, get_range_diff, get_staged_diff, get_tracked_files
    from repoguard.git.diff_parser import DiffParser
    from repoguard.scanner.engine import ScanError, scan_diff, scan_paths
    from repoguard.scanner.files import iter_files

    registry = _registry(cfg, repo_root)
    if verbose:
        console.print(f"[dim]Rules loaded: {len(registry.enabled_rules())}[/dim]")
        console.print(f"[dim]Repo root: {repo_root}[/dim]")
        console.print(f"[dim]CI mode: {ci_mode}[/dim]")

    try:
        if paths or all_files:
            targets = list(paths or [])
            tracked = [repo_root / p for p in get_tracked_files(repo_root)] if all_files else []
            if dry_run:
                present = targets + [p for p in tracked if p.exists()]
                _print_dry_run([str(p) for p in iter_files(present)])
                raise typer.Exit(code=0)
            return scan_paths(targets, cfg, registry, repo_root, tracked=tracked)

        if ci_mode and from_ref:
            diff_text = get_range_diff(repo_root, from_ref, to_ref or "HEAD")
        else:
            diff_text = get_staged_diff(repo_root)
        if not diff_text.strip():
            return None
        if dry_run:
            _print_dry_run(DiffParser(diff_text).files())
            raise typer.Exit(code=0)
        return scan_diff(diff_text, cfg, registry, repo_root)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except (ScanError, FileNotFoundError) as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _print_dry_run(files: List[str]) -> None:
    console.print(f"[bold]Dry run — {len(files)} files would be scanned:[/bold]")
    for f in files:
        console.print(f"  {escape(f)}")


def _report(result, cfg, *, ci_mode: bool, output: Optional[str], verbose: bool) -> None:
    from repoguard.output import json_report, sarif, terminal

    redact_all = ci_mode and cfg.ci.full_redaction
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(result, ci_mode=redact_all, show_summary=cfg.output.show_summary, console=console)
    elif cfg.output.format == "json":
        report_text = json_report.render(result, ci_mode=redact_all)
        print(report_text)
    elif cfg.output.format == "sarif":
        report_text = sarif.render(result)
        print(report_text)

    if output:
        if report_text is None:
            # terminal output has no file form; write JSON instead
            report_text = json_report.render(result, ci_mode=redact_all)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {escape(output)}[/dim]")

    if ci_mode and result.findings and cfg.ci.annotation_format == "github":
        _emit_github_annotations(result)


def _emit_github_annotations(result) -> None:
    for f in result.findings:
        level = "error" if f.is_blocking else "warning"
        print(f"::{level} file={f.file},line={f.line_no},col={f.column}::{f.label} pattern matched [REDACTED]")


def _empty_report(cfg, *, ci_mode: bool) -> None:
    from repoguard.findings.models import ScanResult
    from repoguard.output import json_report, sarif

    if cfg.output.format == "terminal":
        console.print("[dim]No changes to scan.[/dim]")
    elif cfg.output.format == "json":
        print(json_report.render(ScanResult(), ci_mode=ci_mode))
    else:
        print(sarif.render(ScanResult()))


@app.command()
def scan(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to scan (default: staged changes)"),
    all_files: bool = typer.Option(False, "--all", help="Scan every tracked file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .repoguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | sarif"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: low | medium | high | critical"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit (CI mode)"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (CI mode)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be scanned without scanning"),
) -> None:
    """Scan staged changes, a commit range, or files for secret patterns."""
    repo_root = _resolve_repo_root()
    cfg = _load(repo_root, config)
    ci_mode = ci or _detect_ci()
    _apply_overrides(cfg, ci_mode=ci_mode, format=format, fail_on=fail_on)

    result = _run_scan(
        cfg,
        repo_root,
        paths=paths,
        all_files=all_files,
        ci_mode=ci_mode,
        from_ref=from_ref,
        to_ref=to_ref,
        verbose=verbose or debug,
        dry_run=dry_run,
    )
    if result is None:
        _empty_report(cfg, ci_mode=ci_mode)
        raise typer.Exit(code=0)

    if debug:
        console.print(f"[dim]Scan duration: {result.scan_duration_ms:.0f}ms[/dim]")

    _report(result, cfg, ci_mode=ci_mode, output=output, verbose=verbose or debug)
    raise typer.Exit(code=1 if result.blocked else 0)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .repoguard.toml"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit (CI mode)"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (CI mode)"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: low | medium | high | critical"),
) -> None:
    """Run the branch check and the secret scan as one status check."""
    from repoguard.output import branch as branch_report

    repo_root = _resolve_repo_root()
    cfg = _load(repo_root, config)
    ci_mode = ci or _detect_ci()
    _apply_overrides(cfg, ci_mode=ci_mode, format=None, fail_on=fail_on)

    branch_check, exempt = _check_branch(cfg, repo_root, None)
    branch_report.render(branch_check, exempt=exempt, console=console)
    branch_ok = branch_check.valid or exempt

    result = _run_scan(
        cfg,
        repo_root,
        paths=None,
        all_files=False,
        ci_mode=ci_mode,
        from_ref=from_ref,
        to_ref=to_ref,
        verbose=False,
        dry_run=False,
    )
    if result is None:
        _empty_report(cfg, ci_mode=ci_mode)
        scan_ok = True
    else:
        _report(result, cfg, ci_mode=ci_mode, output=None, verbose=False)
        scan_ok = not result.blocked

    raise typer.Exit(code=0 if branch_ok and scan_ok else 1)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .repoguard.toml"),
) -> None:
    """List secret patterns and whether they are enabled."""
    repo_root = _repo_root_or_cwd()
    cfg = _load(repo_root, config)
    registry = _registry(cfg, repo_root)

    table = Table(title="repoguard rules", title_style="bold", border_style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Severity")
    table.add_column("Enabled", justify="center")
    table.add_column("Pattern", style="dim", overflow="fold")
    for rule in registry.all_rules:
        table.add_row(
            rule.id,
            escape(rule.label),
            rule.severity,
            "yes" if rule.enabled else "no",
            escape(rule.pattern),
        )
    Console().print(table)


# ── install / uninstall ───────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing hooks"),
) -> None:
    """Install repoguard as pre-commit and pre-push git hooks."""
    from repoguard.hooks.installer import install_hooks

    repo_root = _resolve_repo_root()
    success, messages = install_hooks(repo_root, force=force)
    _print_hook_messages(success, messages)


@app.command()
def uninstall() -> None:
    """Remove repoguard git hooks."""
    from repoguard.hooks.installer import uninstall_hooks

    repo_root = _resolve_repo_root()
    success, messages = uninstall_hooks(repo_root)
    _print_hook_messages(success, messages)


def _print_hook_messages(success: bool, messages) -> None:
    for ok, msg in messages:
        mark = "[green]✓[/green]" if ok else "[red]✗[/red]"
        console.print(f"{mark} {escape(msg)}")
    if not success:
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    full: bool = typer.Option(False, "--full", help="Include every config section"),
) -> None:
    """Generate a starter .repoguard.toml in the repo root."""
    from repoguard.config.defaults import DEFAULT_TOML, FULL_TOML
    from repoguard.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]![/yellow] {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(FULL_TOML if full else DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── audit ─────────────────────────────────────────────────────────────────────


@app.command()
def audit() -> None:
    """List every repoguard-ignore / nosec comment in tracked files."""
    repo_root = _resolve_repo_root()

    try:
        result = subprocess.run(
            ["git", "grep", "-n", "-E", r"(#|//|/\*)\s*(repoguard-ignore|nosec)"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except FileNotFoundError as exc:
        console.print("[bold red]Error:[/bold red] git is not available")
        raise typer.Exit(code=2) from exc

    # git grep exits 1 when nothing matches
    if result.returncode > 1:
        console.print(f"[bold red]Git error:[/bold red] {escape(result.stderr.strip())}")
        raise typer.Exit(code=2)

    lines = [line for line in result.stdout.split("\n") if line.strip()]
    if not lines:
        console.print("[green]No repoguard-ignore comments found.[/green]")
        raise typer.Exit(code=0)

    console.print(f"[bold]Found {len(lines)} suppression comment(s):[/bold]")
    console.print()
    for line in lines:
        parts = line.split(":", 2)
        if len(parts) != 3:
            console.print(f"  {escape(line)}")
            continue
        file, line_no, content = parts
        scope_match = re.search(r"(?:repoguard-ignore|nosec)\[([^\]]+)\]", content)
        scope = scope_match.group(1) if scope_match else "ALL"
        console.print(
            f"  [cyan]{escape(file)}[/cyan]:[green]{line_no}[/green]  "
            f"scope=[yellow]{escape(scope)}[/yellow]"
        )


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"repoguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """repoguard — branch naming and secret-pattern checks."""
