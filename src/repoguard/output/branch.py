"""Branch-check reporter."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape

from repoguard.branches.validator import BranchCheck


def to_dict(check: BranchCheck, *, exempt: bool = False) -> Dict[str, Any]:
    return {
        "branch": check.name,
        "valid": check.valid,
        "exempt": exempt,
        "prefix": check.prefix,
        "description": check.description,
        "reason": check.reason,
        "allowed_prefixes": list(check.allowed_prefixes),
    }


def render_json(check: BranchCheck, *, exempt: bool = False) -> str:
    return json.dumps(to_dict(check, exempt=exempt), indent=2)


def render(check: BranchCheck, *, exempt: bool = False, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    if exempt:
        console.print(f"[dim]Branch [bold]{escape(check.name)}[/bold] is exempt from the naming rule.[/dim]")
        return
    if check.valid:
        console.print(f"[green]✓[/green] Branch [bold]{escape(check.name)}[/bold] follows the naming convention.")
        return
    console.print(f"[red]✗[/red] Branch [bold]{escape(check.name)}[/bold]: {escape(check.reason or '')}")
    console.print(f"  Allowed prefixes: [cyan]{', '.join(check.allowed_prefixes)}[/cyan]")
    console.print(f"  Example: [green]{escape(check.suggestion())}[/green]")
