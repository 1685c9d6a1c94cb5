"""Git hook installer — ``repoguard install`` / ``repoguard uninstall``.

``pre-commit`` scans staged changes; ``pre-push`` checks the branch name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

HOOK_MARKER = "# repoguard-hook"

HOOK_COMMANDS: Dict[str, str] = {
    "pre-commit": "repoguard scan",
    "pre-push": "repoguard branch",
}

# (ok, text) per hook, so a partial install reports each outcome
HookMessage = Tuple[bool, str]


def _hook_script(command: str) -> str:
    return (
        "#!/bin/sh\n"
        f"{HOOK_MARKER}\n"
        "# Installed by repoguard. Remove with: repoguard uninstall\n"
        "\n"
        f"exec {command}\n"
    )


def _hooks_dir(repo_root: Path) -> Path:
    return repo_root / ".git" / "hooks"


def _is_ours(hook_path: Path) -> bool:
    return HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")


def install_hooks(repo_root: Path, *, force: bool = False) -> Tuple[bool, List[HookMessage]]:
    """Install every repoguard hook.

    Returns (success, messages). A foreign hook is left alone unless *force*.
    """
    hooks_dir = _hooks_dir(repo_root)
    if not hooks_dir.parent.is_dir():
        return False, [(False, f"Not a git repository: {repo_root}")]
    hooks_dir.mkdir(parents=True, exist_ok=True)

    ok = True
    messages: List[HookMessage] = []
    for name, command in HOOK_COMMANDS.items():
        hook_path = hooks_dir / name
        if hook_path.exists() and not _is_ours(hook_path) and not force:
            ok = False
            messages.append((
                False,
                f"A {name} hook already exists at {hook_path}. "
                f"Use --force to overwrite, or add '{command}' to it.",
            ))
            continue
        hook_path.write_text(_hook_script(command), encoding="utf-8")
        try:
            hook_path.chmod(0o755)
        except OSError:
            pass  # not supported on Windows
        messages.append((True, f"Installed {name} hook at {hook_path}"))
    return ok, messages


def uninstall_hooks(repo_root: Path) -> Tuple[bool, List[HookMessage]]:
    """Remove hooks that carry the repoguard marker. Returns (success, messages)."""
    hooks_dir = _hooks_dir(repo_root)
    ok = True
    messages: List[HookMessage] = []
    for name in HOOK_COMMANDS:
        hook_path = hooks_dir / name
        if not hook_path.exists():
            continue
        if not _is_ours(hook_path):
            ok = False
            messages.append((False, f"{name} hook exists but was not installed by repoguard."))
            continue
        hook_path.unlink()
        messages.append((True, f"Removed {name} hook from {hook_path}"))
    if ok and not messages:
        messages.append((True, "No repoguard hooks found, nothing to remove."))
    return ok, messages
