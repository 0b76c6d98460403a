"""Repository display names from git."""

import re
import subprocess
from pathlib import Path

# git@github.com:owner/repo.git, https://github.com/owner/repo(.git)
_REMOTE_NAME = re.compile(r"[:/]([^/:]+/[^/]+?)(?:\.git)?/?$")


def run_git_command(cmd: list[str], cwd: str) -> str | None:
    """Run a git command and return output, or None on error."""
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=2,  # Fast timeout
        )
        if result.returncode == 0:
            return result.stdout.strip()
        return None
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return None


def parse_remote_name(url: str) -> str | None:
    """Return ``owner/repo`` from a git remote URL."""
    match = _REMOTE_NAME.search(url.strip())
    return match.group(1) if match else None


def resolve_repo_display_name(cwd: str) -> str | None:
    """Best-effort display name for the repository containing ``cwd``.

    Prefers ``owner/repo`` from the origin remote, then the name of the
    top-level directory.
    """
    remote = run_git_command(["git", "remote", "get-url", "origin"], cwd)
    if remote:
        name = parse_remote_name(remote)
        if name:
            return name

    toplevel = run_git_command(["git", "rev-parse", "--show-toplevel"], cwd)
    if toplevel:
        return Path(toplevel).name
    return None
