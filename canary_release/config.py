"""Runtime settings from the environment and pyproject.toml.

The environment always wins. A repository may set defaults in its root
pyproject.toml, which is read with tomlkit:

    [tool.canary-release]
    repository = "octo/hello"
    api-url = "https://github.example.com/api/v3"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel

from .console import fatal
from .forge import DEFAULT_API_URL

TOOL_TABLE = "canary-release"


class Settings(BaseModel):
    """Credentials and target repository for one run."""

    token: str
    owner: str
    repo: str
    api_url: str = DEFAULT_API_URL

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def load_tool_config(root: Path) -> dict[str, Any]:
    """Return the ``[tool.canary-release]`` table, or {} if there is none."""
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return {}
    doc = tomlkit.parse(pyproject.read_text())
    return dict(doc.get("tool", {}).get(TOOL_TABLE, {}))


def split_slug(slug: str) -> tuple[str, str]:
    """Split an ``owner/repo`` slug.

    Raises:
        SystemExit: If the slug is not exactly two non-empty parts.
    """
    owner, sep, repo = slug.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        fatal(f"Invalid repository {slug!r}; expected owner/repo")
    return owner, repo


def load_settings(
    environ: Mapping[str, str] | None = None, root: Path | None = None
) -> Settings:
    """Resolve settings for the current run.

    Args:
        environ: Environment to read; defaults to ``os.environ``.
        root: Directory holding pyproject.toml; defaults to the cwd.

    Reads GITHUB_TOKEN (required), GITHUB_REPOSITORY and GITHUB_API_URL.

    Raises:
        SystemExit: If the token or repository is missing or malformed.
    """
    env = os.environ if environ is None else environ
    tool = load_tool_config(root or Path.cwd())

    token = env.get("GITHUB_TOKEN")
    if not token:
        fatal("GITHUB_TOKEN is not set")

    slug = env.get("GITHUB_REPOSITORY") or tool.get("repository")
    if not slug:
        fatal(
            "No repository configured. Set GITHUB_REPOSITORY=owner/repo or add\n\n"
            f"  [tool.{TOOL_TABLE}]\n"
            '  repository = "owner/repo"'
        )
    owner, repo = split_slug(str(slug))

    api_url = env.get("GITHUB_API_URL") or tool.get("api-url") or DEFAULT_API_URL
    return Settings(token=token, owner=owner, repo=repo, api_url=str(api_url))
