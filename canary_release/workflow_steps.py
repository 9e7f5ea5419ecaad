"""Entry points for GitHub Actions workflow steps.

A ``repository_dispatch`` run calls:

    python -m canary_release.workflow_steps dispatch

which reads the event payload from ``GITHUB_EVENT_PATH`` and routes its
action to the matching release workflow.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import ValidationError

from .config import load_settings
from .console import detail, step
from .forge import Forge, GitHubForge
from .models import DispatchEvent, ReleaseDraft
from .pipeline import create_canary_release, create_stable_release
from .versions import Bump

ReleaseKind = Literal["canary", "release"]

CANARY_ACTION = "create_canary_release"
RELEASE_ACTION = "create_release"

ACTIONS: dict[ReleaseKind, str] = {
    "canary": CANARY_ACTION,
    "release": RELEASE_ACTION,
}


async def run_release(
    forge: Forge, owner: str, repo: str, kind: ReleaseKind, bump: Bump
) -> ReleaseDraft | None:
    """Run the canary or stable workflow."""
    if kind == "canary":
        return await create_canary_release(forge, owner, repo, bump)
    return await create_stable_release(forge, owner, repo)


def run_pipeline(kind: ReleaseKind, bump: Bump) -> ReleaseDraft | None:
    """Run a release workflow against the configured repository."""
    settings = load_settings()

    async def _run() -> ReleaseDraft | None:
        async with GitHubForge(settings.token, settings.api_url) as forge:
            return await run_release(forge, settings.owner, settings.repo, kind, bump)

    return asyncio.run(_run())


def load_event(path: Path) -> DispatchEvent:
    """Read a ``repository_dispatch`` payload from disk."""
    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Cannot read event payload {path}: {exc}") from exc
    try:
        return DispatchEvent.from_github(payload)
    except ValidationError as exc:
        raise SystemExit(f"Invalid repository_dispatch payload in {path}:\n{exc}") from exc


async def handle_dispatch(event: DispatchEvent, forge: Forge) -> ReleaseDraft | None:
    """Route a dispatch event to its workflow.

    Unknown actions are reported and ignored so unrelated dispatch events
    sent to the same repository do not fail the run.
    """
    step(f"Handling {event.action!r} for {event.owner}/{event.repo}")
    if event.action == CANARY_ACTION:
        return await run_release(forge, event.owner, event.repo, "canary", event.release_type)
    if event.action == RELEASE_ACTION:
        return await run_release(forge, event.owner, event.repo, "release", event.release_type)
    detail(f"Ignoring unknown action {event.action!r}")
    return None


def dispatch(event_path: str) -> None:
    """Handle the dispatch event stored at ``event_path``."""
    event = load_event(Path(event_path))
    settings = load_settings({**os.environ, "GITHUB_REPOSITORY": f"{event.owner}/{event.repo}"})

    async def _run() -> ReleaseDraft | None:
        async with GitHubForge(settings.token, settings.api_url) as forge:
            return await handle_dispatch(event, forge)

    asyncio.run(_run())


def main(argv: list[str] | None = None) -> None:
    """Run a workflow step command."""
    args = argv if argv is not None else sys.argv[1:]
    parser = argparse.ArgumentParser(prog="python -m canary_release.workflow_steps")
    subparsers = parser.add_subparsers(dest="command", required=True)

    dispatch_parser = subparsers.add_parser("dispatch")
    dispatch_parser.add_argument(
        "--event-path",
        default=os.environ.get("GITHUB_EVENT_PATH"),
        help="Path to the event payload. (default: $GITHUB_EVENT_PATH)",
    )

    parsed = parser.parse_args(args)
    if parsed.command == "dispatch":
        if not parsed.event_path:
            parser.error("--event-path is required when GITHUB_EVENT_PATH is unset")
        dispatch(parsed.event_path)


if __name__ == "__main__":
    main()
