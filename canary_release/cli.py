"""CLI entry point for canary-release."""

from __future__ import annotations

import asyncio

import click
import httpx

from .config import load_settings
from .forge import GitHubForge
from .versions import Bump
from .workflow_steps import ACTIONS, ReleaseKind, run_pipeline

KIND_CHOICE = click.Choice(["canary", "release"])
BUMP_CHOICE = click.Choice(["major", "minor", "patch"])


@click.group()
@click.version_option(package_name="canary-release")
def cli() -> None:
    """Canary and stable GitHub releases with generated notes."""


@cli.command()
@click.argument("kind", type=KIND_CHOICE)
@click.argument("bump", type=BUMP_CHOICE, default="patch")
def run(kind: ReleaseKind, bump: Bump) -> None:
    """Create a release of KIND (canary or release) locally.

    BUMP picks the version component to bump when the latest release is
    stable. Reads GITHUB_TOKEN and GITHUB_REPOSITORY.
    """
    try:
        draft = run_pipeline(kind, bump)
    except httpx.HTTPError as exc:
        raise click.ClickException(f"GitHub request failed: {exc}") from exc

    if draft is None:
        click.echo("\nNothing to release.")
    else:
        click.echo(f"\n✓ Published {draft.tag_name}")


@cli.command()
@click.argument("kind", type=KIND_CHOICE)
@click.option(
    "-t",
    "--type",
    "bump",
    type=BUMP_CHOICE,
    default="patch",
    show_default=True,
    help="Version component to bump when the latest release is stable.",
)
def trigger(kind: ReleaseKind, bump: Bump) -> None:
    """Trigger a release via a repository_dispatch event."""
    settings = load_settings()
    action = ACTIONS[kind]

    async def _send() -> None:
        async with GitHubForge(settings.token, settings.api_url) as forge:
            await forge.dispatch(settings.owner, settings.repo, action, bump)

    click.echo(f"Triggering: {action} ({bump}) on {settings.slug}")
    try:
        asyncio.run(_send())
    except httpx.HTTPError as exc:
        raise click.ClickException(f"Failed to trigger workflow: {exc}") from exc
    click.echo("✓ Dispatched; watch the Actions tab for the release run")


if __name__ == "__main__":
    cli()
