"""CLI entry point using Typer."""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import typer

from sepbot.actions.ping import PingHandler
from sepbot.actions.result import ActionResult, error_message
from sepbot.actions.transition import TransitionHandler
from sepbot.config import ConfigError, load_config, setup_langsmith
from sepbot.hooks.discord import DiscordHook
from sepbot.hooks.registry import HookRegistry
from sepbot.hooks.types import SummaryData, SummaryEvent
from sepbot.integrations.github import GitHubClient
from sepbot.maintainers import MaintainerResolver
from sepbot.observability import configure_logging, log_event
from sepbot.processor import SEPProcessor
from sepbot.sep.analyzer import SEPAnalyzer
from sepbot.sep.detector import SEPDetector
from sepbot.sep.models import SEPItem

app = typer.Typer(
    name="sepbot",
    help="SEP lifecycle automation for GitHub issues and pull requests",
)


@app.command()
def run(
    issue: Optional[int] = typer.Option(
        None, "--issue", "-i", help="Process a single issue/PR instead of sweeping all SEPs"
    ),
) -> None:
    """Process all open SEPs, or a single one with --issue."""
    setup_langsmith()

    try:
        config = load_config()
    except ConfigError as e:
        log_event("main", "Invalid configuration", "fatal", error=e)
        raise typer.Exit(1)

    configure_logging(config.log_level)

    mode = f"single issue #{issue}" if issue else "full sweep"
    log_event("main", "Starting SEP lifecycle automation", "start", mode=mode)
    log_event(
        "main",
        "Configuration loaded",
        repo=config.full_repo,
        dry_run=config.dry_run,
        mode=mode,
    )

    # Wire components
    github = GitHubClient(config)
    maintainers = MaintainerResolver(config, github)
    detector = SEPDetector(github)
    processor = SEPProcessor(
        config,
        SEPAnalyzer(config, github),
        maintainers,
        TransitionHandler(github),
        PingHandler(github, maintainers),
    )

    hooks = HookRegistry()
    hooks.register(DiscordHook(config.discord_webhook_url))

    results: list[ActionResult] = []
    summary = SummaryData()

    try:
        seps: list[SEPItem]
        if issue:
            log_event("main", "Fetching single SEP", number=issue)
            sep = detector.get_sep(issue)
            if sep is None:
                log_event("main", "Issue/PR is not a SEP or does not exist", "warning", number=issue)
                return
            seps = [sep]
        else:
            log_event("main", "Finding all open SEPs")
            seps = detector.find_all_seps()

        log_event("main", "Found SEPs", count=len(seps))

        # One SEP at a time; a failure moves on to the next
        for sep in seps:
            try:
                processed = processor.process(sep)
            except Exception as e:
                log_event(
                    "main",
                    "Failed to process SEP, continuing with next",
                    "error",
                    number=sep.number,
                    error=error_message(e),
                )
                continue
            results.extend(processed.results)
            summary.extend(processed.summary)

        succeeded = sum(1 for r in results if r.success)
        failed = len(results) - succeeded
        log_event(
            "main",
            "Automation complete",
            "success" if failed == 0 else "warning",
            total=len(results),
            successful=succeeded,
            failed=failed,
        )

        typer.echo(f"\nProcessed {len(seps)} SEPs")
        typer.echo(f"Actions: {len(results)} ({succeeded} succeeded, {failed} failed)")
        if config.dry_run:
            typer.echo("\n[DRY RUN] No actions taken on GitHub.")

        if results and not issue:
            event = SummaryEvent(
                timestamp=datetime.now(timezone.utc),
                dry_run=config.dry_run,
                summary=summary,
                total_processed=len(seps),
                failed=failed,
            )
            asyncio.run(hooks.dispatch(event))
    except Exception as e:
        log_event("main", "Automation failed", "fatal", error=error_message(e))
        raise typer.Exit(1)

    if failed > 0:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
