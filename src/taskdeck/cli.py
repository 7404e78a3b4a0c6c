"""taskdeck CLI - lifecycle and feed views for rewards tasks."""

import json
import logging
import sys
from dataclasses import replace
from datetime import datetime

import click
import requests

from .adapters.rewards_api import AuthenticationError
from .config import Config, load_config
from .core.lifecycle import CategorizedTasks
from .core.organizer import DisplayConfig, SortBy, TaskFilter, TaskState
from .core.priority import score, task_urgency
from .core.tasks import LifecycleItem, TaskKind, TaskLike, parse_timestamp
from .workflows import build_feed, build_lifecycle, get_repository, run_sweep

SHELL_ERRORS = (AuthenticationError, requests.RequestException, ValueError, OSError)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _resolve_config(snapshot: str | None, user: str | None) -> Config:
    config = load_config()
    if snapshot:
        config = replace(config, snapshot_file=snapshot)
    if user:
        config = replace(config, user_id=user)
    return config


def _task_line(task: TaskLike, now: datetime | None) -> str:
    urgency = task_urgency(task, now)
    flag = f" [{urgency.value}]" if urgency else ""
    return f"{task.points:>5} pts  {task.title}{flag}"


@click.group()
@click.version_option(package_name="taskdeck")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """taskdeck - rewards task views."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


snapshot_option = click.option(
    "--snapshot", type=click.Path(dir_okay=False), help="Read tasks from a JSON snapshot file"
)
user_option = click.option("--user", "user", help="User ID (defaults to USER_ID in config)")
now_option = click.option("--now", "now_str", help="Evaluate as of this ISO-8601 time")


def _show_bucket(
    name: str,
    visible: list[LifecycleItem],
    overflow: list[LifecycleItem],
    now: datetime | None,
) -> None:
    click.echo(f"### {name} ({len(visible) + len(overflow)})")
    if not visible:
        click.echo("  None")
    for item in visible:
        status = f" ({item.completion_status.value})" if item.completion_status else ""
        click.echo(f"  {_task_line(item, now)}{status}")
    if overflow:
        click.echo(f"  ... and {len(overflow)} more")
    click.echo()


def _show_lifecycle(result: CategorizedTasks, now: datetime | None) -> None:
    _show_bucket("Active", result.active, [], now)
    _show_bucket("Awaiting review", result.pending_visible, result.pending_overflow, now)
    _show_bucket("Completed", result.completed_visible, result.completed_overflow, now)
    _show_bucket("Missed", result.missed_visible, result.missed_overflow, now)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@snapshot_option
@user_option
@now_option
def lifecycle(as_json: bool, snapshot: str | None, user: str | None, now_str: str | None):
    """Show tasks by lifecycle: active, awaiting review, completed, missed."""
    config = _resolve_config(snapshot, user)
    try:
        now = parse_timestamp(now_str)
        result = build_lifecycle(get_repository(config), config.user_id, now)
    except SHELL_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _show_lifecycle(result, now)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--sort-by", type=click.Choice([s.value for s in SortBy]), default=None)
@click.option("--box-count", type=int, default=None, help="Number of tasks shown as boxes")
@click.option("--status", type=click.Choice([s.value for s in TaskState]), default=None)
@click.option("--kind", type=click.Choice([k.value for k in TaskKind]), default=None)
@click.option("--time-sensitive/--not-time-sensitive", default=None)
@snapshot_option
@now_option
def feed(
    as_json: bool,
    sort_by: str | None,
    box_count: int | None,
    status: str | None,
    kind: str | None,
    time_sensitive: bool | None,
    snapshot: str | None,
    now_str: str | None,
):
    """Show the flat task feed."""
    config = _resolve_config(snapshot, None)
    try:
        now = parse_timestamp(now_str)
        task_filter = None
        if status or kind or time_sensitive is not None:
            task_filter = TaskFilter(
                status=TaskState(status) if status else None,
                kind=TaskKind(kind) if kind else None,
                is_time_sensitive=time_sensitive,
            )
        display = DisplayConfig(
            box_count=box_count if box_count is not None else config.box_count,
            sort_by=SortBy(sort_by or config.sort_by),
            filter_by=task_filter,
        )
        organized = build_feed(get_repository(config), display, now)
    except SHELL_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "visible": [{**t.to_dict(), "priority": score(t, now)} for t in organized.visible],
                    "overflow": [{**t.to_dict(), "priority": score(t, now)} for t in organized.overflow],
                    "totalCount": organized.total_count,
                },
                indent=2,
            )
        )
        return

    if not organized.total_count:
        click.echo("No tasks.")
        return

    for task in organized.visible:
        click.echo(f"[{score(task, now):>5}] {_task_line(task, now)}")
    if organized.overflow:
        click.echo(f"\n{len(organized.overflow)} more:")
        for task in organized.overflow:
            click.echo(f"  • {task.title}")


@main.command()
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
@snapshot_option
@user_option
@now_option
def sweep(dry_run: bool, snapshot: str | None, user: str | None, now_str: str | None):
    """Reject stale pending completions and record missed tasks."""
    config = _resolve_config(snapshot, user)
    try:
        now = parse_timestamp(now_str)
        result = run_sweep(get_repository(config), config.user_id, now, dry_run=dry_run)
    except SHELL_ERRORS as e:
        _fail(e)

    prefix = "Would reject" if dry_run else "Rejected"
    click.echo(f"{prefix} {len(result.rejected)} pending completion(s) past the review window")
    prefix = "Would mark" if dry_run else "Marked"
    click.echo(f"{prefix} {len(result.missed)} expired task(s) as missed")


@main.command()
def schedule():
    """Run sweeps periodically."""
    from .scheduler import run_scheduler

    click.echo("Starting taskdeck scheduler...")
    click.echo("Press Ctrl+C to stop")
    try:
        run_scheduler()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nScheduler stopped.")


if __name__ == "__main__":
    main()
