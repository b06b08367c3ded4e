"""Logging helper utilities for consistent progress reporting."""

import logging
import click

logger = logging.getLogger(__name__)


def log_progress(processed: int, total: int | None, detail: str = "", item_name: str = "moves") -> None:
    """Log one progress line, e.g. ``[3/12] moves | 'Song' after 'Other'``.

    Args:
        processed: Number of items processed so far
        total: Total number of items (None if unknown)
        detail: Optional trailing description of the item just processed
        item_name: Name of items being processed
    """
    if total:
        head = f"{click.style(f'[{processed}/{total}]', fg='cyan')} {item_name}"
    else:
        head = f"{click.style(f'{processed}', fg='cyan')} {item_name} processed"
    logger.info(f"{head} | {detail}" if detail else head)


def format_summary(
    found: int,
    sorted_count: int,
    moved: int,
    skipped: int = 0,
    duration_seconds: float = 0.0,
    dry_run: bool = False,
) -> str:
    """Format the end-of-run summary line with colored counts."""
    parts = [
        click.style('✓', fg='green'),
        "Tracks:",
        click.style(f'{found} found', fg='cyan'),
        click.style(f'{sorted_count} sorted', fg='green'),
        click.style(f'{moved} moves planned' if dry_run else f'{moved} moved', fg='blue'),
    ]
    if skipped > 0:
        parts.append(click.style(f'{skipped} skipped', fg='yellow'))
    if duration_seconds > 0:
        parts.append(f"in {duration_seconds:.2f}s")
    return " ".join(parts)


__all__ = ["log_progress", "format_summary"]
