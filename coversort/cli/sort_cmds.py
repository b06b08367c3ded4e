from __future__ import annotations
import click
import logging

from .helpers import cli
from ..config import deep_merge
from ..config_types import AppConfig
from ..errors import CoverSortError
from ..providers.spotify.client import ClientConfig, PathfinderClient
from ..services.sort_service import sort_playlist
from ..utils.logging_helpers import format_summary

logger = logging.getLogger(__name__)


@cli.command(name='sort')
@click.argument('auth_token')
@click.argument('playlist_id')
@click.argument('offset', type=click.IntRange(min=0))
@click.argument('limit', type=click.IntRange(min=0))
@click.option('--client-token', default=None, help='Value for the Client-Token header')
@click.option('--workers', type=click.IntRange(min=1), default=None, help='Concurrent cover downloads')
@click.option('--skip-undecodable', is_flag=True, default=None,
              help='Exclude tracks with undecodable cover art instead of aborting')
@click.option('--reference', type=(float, float, float), default=None, metavar='L A B',
              help='Lab reference color (default: white, 100 0 0)')
@click.option('--dry-run', is_flag=True, help='Plan moves without sending them')
@click.pass_context
def sort_cmd(ctx: click.Context, auth_token: str, playlist_id: str, offset: int, limit: int,
             client_token: str | None, workers: int | None, skip_undecodable: bool | None,
             reference: tuple[float, float, float] | None, dry_run: bool):
    """Sort LIMIT tracks of PLAYLIST_ID, starting at OFFSET, by cover color.

    AUTH_TOKEN is the web player access token; a bare token gets the
    "Bearer " scheme prepended.
    """
    overrides: dict = {}
    if client_token:
        overrides.setdefault('spotify', {})['client_token'] = client_token
    if workers is not None:
        overrides.setdefault('profiling', {})['workers'] = workers
    if skip_undecodable:
        overrides.setdefault('profiling', {})['skip_undecodable'] = True
    if reference is not None:
        ref_l, ref_a, ref_b = reference
        overrides['sorting'] = {'reference_l': ref_l, 'reference_a': ref_a, 'reference_b': ref_b}
    cfg = AppConfig.from_dict(deep_merge(ctx.obj, overrides))
    ref = cfg.sorting.reference
    logger.debug(f"Reference color: L={ref.l:g} a={ref.a:g} b={ref.b:g}")

    try:
        client = PathfinderClient(
            ClientConfig.from_settings(auth_token, cfg.spotify.to_dict()),
            pool_size=max(cfg.profiling.workers, 1),
        )
        result = sort_playlist(
            client,
            playlist_id,
            offset,
            limit,
            reference=ref,
            workers=cfg.profiling.workers,
            skip_undecodable=cfg.profiling.skip_undecodable,
            cover_index=cfg.spotify.cover_index,
            dry_run=dry_run,
        )
    except CoverSortError as e:
        click.echo(click.style(f"✗ {type(e).__name__}: {e}", fg="red"), err=True)
        ctx.exit(1)

    click.echo(format_summary(
        found=result.tracks_found,
        sorted_count=result.tracks_profiled,
        moved=result.moves_planned if dry_run else result.moves_executed,
        skipped=result.tracks_skipped,
        duration_seconds=result.duration_seconds,
        dry_run=dry_run,
    ))
    logger.debug(f"Order: {result.ranked}")


__all__ = ["sort_cmd"]
