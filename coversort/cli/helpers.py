from __future__ import annotations
import click

from ..config import load_typed_config
from ..version import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cover-sort")
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='Override the configured log level')
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Reorder a Spotify playlist by the color of its cover art.

    \b
    Configuration is read from .env and CSORT__* environment variables, e.g.
      CSORT__PROFILING__WORKERS=8
      CSORT__SORTING__REFERENCE_L=100

    \b
    Example:
      coversort sort "Bearer <token>" 37i9dQZF1DXcBWIGoYBM5M 0 50
    """
    if isinstance(ctx.obj, dict):
        cfg = ctx.obj
    else:
        overrides = {'log_level': log_level.upper()} if log_level else None
        cfg = load_typed_config(overrides).to_dict()
    ctx.obj = cfg


__all__ = ["cli"]
