"""Module entry point for `python -m coversort.cli`."""
import sys

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        # Progress lines contain non-ASCII markers
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")

    from coversort.cli import cli

    cli()
