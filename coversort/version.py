"""Central version declaration for cover-sort.

Update this file when cutting a new release tag. Keep semantic versioning.
The CLI --version flag imports from here.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
