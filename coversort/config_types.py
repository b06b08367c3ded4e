"""Typed configuration dataclasses for cover-sort.

Provides strongly-typed configuration objects built from the dict returned by
:func:`coversort.config.load_config`.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, Any

from .color import LabColor
from .config import DEFAULT_USER_AGENT


@dataclass
class SpotifyConfig:
    """Pathfinder endpoint and request header configuration."""
    endpoint: str = "https://api-partner.spotify.com/pathfinder/v1/query"
    app_platform: str = "WebPlayer"
    user_agent: str = DEFAULT_USER_AGENT
    client_token: str | None = None
    timeout_seconds: float = 30
    cover_index: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SortingConfig:
    """Reference color the playlist is sorted towards."""
    reference_l: float = 100.0
    reference_a: float = 0.0
    reference_b: float = 0.0

    @property
    def reference(self) -> LabColor:
        return LabColor(float(self.reference_l), float(self.reference_a), float(self.reference_b))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProfilingConfig:
    """Artwork download/profiling phase configuration."""
    workers: int = 4  # 1 = strictly sequential
    skip_undecodable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)
    sorting: SortingConfig = field(default_factory=SortingConfig)
    profiling: ProfilingConfig = field(default_factory=ProfilingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary matching the load_config() format."""
        return {
            "log_level": self.log_level,
            "spotify": self.spotify.to_dict(),
            "sorting": self.sorting.to_dict(),
            "profiling": self.profiling.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance
        """
        return cls(
            log_level=data.get("log_level", "INFO"),
            spotify=SpotifyConfig(**data.get("spotify", {})),
            sorting=SortingConfig(**data.get("sorting", {})),
            profiling=ProfilingConfig(**data.get("profiling", {})),
        )


__all__ = [
    "AppConfig",
    "SpotifyConfig",
    "SortingConfig",
    "ProfilingConfig",
]
