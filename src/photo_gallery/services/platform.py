"""Runtime capability profile detection."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class PlatformProfile(StrEnum):
    """Capability profile of the running platform."""

    RICH = "rich"
    CONSTRAINED = "constrained"


_PROFILE_ALIASES: dict[str, PlatformProfile] = {
    "rich": PlatformProfile.RICH,
    "hybrid": PlatformProfile.RICH,
    "native": PlatformProfile.RICH,
    "constrained": PlatformProfile.CONSTRAINED,
    "web": PlatformProfile.CONSTRAINED,
    "browser": PlatformProfile.CONSTRAINED,
}


class PlatformCapability(Protocol):
    """Reports which capability profile is active."""

    def profile(self) -> PlatformProfile:
        """Return the active profile."""


@dataclass(frozen=True)
class StaticPlatform(PlatformCapability):
    """Platform capability fixed at startup from configuration."""

    active_profile: PlatformProfile

    def profile(self) -> PlatformProfile:
        """Return the configured profile."""
        return self.active_profile


def parse_platform_profile(raw: str) -> PlatformProfile:
    """Normalize a configured profile name."""
    cleaned = raw.strip().lower()
    try:
        return _PROFILE_ALIASES[cleaned]
    except KeyError:
        raise ValueError(f"Unknown platform profile: {raw!r}") from None
