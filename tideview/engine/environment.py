"""
Tide engine environment setup.

Builds the environment the engine subprocess runs in. Nothing here
touches ``os.environ`` of the calling process; every invocation gets a
merged copy.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from tideview.core.config import NEUTRAL_LOCALE, EngineConfig


@dataclass
class EngineEnvironment:
    """Engine executable and the environment it runs with."""

    binary: str = "tide"
    encoding: str = "iso-8859-1"

    # Merged over the caller's environment on every invocation
    locale: dict[str, str] = field(default_factory=lambda: dict(NEUTRAL_LOCALE))

    @classmethod
    def from_config(cls, config: EngineConfig) -> EngineEnvironment:
        """Create environment from engine configuration."""
        return cls(
            binary=config.binary,
            encoding=config.encoding,
            locale=dict(config.locale),
        )

    def setup(self, base: dict[str, str] | None = None) -> dict[str, str]:
        """Build the subprocess environment.

        Args:
            base: Environment to start from (default: copy of os.environ)

        Returns:
            New environment dictionary with the locale forced
        """
        env = dict(os.environ if base is None else base)
        env.update(self.locale)
        return env

    def command(self, args: list[str]) -> list[str]:
        """Full command line for the given engine arguments, for display."""
        return [self.binary, *args]

    def argv(self, args: list[str]) -> list[bytes]:
        """Command line as the bytes the engine receives.

        Arguments are encoded in the engine encoding rather than the
        filesystem encoding, so station names match the engine's own
        directory.
        """
        return [os.fsencode(self.binary), *(self.encode(arg) for arg in args)]

    def decode(self, data: bytes) -> str:
        """Decode engine text output."""
        return data.decode(self.encoding, errors="replace")

    def encode(self, text: str) -> bytes:
        """Encode a command-line argument for the engine.

        Characters outside the encoding cannot reach the engine and are
        replaced rather than raising.
        """
        return text.encode(self.encoding, errors="replace")
