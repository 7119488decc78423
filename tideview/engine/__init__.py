"""Tide prediction engine integration."""

from tideview.engine.environment import EngineEnvironment
from tideview.engine.modes import DisplayMode, OutputKind
from tideview.engine.runner import (
    EngineRunner,
    FailureKind,
    RenderRequest,
    RenderResult,
    describe_exit,
)

__all__ = [
    "EngineEnvironment",
    "DisplayMode",
    "OutputKind",
    "EngineRunner",
    "FailureKind",
    "RenderRequest",
    "RenderResult",
    "describe_exit",
]
