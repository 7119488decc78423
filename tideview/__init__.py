"""
tideview: tide station browser driving the XTide ``tide`` engine

Parses the engine's station directory, orders it alphabetically, by
locality or by distance, and runs browsing sessions that render tide
predictions for a station at a moment in time.
"""

__version__ = "1.0.0"
__author__ = "tideview Team"

from tideview.core.controller import TideController
from tideview.core.config import Settings

__all__ = ["TideController", "Settings", "__version__"]
