"""Runtime options for the arrow store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Options:
    """User-facing switches that change how arrow edits propagate."""

    publish_segment_changes: bool = True
    """Notify segment-change listeners after every successful arrow edit."""
