"""
ai_settings.py – Runtime AI toggles.

AISettings is immutable; updates produce a new value so a partially
applied change can never be observed. Unknown keys are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AISettings:
    """Feature switches and rate constants for the adaptive engine."""

    adaptive_difficulty: bool = True
    smart_food_placement: bool = True
    show_predictions: bool = True

    # Not read by any algorithm; kept so callers can round-trip it.
    learning_rate: float = 0.1
    difficulty_adjustment_rate: float = 0.05

    def merged(self, changes: Mapping[str, Any] | None = None, **kwargs: Any) -> "AISettings":
        """Return a copy with every recognised key in *changes* applied."""
        requested = dict(changes or {}, **kwargs)
        known = {f.name for f in fields(self)}

        ignored = sorted(k for k in requested if k not in known)
        if ignored:
            logger.debug("Ignoring unknown AI settings: %s", ", ".join(ignored))

        return replace(self, **{k: v for k, v in requested.items() if k in known})

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
