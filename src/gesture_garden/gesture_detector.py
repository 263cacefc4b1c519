"""
Gesture debouncer.

Turns the instantaneous :class:`FrameSignals` of each tick into discrete
trigger events, using elapsed milliseconds rather than frame counts so the
behaviour does not depend on the frame rate.

Debounce overview
-----------------
* **Spawn seed**: fires while pinching, but at most once per
  ``PINCH_COOLDOWN_MS``.  The cooldown counts down only while positive.

* **Clear all**: an open palm accumulates the clear timer; once it passes
  ``CLEAR_HOLD_MS`` the trigger fires and the timer resets.  Without an
  open palm the timer drains ``CLEAR_DECAY_FACTOR`` times faster than it
  fills, so short detection dropouts do not lose the whole hold.
"""

from __future__ import annotations

from enum import Enum

from gesture_garden.config import (
    CLEAR_DECAY_FACTOR,
    CLEAR_HOLD_MS,
    PINCH_COOLDOWN_MS,
)
from gesture_garden.models import InteractionState
from gesture_garden.signals import FrameSignals


class TriggerEvent(str, Enum):
    """A debounced action derived from the gesture signals."""

    SPAWN_SEED = "SPAWN_SEED"
    CLEAR_ALL = "CLEAR_ALL"


class GestureDebouncer:
    """Stateful debouncer that writes into a shared :class:`InteractionState`."""

    def __init__(self) -> None:
        # Milliseconds until the next seed may spawn.
        self.pinch_cooldown: float = 0.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(
        self,
        signals: FrameSignals,
        state: InteractionState,
        delta_ms: float,
    ) -> list[TriggerEvent]:
        """Record *signals* into *state* and return the triggers that fired."""
        triggers: list[TriggerEvent] = []

        state.mouth_openness = signals.mouth_openness
        state.pinch_proximity = signals.pinch_proximity
        state.is_pinching = signals.is_pinching
        if signals.pinch_location is not None:
            state.pinch_location = signals.pinch_location

        if self._update_pinch(signals, delta_ms):
            triggers.append(TriggerEvent.SPAWN_SEED)
        if self._update_clear_timer(signals, state, delta_ms):
            triggers.append(TriggerEvent.CLEAR_ALL)
        return triggers

    # ------------------------------------------------------------------
    # Pinch cooldown
    # ------------------------------------------------------------------

    def _update_pinch(self, signals: FrameSignals, delta_ms: float) -> bool:
        # Only time elapsed after a spawn counts towards its cooldown.
        if self.pinch_cooldown > 0:
            self.pinch_cooldown -= delta_ms

        if signals.is_pinching and self.pinch_cooldown <= 0:
            self.pinch_cooldown = PINCH_COOLDOWN_MS
            return True
        return False

    # ------------------------------------------------------------------
    # Clear timer (hold open palm)
    # ------------------------------------------------------------------

    def _update_clear_timer(
        self,
        signals: FrameSignals,
        state: InteractionState,
        delta_ms: float,
    ) -> bool:
        if signals.any_palm_open:
            state.is_palm_open = True
            state.clear_timer += delta_ms
            if state.clear_timer > CLEAR_HOLD_MS:
                state.clear_timer = 0.0
                return True
            return False

        state.is_palm_open = False
        state.clear_timer = max(0.0, state.clear_timer - delta_ms * CLEAR_DECAY_FACTOR)
        return False
