"""
stepper.py — Step-by-Step Playback Engine
=========================================
The Stepper is the ONLY object the UI interacts with during playback.
It holds a finished step sequence, owns the cursor into it, and exposes
a clean play/pause/next/prev/speed API.

State machine:
    IDLE     →  start(steps)  →  PAUSED   (cursor = 0)
    PAUSED   →  toggle_play() →  PLAYING
    PLAYING  →  toggle_play() →  PAUSED
    PLAYING  →  (last index reached) → FINISHED   (paused at the end, no loop)
    PAUSED   →  step_forward() / step_back()  (PLAYING ignores manual steps)
    any      →  reset()       →  IDLE     (cursor = -1, sequence cleared)

Auto-play is one cancellable scheduled callback at a time on the
injected scheduler (ManualClock by default, or an asyncio loop).  Every
transition that stops playback or replaces the sequence cancels the
pending callback before anything else is armed.

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread (or one
  event loop); the Flask host serialises access with a per-session lock.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from engine.clock import Cancellable, ManualClock, Scheduler

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   200,
    "turbo":  100,    # demo mode
}
DEFAULT_SPEED_MS = SPEED_PRESETS["medium"]
MIN_SPEED_MS     = 100
MAX_SPEED_MS     = 1000


@dataclass(frozen=True)
class PlaybackSnapshot:
    """What a renderer observes."""

    cursor:           int
    is_playing:       bool
    current_step:     Optional[Any]
    total_steps:      int
    state:            StepperState
    can_step_forward: bool
    can_step_back:    bool
    speed_ms:         int


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        steps      : The step sequence being played (empty when idle).
        cursor     : Index of the displayed step, -1 = not started.
        is_playing : True while auto-play is armed.
        speed_ms   : Milliseconds between auto-advance ticks.
        on_step    : Optional callback(step | None) fired every time the
                     current step changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        on_step: Optional[Callable[[Optional[Any]], None]] = None,
        speed_ms: int = DEFAULT_SPEED_MS,
        min_speed_ms: int = MIN_SPEED_MS,
        max_speed_ms: int = MAX_SPEED_MS,
    ):
        self.scheduler:  Scheduler        = scheduler if scheduler is not None else ManualClock()
        self.steps:      Tuple[Any, ...]  = ()
        self.cursor:     int              = -1
        self.is_playing: bool             = False
        self.on_step:    Optional[Callable[[Optional[Any]], None]] = on_step

        self._min_speed = min_speed_ms
        self._max_speed = max_speed_ms
        self.speed_ms:   int              = self._clamp(speed_ms)

        self._timer:      Optional[Cancellable] = None
        self._generation: int                   = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, steps: Sequence[Any]) -> None:
        """Load a fresh step sequence and show step 0. An empty sequence leaves the stepper idle."""
        self._stop_timer()
        self._generation += 1
        self.steps      = tuple(steps)
        self.is_playing = False
        if not self.steps:
            self.cursor = -1
            logger.debug("stepper: start with empty sequence, staying idle")
            self._notify(None)
            return
        logger.debug("stepper: start with %d steps", len(self.steps))
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self._stop_timer()
        self._generation += 1
        self.steps      = ()
        self.cursor     = -1
        self.is_playing = False
        logger.debug("stepper: reset")
        self._notify(None)

    # ------------------------------------------------------------------
    # Navigation (no-ops at the boundaries)
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step. Returns False when there is no next step or auto-play is running."""
        if not self.can_step_forward:
            return False
        self._goto(self.cursor + 1)
        return True

    def step_back(self) -> bool:
        """Rewind one step. Returns False at step 0 or while auto-play is running."""
        if not self.can_step_back:
            return False
        self._goto(self.cursor - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index. Ignored while auto-play runs."""
        if not self.is_playing and 0 <= idx < len(self.steps):
            self._goto(idx)
            return True
        return False

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.is_playing or self.state in (StepperState.IDLE, StepperState.FINISHED):
            return
        self.is_playing = True
        logger.debug("stepper: play at %d (every %d ms)", self.cursor, self.speed_ms)
        self._arm()

    def pause(self) -> None:
        if not self.is_playing:
            return
        self._stop_timer()
        self.is_playing = False
        logger.debug("stepper: pause at %d", self.cursor)

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: Union[int, float, str]) -> int:
        """Milliseconds per step, or a preset name. Re-arms the timer when playing."""
        if isinstance(speed, str):
            if speed not in SPEED_PRESETS:
                raise ValueError(f"Unknown speed preset: {speed!r}")
            value = SPEED_PRESETS[speed]
        elif isinstance(speed, bool) or not isinstance(speed, (int, float)):
            raise ValueError(f"Speed must be a number of milliseconds, got {speed!r}")
        else:
            value = speed
        self.speed_ms = self._clamp(value)
        if self.is_playing:
            self._stop_timer()
            self._arm()
        return self.speed_ms

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> StepperState:
        if self.cursor < 0:
            return StepperState.IDLE
        if self.is_playing:
            return StepperState.PLAYING
        if self.cursor >= len(self.steps) - 1:
            return StepperState.FINISHED
        return StepperState.PAUSED

    @property
    def current_step(self) -> Optional[Any]:
        if 0 <= self.cursor < len(self.steps):
            return self.steps[self.cursor]
        return None

    @property
    def can_step_forward(self) -> bool:
        """Manual stepping is disabled while auto-play runs."""
        return not self.is_playing and self._has_next()

    @property
    def can_step_back(self) -> bool:
        return not self.is_playing and self.cursor > 0

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            cursor=self.cursor,
            is_playing=self.is_playing,
            current_step=self.current_step,
            total_steps=self.total_steps,
            state=self.state,
            can_step_forward=self.can_step_forward,
            can_step_back=self.can_step_back,
            speed_ms=self.speed_ms,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _clamp(self, ms: float) -> int:
        return int(max(self._min_speed, min(self._max_speed, ms)))

    def _arm(self) -> None:
        generation = self._generation
        self._timer = self.scheduler.call_later(self.speed_ms / 1000.0, lambda: self._tick(generation))

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self, generation: int) -> None:
        # a tick armed for a replaced sequence never moves the cursor
        if generation != self._generation or not self.is_playing:
            return
        self._timer = None
        if self._has_next():
            self._goto(self.cursor + 1)
        if self._has_next():
            self._arm()
        else:
            self.is_playing = False
            logger.debug("stepper: reached last step %d, auto-play stopped", self.cursor)

    def _has_next(self) -> bool:
        return 0 <= self.cursor < len(self.steps) - 1

    def _goto(self, idx: int) -> None:
        self.cursor = idx
        self._notify(self.steps[idx] if 0 <= idx < len(self.steps) else None)

    def _notify(self, step: Optional[Any]) -> None:
        if self.on_step:
            self.on_step(step)
