"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, VisualizerSession, ManualClock
"""

from engine.clock    import ManualClock, TimerHandle
from engine.stepper  import (
    Stepper,
    StepperState,
    PlaybackSnapshot,
    SPEED_PRESETS,
    DEFAULT_SPEED_MS,
    MIN_SPEED_MS,
    MAX_SPEED_MS,
)
from engine.recorder import Recorder, RunMetrics, step_to_dict
from engine.session  import VisualizerSession

__all__ = [
    "ManualClock",
    "TimerHandle",
    "Stepper",
    "StepperState",
    "PlaybackSnapshot",
    "SPEED_PRESETS",
    "DEFAULT_SPEED_MS",
    "MIN_SPEED_MS",
    "MAX_SPEED_MS",
    "Recorder",
    "RunMetrics",
    "step_to_dict",
    "VisualizerSession",
]
