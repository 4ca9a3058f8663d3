"""Simulation support: step history recording.

Example:
    >>> from airframe.simulation import HistoryRecorder
    >>>
    >>> recorder = HistoryRecorder()
    >>> aircraft.step(dt=0.01)
    >>> recorder.record(aircraft)
"""

from airframe.simulation.recorder import HistoryRecorder, StepRecord

__all__ = [
    "HistoryRecorder",
    "StepRecord",
]
