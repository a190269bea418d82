"""Reporting models for map cycles."""

from dataclasses import dataclass


@dataclass
class CycleSummary:
    cycle_id: str
    locations: int = 0
    time_steps: int = 0
    fade_steps: int = 0
    frames_rendered: int = 0
    min_temp: float | None = None
    max_temp: float | None = None
    started_at: str = ""
    duration_seconds: float = 0.0
