"""Output formatters for cycle summaries and color cubes."""

import json
from collections.abc import Sequence

from ledmap.color.encoder import grb_to_rgb
from ledmap.models.reporting import CycleSummary


def format_cycle_text(s: CycleSummary) -> str:
    """Plain text summary for logging."""
    lines = [
        f"=== Cycle Complete | {s.cycle_id[:8]} ===",
        f"Locations: {s.locations} | Time-steps: {s.time_steps} | "
        f"Fade steps: {s.fade_steps}",
        f"Frames rendered: {s.frames_rendered}",
    ]
    if s.min_temp is not None and s.max_temp is not None:
        lines.append(f"Temperature range: {s.min_temp:.1f} to {s.max_temp:.1f}")
    lines.append(f"Duration: {s.duration_seconds:.1f}s")
    return "\n".join(lines)


def format_cycle_json(s: CycleSummary) -> str:
    """JSON summary for programmatic consumption."""
    data = {
        "cycle_id": s.cycle_id,
        "locations": s.locations,
        "time_steps": s.time_steps,
        "fade_steps": s.fade_steps,
        "frames_rendered": s.frames_rendered,
        "min_temp": s.min_temp,
        "max_temp": s.max_temp,
        "started_at": s.started_at,
        "duration_seconds": s.duration_seconds,
    }
    return json.dumps(data, indent=2)


def format_color(packed: int) -> str:
    """Hex string of a packed GRB color as RGB, e.g. '#ff0000' for red."""
    return f"#{grb_to_rgb(packed):06x}"


def format_cube_text(cube: Sequence[Sequence[Sequence[int]]]) -> str:
    """One line per frame: time-step, fade position, then each location's color."""
    lines = []
    for t, fade_frames in enumerate(cube):
        for pos, frame in enumerate(fade_frames):
            colors = " ".join(format_color(c) for c in frame)
            lines.append(f"t={t:<3d} f={pos:<3d} {colors}")
    return "\n".join(lines)


def format_cube_json(cube: Sequence[Sequence[Sequence[int]]]) -> str:
    """The cube as nested JSON lists of packed GRB integers."""
    return json.dumps([[list(frame) for frame in fade] for fade in cube])
