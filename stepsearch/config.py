# stepsearch/config.py
"""Defaults for headless runs and for the interactive viewer."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class SearchConfig:
    grid_width: int = 20
    grid_height: int = 20
    obstacle_ratio: float = 0.0
    seed: Optional[int] = None
    max_steps: int = 100_000

@dataclass(frozen=True)
class ViewerConfig:
    # pixel layout: node centre = grid * scaler + offset
    offset: int = 20
    scaler: int = 35
    radius: int = 10
    brush_radius: int = 30
    steps_per_frame: int = 1
    fps: int = 60
    map_path: str = "map.json"
