# stepsearch/types.py
from __future__ import annotations
from enum import Enum

class Classification(str, Enum):
    EMPTY = "empty"
    OBSTACLE = "obstacle"
    START = "start"
    TARGET = "target"
    CURRENT = "current"

# Start/Target are the only classifications a node can be *designated* with
DESIGNATIONS = (Classification.START, Classification.TARGET)

def node_key(x, y) -> str:
    return f"x:{x}, y:{y}"
