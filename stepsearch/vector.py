# stepsearch/vector.py
from __future__ import annotations
from dataclasses import dataclass
import math

@dataclass(frozen=True)
class Vector2d:
    x: float
    y: float

    def dot(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.dot())

    @staticmethod
    def sub(a: "Vector2d", b: "Vector2d") -> "Vector2d":
        return Vector2d(a.x - b.x, a.y - b.y)

    @staticmethod
    def distance(a: "Vector2d", b: "Vector2d") -> float:
        return Vector2d.sub(a, b).length()
