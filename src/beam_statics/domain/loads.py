from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Union

MomentDirection = Literal["clockwise", "counterclockwise"]


@dataclass(frozen=True)
class PointLoad:
    id: str
    position: float
    magnitude: float   # + hacia abajo
    angle: float = 0.0  # grados, 0 = vertical hacia abajo
    type: Literal["point"] = "point"


@dataclass(frozen=True)
class DistributedLoad:
    """
    Carga distribuida lineal (trapezoidal) entre start_position y end_position.
    Con start == end se trata como puntual de valor start_magnitude.
    """
    id: str
    start_position: float
    end_position: float
    start_magnitude: float  # fuerza / longitud, + hacia abajo
    end_magnitude: float
    type: Literal["distributed"] = "distributed"

    @property
    def span(self) -> float:
        return float(self.end_position) - float(self.start_position)


@dataclass(frozen=True)
class MomentLoad:
    id: str
    position: float
    magnitude: float
    direction: MomentDirection = "counterclockwise"
    type: Literal["moment"] = "moment"


Load = Union[PointLoad, DistributedLoad, MomentLoad]


@dataclass(frozen=True)
class NormalizedPointForce:
    label: str
    x: float
    Fv: float          # componente vertical (+ abajo)
    Fh: float          # componente horizontal
    from_distributed: bool = False


@dataclass(frozen=True)
class NormalizedDistLoad:
    label: str
    x1: float
    x2: float
    w1: float          # intensidad en x1 (+ abajo)
    w2: float          # intensidad en x2

    @property
    def span(self) -> float:
        return self.x2 - self.x1

    @property
    def resultant(self) -> float:
        return 0.5 * (self.w1 + self.w2) * self.span

    @property
    def first_moment(self) -> float:
        """Momento estático respecto a x=0: ∫ ξ·w(ξ) dξ."""
        a, b = self.x1, self.x2
        return self.span * (self.w1 * (2.0 * a + b) + self.w2 * (a + 2.0 * b)) / 6.0

    def intensity_at(self, x: float) -> float:
        if x < self.x1 or x > self.x2 or self.span <= 0.0:
            return 0.0
        return self.w1 + (self.w2 - self.w1) * (x - self.x1) / self.span


@dataclass(frozen=True)
class NormalizedPointMoment:
    label: str
    x: float
    M: float           # CCW+
