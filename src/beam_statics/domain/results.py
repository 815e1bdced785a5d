from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from beam_statics.domain.checks import ValidationReport

CriticalPointType = Literal[
    "support", "load", "zero-shear",
    "max-moment", "min-moment", "max-shear", "min-shear",
]
WarningLevel = Literal["error", "warning", "info"]


@dataclass(frozen=True)
class Reaction:
    support_id: str
    position: float
    vertical_force: float    # + arriba
    horizontal_force: float
    moment: float            # CCW+


@dataclass(frozen=True)
class DiagramPoint:
    position: float
    value: float


@dataclass(frozen=True)
class Extremum:
    position: float
    value: float


@dataclass(frozen=True)
class CriticalPoint:
    position: float
    description: str
    shear: float
    moment: float
    is_discontinuity: bool
    type: CriticalPointType


@dataclass(frozen=True)
class CriticalPointsAnalysis:
    points: List[CriticalPoint]
    max_positive_moment: Optional[CriticalPoint] = None
    max_negative_moment: Optional[CriticalPoint] = None
    max_positive_shear: Optional[CriticalPoint] = None
    max_negative_shear: Optional[CriticalPoint] = None


@dataclass(frozen=True)
class CalculationStep:
    step_number: int
    title: str
    description: str
    equations: List[str]
    result: Optional[str] = None


@dataclass(frozen=True)
class CalculationTrace:
    steps: List[CalculationStep]
    summary: str


@dataclass(frozen=True)
class EngineeringWarning:
    level: WarningLevel
    message: str


@dataclass(frozen=True)
class AnalysisResults:
    """
    Salida completa de una corrida. Sin estado propio: se crea por llamada y se
    compara por valor.
    """
    reactions: List[Reaction]
    shear_force: List[DiagramPoint]
    bending_moment: List[DiagramPoint]
    max_shear: Extremum
    max_moment: Extremum
    validation: ValidationReport
    critical_points: CriticalPointsAnalysis
    trace: CalculationTrace
    warnings: List[EngineeringWarning] = field(default_factory=list)
