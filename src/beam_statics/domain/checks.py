from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class EquilibriumCheck:
    sum_vertical_forces: float
    sum_horizontal_forces: float
    sum_moments_about_origin: float
    tolerance: float
    is_vertical_equilibrium: bool
    is_horizontal_equilibrium: bool
    is_moment_equilibrium: bool
    is_valid: bool
    messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClosureItem:
    is_valid: bool
    expected_value: float
    actual_value: float
    error: float
    location: str


@dataclass(frozen=True)
class DiagramClosureCheck:
    shear_closure: List[ClosureItem]
    moment_closure: List[ClosureItem]
    is_valid: bool
    messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RelationshipStats:
    is_valid: bool
    max_error: float
    average_error: float
    rms_error: float
    n_checked: int = 0
    n_skipped: int = 0   # estaciones cuyo stencil cruza un salto


@dataclass(frozen=True)
class RelationshipCheck:
    dMdx_equals_V: RelationshipStats
    dVdx_equals_negW: RelationshipStats
    tolerance: float
    is_valid: bool
    messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationReport:
    equilibrium: EquilibriumCheck
    diagram_closure: DiagramClosureCheck
    relationships: RelationshipCheck

    @property
    def is_valid(self) -> bool:
        return bool(
            self.equilibrium.is_valid
            and self.diagram_closure.is_valid
            and self.relationships.is_valid
        )

    @property
    def messages(self) -> List[str]:
        return (
            list(self.equilibrium.messages)
            + list(self.diagram_closure.messages)
            + list(self.relationships.messages)
        )
