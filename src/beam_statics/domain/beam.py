from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Tuple

from beam_statics.domain.loads import Load

SupportType = Literal["pin", "roller", "fixed"]
UnitSystem = Literal["metric", "imperial"]


@dataclass(frozen=True)
class Support:
    id: str
    position: float
    type: SupportType = "pin"


@dataclass(frozen=True)
class Beam:
    """
    Viga 1D en x ∈ [0, length].

    Valor inmutable: supports y loads se guardan como tuplas (se aceptan listas
    al construir). `units` sólo afecta etiquetas, nunca la aritmética.
    """
    length: float
    supports: Tuple[Support, ...] = ()
    loads: Tuple[Load, ...] = ()
    units: UnitSystem = "metric"
    id: str = "beam-1"

    def __post_init__(self):
        object.__setattr__(self, "supports", tuple(self.supports))
        object.__setattr__(self, "loads", tuple(self.loads))

    @property
    def is_cantilever(self) -> bool:
        return len(self.supports) == 1
