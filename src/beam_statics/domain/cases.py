from __future__ import annotations

from dataclasses import dataclass
from typing import List

from beam_statics.domain.beam import Beam
from beam_statics.domain.loads import (
    NormalizedPointForce, NormalizedDistLoad, NormalizedPointMoment
)


@dataclass(frozen=True)
class FBDData:
    """
    Cuerpo libre normalizado para el motor:
      - puntuales con componentes vertical/horizontal ya resueltas
      - distribuidas no degeneradas (x1 < x2)
      - momentos con signo interno (CCW+)
    Las distribuidas de longitud nula aparecen como puntuales.
    """
    beam: Beam
    point_forces: List[NormalizedPointForce]
    dist_loads: List[NormalizedDistLoad]
    moments: List[NormalizedPointMoment]
    notes: List[str]
