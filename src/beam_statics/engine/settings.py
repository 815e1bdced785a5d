from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisSettings:
    n_points: int = 100

    # Tolerancias de verificación
    equilibrium_tolerance: float = 1e-6
    closure_tolerance: float = 1e-6
    relationship_tolerance: float = 1e-3   # 0.1 %

    # |V| mínimo a ambos lados para aceptar un cruce por cero
    zero_shear_tolerance: float = 0.01

    # Distancia mínima entre posiciones "distintas"
    position_epsilon: float = 1e-9

    # Asignar ΣP·sin θ a un apoyo (por defecto la reacción horizontal es 0)
    carry_horizontal_reaction: bool = False


DEFAULT_SETTINGS = AnalysisSettings()
