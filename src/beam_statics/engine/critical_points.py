from __future__ import annotations

from typing import List, Optional, Sequence

from beam_statics.domain.beam import Beam
from beam_statics.domain.labels import fmt_num, force_unit, moment_unit
from beam_statics.domain.results import (
    CriticalPoint, CriticalPointsAnalysis, DiagramPoint, Reaction,
)
from beam_statics.engine.diagrams import interpolate_value

SAME_POSITION_TOL = 1e-3


def analyze_critical_points(
    beam: Beam,
    reactions: Sequence[Reaction],
    shear_force: Sequence[DiagramPoint],
    bending_moment: Sequence[DiagramPoint],
    zero_tolerance: float = 0.01,
) -> CriticalPointsAnalysis:
    """
    Puntos de interés ordenados por x:
      - apoyos
      - puntos de aplicación de cargas (inicio/fin de distribuidas)
      - cruces por cero del cortante (candidatos a extremo de momento)
      - máximos/mínimos globales de M y V
    """
    fu = force_unit(beam.units)
    mu = moment_unit(beam.units)
    points: List[CriticalPoint] = []

    def _at(x: float, description: str, kind: str, discontinuity: bool) -> CriticalPoint:
        return CriticalPoint(
            position=float(x),
            description=description,
            shear=interpolate_value(shear_force, x),
            moment=interpolate_value(bending_moment, x),
            is_discontinuity=discontinuity,
            type=kind,
        )

    # Apoyos (el empotramiento es borde del cuerpo libre, no salto interno)
    for s in beam.supports:
        points.append(_at(s.position, f"Support ({s.type})", "support", s.type != "fixed"))

    # Cargas
    for ld in beam.loads:
        if ld.type == "point":
            points.append(_at(ld.position, f"Point Load ({fmt_num(ld.magnitude)} {fu})", "load", True))
        elif ld.type == "distributed":
            if ld.end_position == ld.start_position:
                points.append(_at(
                    ld.start_position,
                    f"Concentrated Distributed Load ({fmt_num(ld.start_magnitude)} {fu})",
                    "load", True,
                ))
                continue
            points.append(_at(ld.start_position, "Distributed Load Start", "load", False))
            points.append(_at(ld.end_position, "Distributed Load End", "load", False))
        elif ld.type == "moment":
            points.append(_at(
                ld.position, f"Applied Moment ({fmt_num(ld.magnitude)} {mu}, {ld.direction})", "load", True
            ))

    points.extend(_zero_shear_points(shear_force, bending_moment, zero_tolerance))

    max_pos_M = _extreme(bending_moment, +1)
    max_neg_M = _extreme(bending_moment, -1)
    max_pos_V = _extreme(shear_force, +1)
    max_neg_V = _extreme(shear_force, -1)

    cp_max_M = _moment_point(max_pos_M, shear_force, "Maximum Positive Moment", "max-moment")
    cp_min_M = _moment_point(max_neg_M, shear_force, "Maximum Negative Moment", "min-moment")
    cp_max_V = _shear_point(max_pos_V, bending_moment, "Maximum Positive Shear", "max-shear")
    cp_min_V = _shear_point(max_neg_V, bending_moment, "Maximum Negative Shear", "min-shear")

    # extremos sólo si no hay otro punto en la misma posición
    for cp in (cp_max_M, cp_min_M, cp_max_V, cp_min_V):
        if cp is None:
            continue
        if any(abs(p.position - cp.position) < SAME_POSITION_TOL for p in points):
            continue
        points.append(cp)

    points.sort(key=lambda p: p.position)

    return CriticalPointsAnalysis(
        points=points,
        max_positive_moment=cp_max_M,
        max_negative_moment=cp_min_M,
        max_positive_shear=cp_max_V,
        max_negative_shear=cp_min_V,
    )


def _zero_shear_points(
    shear_force: Sequence[DiagramPoint],
    bending_moment: Sequence[DiagramPoint],
    tol: float,
) -> List[CriticalPoint]:
    out: List[CriticalPoint] = []
    for i in range(1, len(shear_force)):
        v0 = shear_force[i - 1].value
        v1 = shear_force[i].value
        if (v0 > tol and v1 < -tol) or (v0 < -tol and v1 > tol):
            x0 = shear_force[i - 1].position
            dx = shear_force[i].position - x0
            frac = abs(v0) / (abs(v0) + abs(v1))
            x = x0 + frac * dx
            out.append(CriticalPoint(
                position=x,
                description="Zero Shear Point",
                shear=0.0,
                moment=interpolate_value(bending_moment, x),
                is_discontinuity=False,
                type="zero-shear",
            ))
    return out


def _extreme(points: Sequence[DiagramPoint], sign: int) -> Optional[DiagramPoint]:
    """Mayor valor positivo (sign=+1) o más negativo (sign=-1); None si no hay."""
    best: Optional[DiagramPoint] = None
    for p in points:
        v = sign * p.value
        if v > 0 and (best is None or v > sign * best.value):
            best = p
    return best


def _moment_point(p: Optional[DiagramPoint], shear_force, description: str, kind: str) -> Optional[CriticalPoint]:
    if p is None:
        return None
    return CriticalPoint(
        position=p.position,
        description=description,
        shear=interpolate_value(shear_force, p.position),
        moment=p.value,
        is_discontinuity=False,
        type=kind,
    )


def _shear_point(p: Optional[DiagramPoint], bending_moment, description: str, kind: str) -> Optional[CriticalPoint]:
    if p is None:
        return None
    return CriticalPoint(
        position=p.position,
        description=description,
        shear=p.value,
        moment=interpolate_value(bending_moment, p.position),
        is_discontinuity=False,
        type=kind,
    )
