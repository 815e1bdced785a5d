from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from beam_statics.domain.beam import Beam
from beam_statics.domain.cases import FBDData
from beam_statics.domain.checks import (
    ClosureItem, DiagramClosureCheck, EquilibriumCheck,
    RelationshipCheck, RelationshipStats, ValidationReport,
)
from beam_statics.domain.results import DiagramPoint, Reaction
from beam_statics.engine.diagrams import interpolate_value
from beam_statics.engine.normalize import normalize_inputs
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


# -------------------------
# 1) Equilibrio global
# -------------------------
def validate_equilibrium(
    beam: Beam,
    reactions: Sequence[Reaction],
    tolerance: float = 1e-6,
) -> EquilibriumCheck:
    """
    Recalcula ΣFy, ΣFx y ΣM respecto a x=0 directamente desde cargas y reacciones
    (sin reutilizar las sumas del solver).
    """
    sum_Fy = 0.0
    sum_Fx = 0.0
    sum_M = 0.0

    for r in reactions:
        sum_Fy += r.vertical_force
        sum_Fx += r.horizontal_force
        sum_M += r.moment + r.vertical_force * r.position

    for ld in beam.loads:
        if ld.type == "point":
            a = math.radians(ld.angle)
            fv = ld.magnitude * math.cos(a)
            sum_Fy -= fv
            sum_Fx -= ld.magnitude * math.sin(a)
            sum_M -= fv * ld.position
        elif ld.type == "distributed":
            length = ld.end_position - ld.start_position
            if length == 0:
                sum_Fy -= ld.start_magnitude
                sum_M -= ld.start_magnitude * ld.start_position
            else:
                total = 0.5 * (ld.start_magnitude + ld.end_magnitude) * length
                a, b = ld.start_position, ld.end_position
                first = length * (ld.start_magnitude * (2 * a + b) + ld.end_magnitude * (a + 2 * b)) / 6.0
                sum_Fy -= total
                sum_M -= first
        elif ld.type == "moment":
            sum_M -= -ld.magnitude if ld.direction == "clockwise" else ld.magnitude

    ok_Fy = abs(sum_Fy) < tolerance
    ok_Fx = abs(sum_Fx) < tolerance
    ok_M = abs(sum_M) < tolerance

    messages: List[str] = []
    if not ok_Fy:
        messages.append(f"Vertical force equilibrium violated: ΣFy = {sum_Fy:.6f}")
    if not ok_Fx:
        messages.append(f"Horizontal force equilibrium violated: ΣFx = {sum_Fx:.6f}")
    if not ok_M:
        messages.append(f"Moment equilibrium violated: ΣM = {sum_M:.6f}")

    return EquilibriumCheck(
        sum_vertical_forces=sum_Fy,
        sum_horizontal_forces=sum_Fx,
        sum_moments_about_origin=sum_M,
        tolerance=tolerance,
        is_vertical_equilibrium=ok_Fy,
        is_horizontal_equilibrium=ok_Fx,
        is_moment_equilibrium=ok_M,
        is_valid=ok_Fy and ok_Fx and ok_M,
        messages=messages,
    )


# -------------------------
# 2) Cierre de diagramas
# -------------------------
def validate_diagram_closure(
    beam: Beam,
    shear_force: Sequence[DiagramPoint],
    bending_moment: Sequence[DiagramPoint],
    tolerance: float = 1e-6,
) -> DiagramClosureCheck:
    """
    M = 0 en apoyos articulados/deslizantes.
    Empotramientos y extremo libre no se verifican todavía (shear_closure queda vacío).
    """
    moment_checks: List[ClosureItem] = []
    shear_checks: List[ClosureItem] = []
    messages: List[str] = []

    for s in beam.supports:
        if s.type not in ("pin", "roller"):
            continue
        m = interpolate_value(bending_moment, s.position)
        err = abs(m)
        ok = err < tolerance
        moment_checks.append(ClosureItem(
            is_valid=ok,
            expected_value=0.0,
            actual_value=m,
            error=err,
            location=f"Support at x={s.position:g} ({s.type})",
        ))
        if not ok:
            messages.append(
                f"Moment at {s.type} support (x={s.position:g}) should be 0, but is {m:.6f}"
            )

    ok_all = all(c.is_valid for c in moment_checks) and all(c.is_valid for c in shear_checks)
    return DiagramClosureCheck(
        shear_closure=shear_checks,
        moment_closure=moment_checks,
        is_valid=ok_all,
        messages=messages,
    )


# -------------------------
# 3) Relaciones diferenciales
# -------------------------
def _stats(errors: List[float], skipped: int, tolerance: float) -> RelationshipStats:
    if not errors:
        return RelationshipStats(is_valid=True, max_error=0.0, average_error=0.0,
                                 rms_error=0.0, n_checked=0, n_skipped=skipped)
    max_e = max(errors)
    avg = sum(errors) / len(errors)
    rms = math.sqrt(sum(e * e for e in errors) / len(errors))
    return RelationshipStats(
        is_valid=max_e < tolerance,
        max_error=max_e,
        average_error=avg,
        rms_error=rms,
        n_checked=len(errors),
        n_skipped=skipped,
    )


def _rel_error(actual: float, expected: float) -> float:
    # relativo a |expected| si no es nulo, absoluto si lo es
    if abs(expected) > 1e-10:
        return abs((actual - expected) / expected)
    return abs(actual - expected)


def load_intensity_at(data: FBDData, x: float) -> float:
    """Suma de intensidades w(x) de las distribuidas que cubren x (+ abajo)."""
    return sum(d.intensity_at(x) for d in data.dist_loads)


def _breakpoints(data: FBDData, reactions: Sequence[Reaction]) -> List[float]:
    xs = [p.x for p in data.point_forces]
    xs += [m.x for m in data.moments]
    xs += [r.position for r in reactions]
    for d in data.dist_loads:
        xs += [d.x1, d.x2]
    return sorted(set(xs))


def _straddles(lo: float, hi: float, points: Sequence[float]) -> bool:
    # un salto justo en x[i+1] ya está incluido en esa muestra; en x[i-1] afecta
    # a ambos extremos del stencil por igual
    return any(lo < p <= hi for p in points)


def validate_relationships(
    beam: Beam,
    reactions: Sequence[Reaction],
    shear_force: Sequence[DiagramPoint],
    bending_moment: Sequence[DiagramPoint],
    tolerance: float = 1e-3,
) -> RelationshipCheck:
    """
    dM/dx = V  y  dV/dx = -w  por diferencias centrales en estaciones interiores:
      dM/dx ≈ (M[i+1] - M[i-1]) / (x[i+1] - x[i-1])
      frente a (V[i-1] + 4·V[i] + V[i+1]) / 6
    Se omiten las estaciones cuyo stencil (x[i-1], x[i+1]] contiene un salto
    (carga puntual, momento, reacción o extremo de distribuida).
    """
    data = normalize_inputs(beam)
    jumps = _breakpoints(data, reactions)

    err_M: List[float] = []
    err_V: List[float] = []
    skipped = 0

    n = min(len(shear_force), len(bending_moment))
    for i in range(1, n - 1):
        x_prev = bending_moment[i - 1].position
        x_next = bending_moment[i + 1].position
        h = x_next - x_prev
        if h <= 0.0 or _straddles(x_prev, x_next, jumps):
            skipped += 1
            continue

        dMdx = (bending_moment[i + 1].value - bending_moment[i - 1].value) / h
        # promedio de Simpson de V en el stencil: exacto para V cuadrático
        # (trapecios); con V lineal coincide con V[i]
        V_avg = (shear_force[i - 1].value + 4.0 * shear_force[i].value + shear_force[i + 1].value) / 6.0
        err_M.append(_rel_error(dMdx, V_avg))

        dVdx = (shear_force[i + 1].value - shear_force[i - 1].value) / h
        w = load_intensity_at(data, shear_force[i].position)
        err_V.append(_rel_error(dVdx, -w))

    dM = _stats(err_M, skipped, tolerance)
    dV = _stats(err_V, skipped, tolerance)

    messages: List[str] = []
    if not dM.is_valid:
        messages.append(
            "dM/dx = V relationship not satisfied. "
            f"Max error: {dM.max_error * 100:.2f}%, Average error: {dM.average_error * 100:.2f}%"
        )
    if not dV.is_valid:
        messages.append(
            "dV/dx = -w relationship not satisfied. "
            f"Max error: {dV.max_error * 100:.2f}%"
        )

    return RelationshipCheck(
        dMdx_equals_V=dM,
        dVdx_equals_negW=dV,
        tolerance=tolerance,
        is_valid=dM.is_valid and dV.is_valid,
        messages=messages,
    )


def validate(
    beam: Beam,
    reactions: Sequence[Reaction],
    shear_force: Sequence[DiagramPoint],
    bending_moment: Sequence[DiagramPoint],
    settings: Optional[AnalysisSettings] = None,
) -> ValidationReport:
    s = settings or DEFAULT_SETTINGS
    report = ValidationReport(
        equilibrium=validate_equilibrium(beam, reactions, s.equilibrium_tolerance),
        diagram_closure=validate_diagram_closure(beam, shear_force, bending_moment, s.closure_tolerance),
        relationships=validate_relationships(
            beam, reactions, shear_force, bending_moment, s.relationship_tolerance
        ),
    )
    if not report.is_valid:
        for msg in report.messages:
            logger.warning("Validación: %s", msg)
    return report
