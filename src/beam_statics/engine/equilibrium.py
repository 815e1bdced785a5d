from __future__ import annotations

import logging
from typing import List, Tuple

from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.cases import FBDData
from beam_statics.domain.results import Reaction
from beam_statics.engine.errors import ConfigurationError
from beam_statics.engine.normalize import normalize_inputs

logger = logging.getLogger(__name__)


def _sum_load_contributions(data: FBDData, x_ref: float) -> Tuple[float, float, float]:
    """
    Devuelve:
      V_total: suma de componentes verticales (+ abajo) de puntuales y distribuidas
      H_total: suma de componentes horizontales de puntuales inclinadas
      M_ref:   suma de momentos de cargas respecto a x_ref
               (puntual: Fv·(x - x_ref), distribuida: F·(xc - x_ref), momento: ±M directo)
    Los momentos puntuales no entran en ΣFy.
    """
    V_total = 0.0
    H_total = 0.0
    M_ref = 0.0

    for pf in data.point_forces:
        V_total += pf.Fv
        H_total += pf.Fh
        M_ref += pf.Fv * (pf.x - x_ref)

    for dl in data.dist_loads:
        F = dl.resultant
        V_total += F
        # ∫(ξ - x_ref)·w dξ, válido también con resultante nula
        M_ref += dl.first_moment - F * x_ref

    for pm in data.moments:
        M_ref += pm.M

    return V_total, H_total, M_ref


def _horizontal_carrier(supports: Tuple[Support, ...]) -> int:
    for i, s in enumerate(supports):
        if s.type in ("pin", "fixed"):
            return i
    return 0


def solve_reactions(beam: Beam, eps: float = 1e-9, carry_horizontal: bool = False) -> List[Reaction]:
    """
    Reacciones de apoyo por equilibrio (ΣFy = 0, ΣM = 0).

    La reacción horizontal es 0; con carry_horizontal=True el empotramiento
    (o el primer apoyo articulado) toma ΣP·sin θ de las puntuales inclinadas.

    Configuraciones isostáticas soportadas:
      - ménsula: 1 apoyo empotrado
      - simplemente apoyada: 2 apoyos articulados/deslizantes
    Cualquier otra combinación lanza ConfigurationError.
    """
    data = normalize_inputs(beam)
    for n in data.notes:
        logger.debug(n)

    n_sup = len(beam.supports)
    if n_sup == 0:
        raise ConfigurationError("La viga no tiene apoyos (inestable).")
    if n_sup == 1:
        return _solve_cantilever(beam, data, carry_horizontal)
    if n_sup == 2:
        return _solve_simply_supported(beam, data, eps, carry_horizontal)
    raise ConfigurationError(
        f"{n_sup} apoyos: sólo se resuelven ménsulas (1 empotramiento) "
        f"y vigas simplemente apoyadas (2 apoyos)."
    )


def _solve_cantilever(beam: Beam, data: FBDData, carry_horizontal: bool) -> List[Reaction]:
    support = beam.supports[0]
    if support.type != "fixed":
        raise ConfigurationError(
            f"Ménsula con apoyo '{support.id}' de tipo {support.type!r}: se requiere empotramiento (fixed)."
        )

    xs = float(support.position)
    V_total, H_total, M0 = _sum_load_contributions(data, 0.0)

    # ΣM0 = 0  =>  M_R + R·xs - M0 = 0
    M_reaction = M0 - V_total * xs
    logger.debug("Ménsula: V_total=%g, M0=%g, M_R=%g", V_total, M0, M_reaction)

    return [
        Reaction(
            support_id=support.id,
            position=xs,
            vertical_force=V_total,
            horizontal_force=H_total if carry_horizontal else 0.0,
            moment=M_reaction,
        )
    ]


def _solve_simply_supported(beam: Beam, data: FBDData, eps: float, carry_horizontal: bool) -> List[Reaction]:
    s1, s2 = beam.supports
    for s in (s1, s2):
        if s.type == "fixed":
            raise ConfigurationError(
                f"Empotramiento '{s.id}' en viga de 2 apoyos: estructura hiperestática, no soportada."
            )

    distance = float(s2.position) - float(s1.position)
    if abs(distance) <= eps:
        raise ConfigurationError(
            f"Apoyos '{s1.id}' y '{s2.id}' coincidentes (x={s1.position:g}): configuración degenerada."
        )

    V_total, H_total, M_s1 = _sum_load_contributions(data, float(s1.position))

    # ΣM_s1 = 0 => R2·d = M_s1 ; ΣFy = 0 => R1 = V_total - R2
    R2 = M_s1 / distance
    R1 = V_total - R2
    logger.debug("Simplemente apoyada: M_s1=%g, d=%g, R1=%g, R2=%g", M_s1, distance, R1, R2)

    H = [0.0, 0.0]
    if carry_horizontal:
        H[_horizontal_carrier(beam.supports)] = H_total

    return [
        Reaction(support_id=s1.id, position=float(s1.position), vertical_force=R1,
                 horizontal_force=H[0], moment=0.0),
        Reaction(support_id=s2.id, position=float(s2.position), vertical_force=R2,
                 horizontal_force=H[1], moment=0.0),
    ]
