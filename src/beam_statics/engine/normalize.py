from __future__ import annotations

import math
from typing import List

from beam_statics.domain.beam import Beam
from beam_statics.domain.loads import (
    PointLoad, DistributedLoad, MomentLoad,
    NormalizedPointForce, NormalizedDistLoad, NormalizedPointMoment
)
from beam_statics.domain.cases import FBDData
from beam_statics.domain.labels import MOMENT_SIGN_CONVENTION, UNIT_LABELS, signed_moment
from beam_statics.engine.errors import ConfigurationError

SUPPORT_TYPES = ("pin", "roller", "fixed")


def point_components(magnitude: float, angle_deg: float) -> tuple[float, float]:
    """(vertical, horizontal) de una puntual inclinada; angle=0 => todo vertical."""
    a = math.radians(float(angle_deg))
    return float(magnitude) * math.cos(a), float(magnitude) * math.sin(a)


def check_beam(beam: Beam, eps: float = 1e-9) -> None:
    """
    Chequeos de entrada que no dependen de la cantidad de apoyos.
    """
    L = float(beam.length)
    if not math.isfinite(L) or L <= 0.0:
        raise ConfigurationError(f"La longitud de la viga debe ser positiva (L={beam.length!r}).")

    if beam.units not in UNIT_LABELS:
        raise ConfigurationError(
            f"Sistema de unidades desconocido: {beam.units!r} (se espera uno de {sorted(UNIT_LABELS)})."
        )

    for s in beam.supports:
        if s.type not in SUPPORT_TYPES:
            raise ConfigurationError(f"Tipo de apoyo desconocido en '{s.id}': {s.type!r}.")
        x = float(s.position)
        if x < -eps or x > L + eps:
            raise ConfigurationError(
                f"Apoyo '{s.id}' fuera de la viga: x={x:g} no está en [0, {L:g}]."
            )

    for ld in beam.loads:
        if isinstance(ld, DistributedLoad):
            if float(ld.start_position) > float(ld.end_position):
                raise ConfigurationError(
                    f"Distribuida '{ld.id}' con rango invertido "
                    f"[{ld.start_position:g}, {ld.end_position:g}]."
                )
        elif isinstance(ld, MomentLoad):
            if ld.direction not in MOMENT_SIGN_CONVENTION:
                raise ConfigurationError(f"Sentido de momento desconocido en '{ld.id}': {ld.direction!r}.")
        elif not isinstance(ld, PointLoad):
            raise ConfigurationError(f"Tipo de carga no soportado: {type(ld).__name__}.")


def normalize_inputs(beam: Beam) -> FBDData:
    check_beam(beam)
    L = float(beam.length)
    notes: List[str] = []

    n_points: List[NormalizedPointForce] = []
    n_dists: List[NormalizedDistLoad] = []
    n_moms: List[NormalizedPointMoment] = []

    for ld in beam.loads:
        # 1) Puntuales: se descomponen según el ángulo
        if isinstance(ld, PointLoad):
            Fv, Fh = point_components(ld.magnitude, ld.angle)
            n_points.append(NormalizedPointForce(label=ld.id, x=float(ld.position), Fv=Fv, Fh=Fh))

        # 2) Distribuidas: longitud nula => puntual equivalente de valor start_magnitude
        elif isinstance(ld, DistributedLoad):
            x1 = float(ld.start_position)
            x2 = float(ld.end_position)
            if x2 - x1 <= 0.0:
                n_points.append(NormalizedPointForce(
                    label=ld.id, x=x1, Fv=float(ld.start_magnitude), Fh=0.0, from_distributed=True
                ))
                notes.append(f'Distribuida "{ld.id}" de longitud nula tratada como puntual en x={x1:g}.')
                continue
            n_dists.append(NormalizedDistLoad(
                label=ld.id,
                x1=x1,
                x2=x2,
                w1=float(ld.start_magnitude),
                w2=float(ld.end_magnitude),
            ))

        # 3) Momentos: CCW+
        elif isinstance(ld, MomentLoad):
            n_moms.append(NormalizedPointMoment(
                label=ld.id, x=float(ld.position), M=signed_moment(ld.magnitude, ld.direction)
            ))

    for p in n_points:
        if p.x < 0.0 or p.x > L:
            notes.append(f'Carga "{p.label}" fuera de la viga (x={p.x:g}).')
    for m in n_moms:
        if m.x < 0.0 or m.x > L:
            notes.append(f'Momento "{m.label}" fuera de la viga (x={m.x:g}).')
    for d in n_dists:
        if d.x1 < 0.0 or d.x2 > L:
            notes.append(f'Distribuida "{d.label}" excede la viga ([{d.x1:g}, {d.x2:g}]).')

    return FBDData(
        beam=beam,
        point_forces=n_points,
        dist_loads=n_dists,
        moments=n_moms,
        notes=notes,
    )
