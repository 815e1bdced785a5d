from __future__ import annotations

from typing import List, Optional

from beam_statics.domain.beam import Beam
from beam_statics.domain.labels import force_unit, length_unit, moment_unit
from beam_statics.domain.results import AnalysisResults, EngineeringWarning

# Umbrales orientativos por sistema de unidades
MAX_REASONABLE = {
    "metric": {"length": 100.0, "shear": 1000.0, "moment": 5000.0},
    "imperial": {"length": 330.0, "shear": 225.0, "moment": 3700.0},
}


def engineering_warnings(beam: Beam, results: Optional[AnalysisResults] = None) -> List[EngineeringWarning]:
    """
    Avisos para el usuario (no excepciones): entrada dudosa y resultados fuera de
    rangos habituales.
    """
    out: List[EngineeringWarning] = []

    def add(level: str, message: str) -> None:
        out.append(EngineeringWarning(level=level, message=message))

    lu = length_unit(beam.units) if beam.units in MAX_REASONABLE else "m"
    limits = MAX_REASONABLE.get(beam.units, MAX_REASONABLE["metric"])
    L = float(beam.length)

    # Longitud
    if L <= 0:
        add("error", "Beam length must be positive")
    elif L > limits["length"]:
        add("warning", f"Beam length ({L:g} {lu}) is unusually long - verify input")

    # Apoyos
    n_sup = len(beam.supports)
    if n_sup == 0:
        add("error", "No supports defined - beam is unstable")
    elif n_sup == 1:
        if beam.supports[0].type != "fixed":
            add("error", "Cantilever beam requires a fixed support")
    elif n_sup == 2:
        kinds = sorted(s.type for s in beam.supports)
        if "fixed" in kinds:
            add("error", "A fixed support with a second support is statically indeterminate")
        elif kinds != ["pin", "roller"]:
            add("warning", f"Simply supported beam uses {kinds[0]} + {kinds[1]} supports - "
                           f"a pin and a roller are expected")
    else:
        add("warning", f"Beam has {n_sup} supports - only cantilever and simply supported beams are implemented")

    for idx, s in enumerate(beam.supports, start=1):
        if s.position < 0 or s.position > L:
            add("error", f"Support {idx} position ({s.position:g}) is outside beam length (0 to {L:g})")

    # Cargas
    for idx, ld in enumerate(beam.loads, start=1):
        if ld.type in ("point", "moment"):
            if ld.position < 0 or ld.position > L:
                add("error", f"Load {idx} position ({ld.position:g}) is outside beam length (0 to {L:g})")
        elif ld.type == "distributed":
            if ld.start_position < 0 or ld.end_position > L:
                add("error", f"Distributed load {idx} extends outside beam length")
            if ld.start_position > ld.end_position:
                add("error", f"Distributed load {idx} has invalid range (start > end)")
            elif ld.start_position == ld.end_position:
                add("info", f"Distributed load {idx} has zero length - treated as a point load")

    # Resultados
    if results is not None:
        fu = force_unit(beam.units)
        mu = moment_unit(beam.units)
        v = abs(results.max_shear.value)
        m = abs(results.max_moment.value)
        if v > limits["shear"]:
            add("warning", f"Maximum shear force ({v:.2f} {fu}) is very high for typical beams - verify input values")
        if m > limits["moment"]:
            add("warning", f"Maximum moment ({m:.2f} {mu}) is very high for typical beams - verify input values")
        eq = results.validation.equilibrium
        if not eq.is_horizontal_equilibrium:
            add("warning", f"Angled loads leave ΣFx = {eq.sum_horizontal_forces:.2f} {fu} "
                           f"unbalanced - horizontal reactions are not computed")
        if beam.loads:
            add("info", "Deflection is not calculated - consider checking L/360 serviceability limits separately")

    return out
