from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from beam_statics.domain.beam import Beam
from beam_statics.domain.results import AnalysisResults
from beam_statics.engine.critical_points import analyze_critical_points
from beam_statics.engine.diagrams import find_extremum, sample_diagrams
from beam_statics.engine.engineering_warnings import engineering_warnings
from beam_statics.engine.equilibrium import solve_reactions
from beam_statics.engine.settings import AnalysisSettings, DEFAULT_SETTINGS
from beam_statics.engine.trace import generate_trace
from beam_statics.engine.validation import validate

logger = logging.getLogger(__name__)


def analyze_beam(beam: Beam, settings: Optional[AnalysisSettings] = None) -> AnalysisResults:
    """
    Corrida completa:
      Beam -> reacciones -> V(x), M(x) -> {validación, puntos críticos, memoria}

    ConfigurationError si la entrada no es analizable; una validación numérica
    fallida NO aborta (queda en results.validation).
    """
    s = settings or DEFAULT_SETTINGS

    reactions = solve_reactions(
        beam, eps=s.position_epsilon, carry_horizontal=s.carry_horizontal_reaction
    )
    shear, moment = sample_diagrams(beam, reactions, n_points=s.n_points)

    # pasadas independientes sobre el mismo (beam, reacciones, diagramas)
    report = validate(beam, reactions, shear, moment, settings=s)
    critical = analyze_critical_points(beam, reactions, shear, moment, zero_tolerance=s.zero_shear_tolerance)
    trace = generate_trace(beam, reactions)

    results = AnalysisResults(
        reactions=reactions,
        shear_force=shear,
        bending_moment=moment,
        max_shear=find_extremum(shear),
        max_moment=find_extremum(moment),
        validation=report,
        critical_points=critical,
        trace=trace,
    )
    results = dataclasses.replace(results, warnings=engineering_warnings(beam, results))

    logger.info(
        "Análisis '%s': %d apoyo(s), %d carga(s), |V|max=%g, |M|max=%g, válido=%s",
        beam.id, len(beam.supports), len(beam.loads),
        abs(results.max_shear.value), abs(results.max_moment.value), report.is_valid,
    )
    return results
