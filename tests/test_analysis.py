import logging

import numpy as np
import pytest

from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import DistributedLoad, PointLoad
from beam_statics.engine.analysis import analyze_beam
from beam_statics.engine.engineering_warnings import engineering_warnings
from beam_statics.engine.errors import ConfigurationError
from beam_statics.engine.settings import AnalysisSettings


def _ss(length, *loads):
    return Beam(
        length=length,
        supports=[Support("s1", 0.0, "pin"), Support("s2", length, "roller")],
        loads=list(loads),
    )


def test_analyze_beam_pipeline():
    res = analyze_beam(_ss(10.0, PointLoad("p", 5.0, 20.0)))
    assert len(res.reactions) == 2
    assert len(res.shear_force) == 100
    assert len(res.bending_moment) == 100
    assert res.validation.is_valid
    assert res.max_moment.value == pytest.approx(50.0, rel=0.02)
    assert abs(res.max_shear.value) == pytest.approx(10.0)
    assert res.trace.steps
    assert res.critical_points.points


def test_analysis_is_idempotent():
    beam = _ss(
        9.0,
        DistributedLoad("w", 0.0, 9.0, 1.0, 4.0),
        PointLoad("p", 3.0, 8.0, angle=20.0),
    )
    assert analyze_beam(beam) == analyze_beam(beam)


def test_beam_is_not_mutated():
    beam = _ss(10.0, PointLoad("p", 5.0, 20.0))
    before = (beam.length, beam.supports, beam.loads)
    analyze_beam(beam)
    assert (beam.length, beam.supports, beam.loads) == before


def test_settings_change_sample_count():
    res = analyze_beam(_ss(10.0, PointLoad("p", 5.0, 20.0)), AnalysisSettings(n_points=11))
    assert len(res.shear_force) == 11
    # 5.0 es estación exacta con 11 puntos
    assert res.max_moment.value == pytest.approx(50.0)


def test_configuration_error_propagates():
    with pytest.raises(ConfigurationError):
        analyze_beam(Beam(length=10.0))


def test_warnings_attached_to_results():
    res = analyze_beam(_ss(10.0, PointLoad("p", 12.0, 5.0)))
    levels = [w.level for w in res.warnings]
    assert "error" in levels                      # carga fuera de la viga
    assert "info" in levels                       # flecha no calculada


def test_engineering_warnings_without_results():
    beam = Beam(length=150.0, supports=[Support("s1", 0.0, "pin"), Support("s2", 150.0, "pin")])
    msgs = [w.message for w in engineering_warnings(beam)]
    assert any("unusually long" in m for m in msgs)
    assert any("pin + pin" in m for m in msgs)


def test_engineering_warnings_large_results():
    res = analyze_beam(_ss(20.0, DistributedLoad("w", 0.0, 20.0, 150.0, 150.0)))
    msgs = [w.message for w in res.warnings]
    assert any(m.startswith("Maximum shear force") for m in msgs)
    assert any(m.startswith("Maximum moment") for m in msgs)


def test_analysis_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="beam_statics"):
        analyze_beam(_ss(10.0, PointLoad("p", 5.0, 20.0)))
    assert any("beam-1" in r.getMessage() for r in caplog.records)


def test_trapezoidal_load_report_is_valid():
    res = analyze_beam(_ss(10.0, DistributedLoad("w", 0.0, 10.0, 0.0, 10.0)))
    assert res.validation.is_valid, res.validation.messages
    assert np.isclose(res.reactions[1].vertical_force, 100.0 / 3.0)


def test_angled_load_reported_without_aborting():
    res = analyze_beam(_ss(10.0, PointLoad("p", 5.0, 10.0, angle=30.0)))
    assert all(r.horizontal_force == 0.0 for r in res.reactions)
    assert not res.validation.equilibrium.is_horizontal_equilibrium
    assert res.validation.equilibrium.is_vertical_equilibrium
    assert any("ΣFx" in w.message for w in res.warnings if w.level == "warning")


def test_carry_horizontal_reaction_setting():
    beam = _ss(10.0, PointLoad("p", 5.0, 10.0, angle=30.0))
    res = analyze_beam(beam, AnalysisSettings(carry_horizontal_reaction=True))
    assert res.reactions[0].horizontal_force == pytest.approx(5.0)
    assert res.validation.is_valid, res.validation.messages
    assert not any("ΣFx" in w.message for w in res.warnings)


def test_unknown_units_raise_configuration_error():
    beam = Beam(
        length=10.0,
        supports=[Support("s1", 0.0, "pin"), Support("s2", 10.0, "roller")],
        loads=[PointLoad("p", 5.0, 20.0)],
        units="SI",
    )
    with pytest.raises(ConfigurationError, match="SI"):
        analyze_beam(beam)
