import numpy as np

from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import DistributedLoad, MomentLoad, PointLoad
from beam_statics.domain.results import DiagramPoint, Reaction
from beam_statics.engine.diagrams import sample_diagrams
from beam_statics.engine.equilibrium import solve_reactions
from beam_statics.engine.validation import (
    validate, validate_diagram_closure, validate_equilibrium, validate_relationships,
)


def _ss(length, *loads):
    return Beam(
        length=length,
        supports=[Support("s1", 0.0, "pin"), Support("s2", length, "roller")],
        loads=list(loads),
    )


def _report(beam):
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions)
    return validate(beam, reactions, shear, moment)


def test_equilibrium_holds_for_trapezoidal_loads():
    beam = _ss(
        12.0,
        DistributedLoad("w1", 0.0, 5.0, 2.0, 9.0),
        DistributedLoad("w2", 6.0, 12.0, 4.0, 0.0),
        PointLoad("p", 7.5, 11.0, angle=15.0),
        MomentLoad("m", 3.0, 6.0, "clockwise"),
    )
    eq = validate_equilibrium(beam, solve_reactions(beam, carry_horizontal=True))
    assert eq.is_valid
    assert eq.messages == []
    assert abs(eq.sum_vertical_forces) < 1e-6
    assert abs(eq.sum_moments_about_origin) < 1e-6


def test_equilibrium_detects_wrong_reactions():
    beam = _ss(10.0, PointLoad("p", 5.0, 20.0))
    bad = [Reaction("s1", 0.0, 5.0, 0.0, 0.0), Reaction("s2", 10.0, 5.0, 0.0, 0.0)]
    eq = validate_equilibrium(beam, bad)
    assert not eq.is_valid
    assert not eq.is_vertical_equilibrium
    assert np.isclose(eq.sum_vertical_forces, -10.0)
    assert any(m.startswith("Vertical force equilibrium violated") for m in eq.messages)


def test_equilibrium_detects_missing_horizontal_reaction():
    beam = _ss(10.0, PointLoad("p", 5.0, 10.0, angle=90.0))
    reactions = [Reaction("s1", 0.0, 0.0, 0.0, 0.0), Reaction("s2", 10.0, 0.0, 0.0, 0.0)]
    eq = validate_equilibrium(beam, reactions)
    assert not eq.is_horizontal_equilibrium
    assert eq.is_vertical_equilibrium


def test_angled_load_without_horizontal_reaction_is_reported():
    beam = _ss(10.0, PointLoad("p", 5.0, 10.0, angle=30.0))
    eq = validate_equilibrium(beam, solve_reactions(beam))
    assert eq.is_vertical_equilibrium and eq.is_moment_equilibrium
    assert not eq.is_horizontal_equilibrium
    assert np.isclose(eq.sum_horizontal_forces, -5.0)
    assert eq.messages == ["Horizontal force equilibrium violated: ΣFx = -5.000000"]


def test_cantilever_equilibrium_includes_reaction_moment():
    beam = Beam(length=4.0, supports=[Support("s1", 4.0, "fixed")], loads=[PointLoad("p", 0.0, 5.0)])
    assert validate_equilibrium(beam, solve_reactions(beam)).is_valid


def test_moment_closure_at_pin_and_roller():
    beam = _ss(10.0, DistributedLoad("w", 0.0, 10.0, 0.0, 6.0))
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions)
    cl = validate_diagram_closure(beam, shear, moment)
    assert cl.is_valid
    assert len(cl.moment_closure) == 2
    assert cl.shear_closure == []


def test_moment_closure_reports_nonzero_moment():
    beam = _ss(10.0)
    shear = [DiagramPoint(0.0, 0.0), DiagramPoint(10.0, 0.0)]
    moment = [DiagramPoint(0.0, 0.0), DiagramPoint(10.0, 3.0)]
    cl = validate_diagram_closure(beam, shear, moment)
    assert not cl.is_valid
    assert cl.moment_closure[1].actual_value == 3.0
    assert "should be 0" in cl.messages[0]


def test_fixed_support_is_not_closure_checked():
    beam = Beam(length=3.0, supports=[Support("s1", 3.0, "fixed")], loads=[PointLoad("p", 0.0, 5.0)])
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions)
    cl = validate_diagram_closure(beam, shear, moment)
    assert cl.moment_closure == []
    assert cl.is_valid


def test_relationships_uniform_load():
    beam = _ss(10.0, DistributedLoad("w", 0.0, 10.0, 5.0, 5.0))
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions)
    rel = validate_relationships(beam, reactions, shear, moment)
    assert rel.is_valid
    assert rel.dMdx_equals_V.max_error < 1e-6
    assert rel.dVdx_equals_negW.max_error < 1e-6
    assert rel.dMdx_equals_V.n_checked > 90


def test_relationships_skip_stencils_across_jumps():
    beam = _ss(10.0, PointLoad("p", 5.0, 20.0))
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions)
    rel = validate_relationships(beam, reactions, shear, moment)
    assert rel.is_valid
    assert rel.dMdx_equals_V.n_skipped >= 2
    assert rel.dMdx_equals_V.n_checked + rel.dMdx_equals_V.n_skipped == 98


def test_relationships_flag_inconsistent_diagrams():
    beam = _ss(10.0, DistributedLoad("w", 0.0, 10.0, 5.0, 5.0))
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions)
    # cortante escalado: dM/dx ya no coincide
    bad_shear = [DiagramPoint(p.position, 2.0 * p.value) for p in shear]
    rel = validate_relationships(beam, reactions, bad_shear, moment)
    assert not rel.is_valid
    assert any("dM/dx = V" in m for m in rel.messages)


def test_full_report_valid_for_mixed_beam():
    report = _report(_ss(
        8.0,
        DistributedLoad("w", 1.0, 7.0, 3.0, 1.0),
        PointLoad("p", 2.0, 6.0),
        MomentLoad("m", 6.0, 4.0, "counterclockwise"),
    ))
    assert report.is_valid, report.messages
    assert report.messages == []


def test_full_report_valid_for_left_wall_cantilever():
    beam = Beam(
        length=8.0,
        supports=[Support("s1", 0.0, "fixed")],
        loads=[DistributedLoad("w", 0.0, 8.0, 3.0, 3.0), PointLoad("p", 8.0, 10.0)],
    )
    assert _report(beam).is_valid
