from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import DistributedLoad, MomentLoad, PointLoad
from beam_statics.domain.results import Reaction
from beam_statics.engine.equilibrium import solve_reactions
from beam_statics.engine.trace import generate_trace


def _ss(length, *loads, units="metric"):
    return Beam(
        length=length,
        supports=[Support("s1", 0.0, "pin"), Support("s2", length, "roller")],
        loads=list(loads),
        units=units,
    )


def test_simply_supported_trace_steps():
    beam = _ss(10.0, PointLoad("p", 3.0, 20.0))
    trace = generate_trace(beam, solve_reactions(beam))
    assert [s.step_number for s in trace.steps] == [1, 2, 3, 4, 5]
    assert trace.steps[0].title == "Free Body Diagram"
    assert trace.steps[4].title == "Equilibrium Check"
    assert trace.steps[2].result == "R_B = 6.00 kN"
    assert trace.steps[3].result == "R_A = 14.00 kN"
    assert trace.steps[4].result == "All checks passed ✓"
    assert "R_A = 14.00 kN" in trace.summary


def test_trace_uses_given_reaction_values():
    beam = _ss(10.0, PointLoad("p", 5.0, 20.0))
    fake = [Reaction("s1", 0.0, 7.0, 0.0, 0.0), Reaction("s2", 10.0, 3.0, 0.0, 0.0)]
    trace = generate_trace(beam, fake)
    assert trace.steps[2].result == "R_B = 3.00 kN"
    assert trace.steps[3].result == "R_A = 7.00 kN"
    # la autoverificación detecta que no equilibran
    assert trace.steps[4].result == "Equilibrium violated ✗"
    assert any("Vertical force" in line for line in trace.steps[4].equations)


def test_cantilever_trace():
    beam = Beam(length=3.0, supports=[Support("s1", 3.0, "fixed")], loads=[PointLoad("p", 0.0, 5.0)])
    reactions = solve_reactions(beam)
    trace = generate_trace(beam, reactions)
    assert len(trace.steps) == 5
    assert trace.steps[2].result == "M_R = -15.00 kN·m"
    assert trace.steps[3].result.startswith("R_y = 5.00 kN")
    assert "Free end at x = 0 m" in trace.steps[0].equations


def test_load_enumeration_covers_all_load_kinds():
    beam = _ss(
        10.0,
        PointLoad("p", 2.0, 5.0, angle=30.0),
        DistributedLoad("u", 0.0, 10.0, 2.0, 2.0),
        DistributedLoad("t", 1.0, 4.0, 1.0, 3.0),
        DistributedLoad("z", 6.0, 6.0, 4.0, 4.0),
        MomentLoad("m", 8.0, 9.0, "clockwise"),
    )
    lines = generate_trace(beam, solve_reactions(beam)).steps[1].equations
    assert len(lines) == 5
    assert lines[0].startswith("Load 1: Point load P = 5 kN at 30°")
    assert lines[1].startswith("Load 2: Uniform distributed load")
    assert lines[2].startswith("Load 3: Varying distributed load")
    assert "zero-length" in lines[3]
    assert lines[4] == "Load 5: Applied moment M = 9 kN·m clockwise at x = 8 m"


def test_imperial_units_in_trace():
    beam = _ss(20.0, PointLoad("p", 10.0, 4.0), units="imperial")
    trace = generate_trace(beam, solve_reactions(beam))
    assert trace.steps[2].result == "R_B = 2.00 kips"
    assert "ft" in trace.steps[0].equations[0]


def test_unknown_configuration():
    beam = Beam(length=10.0, supports=[Support("a", 0.0, "pin")])
    trace = generate_trace(beam, [])
    assert trace.steps == []
    assert trace.summary == "Unknown beam configuration"


def test_cantilever_free_end_narration():
    def first_step(x_wall):
        beam = Beam(length=6.0, supports=[Support("s1", x_wall, "fixed")], loads=[PointLoad("p", 6.0, 2.0)])
        return generate_trace(beam, solve_reactions(beam)).steps[0].equations

    assert "Free end at x = 6 m" in first_step(0.0)
    assert "Free end at x = 0 m" in first_step(6.0)
    assert "Free ends at x = 0 m and x = 6 m" in first_step(2.0)
