import numpy as np

from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import DistributedLoad, MomentLoad, PointLoad
from beam_statics.domain.results import DiagramPoint
from beam_statics.engine.diagrams import (
    build_V_M, find_extremum, interpolate_value, sample_diagrams,
)
from beam_statics.engine.equilibrium import solve_reactions


def _run(beam, n_points=100):
    reactions = solve_reactions(beam)
    shear, moment = sample_diagrams(beam, reactions, n_points=n_points)
    x = np.array([p.position for p in shear])
    V = np.array([p.value for p in shear])
    M = np.array([p.value for p in moment])
    return reactions, x, V, M


def test_stations_are_uniform_and_include_ends():
    _, x, _, _ = _run(Beam(length=7.0, supports=[Support("s1", 0.0, "fixed")]))
    assert len(x) == 100
    assert x[0] == 0.0
    assert x[-1] == 7.0
    assert np.allclose(np.diff(x), 7.0 / 99.0)


def test_right_wall_cantilever_point_load():
    beam = Beam(length=3.0, supports=[Support("s1", 3.0, "fixed")], loads=[PointLoad("p", 0.0, 5.0)])
    _, x, V, M = _run(beam)
    assert np.allclose(V, -5.0)
    assert np.allclose(M, -5.0 * x)
    assert np.isclose(M[0], 0.0)
    assert np.isclose(M[-1], -15.0)


def test_right_wall_cantilever_uniform_load():
    beam = Beam(
        length=5.0,
        supports=[Support("s1", 5.0, "fixed")],
        loads=[DistributedLoad("w", 0.0, 5.0, 20.0, 20.0)],
    )
    reactions, x, V, M = _run(beam)
    assert np.allclose(V, -20.0 * x)
    assert np.allclose(M, -10.0 * x ** 2)
    diag = build_V_M(beam, reactions)
    assert np.isclose(diag.eval_M(2.5), -62.5)


def test_left_wall_cantilever_closes_at_free_end():
    beam = Beam(
        length=6.0,
        supports=[Support("s1", 0.0, "fixed")],
        loads=[
            PointLoad("p", 6.0, 10.0),
            DistributedLoad("w", 1.0, 4.0, 2.0, 6.0),
            MomentLoad("m", 3.0, 7.0, "clockwise"),
        ],
    )
    reactions, _, V, M = _run(beam)
    # en el empotramiento: V = R, M = -M_R
    assert np.isclose(V[0], reactions[0].vertical_force)
    assert np.isclose(M[0], -reactions[0].moment)
    # extremo libre
    assert np.isclose(V[-1], 0.0, atol=1e-9)
    assert np.isclose(M[-1], 0.0, atol=1e-9)


def test_simply_supported_central_point_load():
    beam = Beam(
        length=10.0,
        supports=[Support("s1", 0.0, "pin"), Support("s2", 10.0, "roller")],
        loads=[PointLoad("p", 5.0, 20.0)],
    )
    reactions, x, V, M = _run(beam)
    assert np.allclose(V[x < 5.0], 10.0)
    assert np.allclose(V[x > 5.0], -10.0)
    assert np.isclose(M[0], 0.0)
    assert np.isclose(M[-1], 0.0, atol=1e-9)

    # 5.0 no es estación; el valor exacto sale del evaluador continuo
    diag = build_V_M(beam, reactions)
    assert np.isclose(diag.eval_M(5.0), 50.0)
    ext = find_extremum([DiagramPoint(float(a), float(b)) for a, b in zip(x, M)])
    assert abs(ext.position - 5.0) < 0.06
    assert 49.0 < ext.value <= 50.0


def test_support_at_right_end_reads_value_left_of_edge():
    beam = Beam(
        length=8.0,
        supports=[Support("s1", 0.0, "roller"), Support("s2", 8.0, "pin")],
        loads=[DistributedLoad("w", 0.0, 8.0, 3.0, 3.0)],
    )
    reactions, _, V, M = _run(beam)
    assert np.isclose(V[0], 12.0)
    assert np.isclose(V[-1], -12.0)
    assert np.isclose(M[-1], 0.0, atol=1e-9)
    diag = build_V_M(beam, reactions)
    assert np.isclose(diag.eval_V(8.0), -12.0)


def test_partial_trapezoid_integral_inside_span():
    beam = Beam(
        length=10.0,
        supports=[Support("s1", 0.0, "pin"), Support("s2", 10.0, "roller")],
        loads=[DistributedLoad("w", 2.0, 6.0, 0.0, 8.0)],
    )
    reactions = solve_reactions(beam)
    diag = build_V_M(beam, reactions)
    R1 = reactions[0].vertical_force
    # en x=4: w(4)=4, carga parcial = 0.5·2·4 = 4, centroide a 2/3 de [2, 4]
    assert np.isclose(diag.eval_V(4.0), R1 - 4.0)
    assert np.isclose(diag.eval_M(4.0), R1 * 4.0 - 4.0 * (4.0 - (2.0 + 2.0 * 2.0 / 3.0)))
    # antes del inicio no contribuye
    assert np.isclose(diag.eval_V(1.0), R1)


def test_moment_load_steps_moment_diagram():
    beam = Beam(
        length=10.0,
        supports=[Support("s1", 0.0, "pin"), Support("s2", 10.0, "roller")],
        loads=[MomentLoad("m", 5.0, 20.0, "counterclockwise")],
    )
    reactions = solve_reactions(beam)
    diag = build_V_M(beam, reactions)
    jump = diag.eval_M(5.0) - diag.eval_M(5.0 - 1e-9)
    assert np.isclose(jump, 20.0, atol=1e-6)
    assert np.isclose(diag.eval_M(10.0), 0.0, atol=1e-9)


def test_zero_length_distributed_matches_point_load():
    supports = [Support("s1", 0.0, "pin"), Support("s2", 8.0, "roller")]
    a = Beam(length=8.0, supports=supports, loads=[DistributedLoad("w", 3.0, 3.0, 12.0, 12.0)])
    b = Beam(length=8.0, supports=supports, loads=[PointLoad("p", 3.0, 12.0)])
    _, _, Va, Ma = _run(a)
    _, _, Vb, Mb = _run(b)
    assert np.array_equal(Va, Vb)
    assert np.array_equal(Ma, Mb)


def test_sampling_is_deterministic():
    beam = Beam(
        length=9.0,
        supports=[Support("s1", 1.0, "pin"), Support("s2", 8.0, "roller")],
        loads=[DistributedLoad("w", 0.0, 9.0, 3.0, 1.0), PointLoad("p", 4.5, 7.0)],
    )
    r = solve_reactions(beam)
    assert sample_diagrams(beam, r) == sample_diagrams(beam, r)


def test_find_extremum_first_on_ties_and_empty():
    pts = [DiagramPoint(0.0, 1.0), DiagramPoint(1.0, -3.0), DiagramPoint(2.0, 3.0)]
    ext = find_extremum(pts)
    assert ext.position == 1.0 and ext.value == -3.0
    assert find_extremum([]).value == 0.0


def test_interpolate_value_between_samples():
    pts = [DiagramPoint(0.0, 0.0), DiagramPoint(2.0, 4.0)]
    assert np.isclose(interpolate_value(pts, 0.5), 1.0)
    assert np.isclose(interpolate_value(pts, 5.0), 4.0)
