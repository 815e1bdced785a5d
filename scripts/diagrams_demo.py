from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import PointLoad, DistributedLoad, MomentLoad
from beam_statics.engine.diagrams import build_V_M
from beam_statics.engine.equilibrium import solve_reactions

beam = Beam(
    length=10.0,
    supports=[Support("Rp1", 0.0, "fixed")],
    loads=[
        PointLoad("P1", position=2.0, magnitude=10.0),                 # down+
        DistributedLoad("q", 0.0, 10.0, 0.5, 0.5),                     # down+
        MomentLoad("M1", position=5.0, magnitude=20.0),                # CCW+
    ],
)

reactions = solve_reactions(beam)
diag = build_V_M(beam, reactions)

x, V, M = diag.sample(n_points=101)
print("V(0) =", diag.eval_V(0))
print("M(0) =", diag.eval_M(0))
print("V(L) =", diag.eval_V(beam.length))
print("M(L) =", diag.eval_M(beam.length))
print("M(8) =", diag.eval_M(8.0))
