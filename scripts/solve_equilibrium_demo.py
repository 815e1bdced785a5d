from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import PointLoad, DistributedLoad, MomentLoad
from beam_statics.engine.equilibrium import solve_reactions
from beam_statics.engine.validation import validate_equilibrium


beam = Beam(
    length=12.0,
    supports=[
        Support("A", 1.5, "pin"),
        Support("B", 11.0, "roller"),
    ],
    loads=[
        # P1 = 20 kN down+ en x=2 m
        PointLoad("P1", position=2.0, magnitude=20.0),
        DistributedLoad("q", start_position=0.0, end_position=12.0, start_magnitude=3.0, end_magnitude=5.0),
        MomentLoad("M1", position=6.0, magnitude=15.0, direction="clockwise"),
    ],
)

reactions = solve_reactions(beam)
for r in reactions:
    print(f"{r.support_id}: x={r.position} m  V={r.vertical_force:.3f} kN  H={r.horizontal_force:.3f} kN")

eq = validate_equilibrium(beam, reactions)
print("residual Fy =", eq.sum_vertical_forces)
print("residual M0 =", eq.sum_moments_about_origin)
print("\n".join(eq.messages) or "equilibrio OK")
