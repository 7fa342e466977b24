from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.supports import Support, SupportKind
from beam_calc.engine.equilibrium import solve_reactions
from beam_calc.services.report import format_reactions


# Viga Gerber: empotrada en 0, rótula en 6, rodillo en 10
L = 10.0
supports = [
    Support(position=0.0, kind=SupportKind.FIXED),
    Support(position=6.0, kind="internal hinge"),
    Support(position=10.0, kind="Roller"),
]

res = solve_reactions(
    supports,
    point_loads=[
        PointLoad(position=3.0, magnitude=-20.0),                           # kN, + arriba
        PointLoad(position=8.0, magnitude=-10.0, angle=30.0, inclined=True),
    ],
    dist_loads=[DistributedLoad(start=6.0, end=10.0, start_mag=-5.0, end_mag=-2.0)],
    moments=[AppliedMoment(position=4.0, magnitude=15.0)],                  # + horario
    length=L,
)

if not res.ok:
    print("Falla:", res)
else:
    print("\n".join(format_reactions(res)))
    print("residual Fy =", res.residual_Fy)
    print("residual M0 =", res.residual_M0)
    print("\n".join(res.notes))
