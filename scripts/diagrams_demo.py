from beam_calc.domain.loads import PointLoad, DistributedLoad
from beam_calc.domain.supports import Support, SupportKind
from beam_calc.engine.diagrams import diagrams
from beam_calc.engine.equilibrium import solve_reactions

L = 8.0
supports = [Support(0.0, SupportKind.PIN), Support(6.0, SupportKind.ROLLER)]   # voladizo de 2 m
point_loads = [PointLoad(position=8.0, magnitude=-10.0)]
dist_loads = [DistributedLoad(start=0.0, end=6.0, start_mag=-4.0, end_mag=-4.0)]

reactions = solve_reactions(supports, point_loads, dist_loads, [], L)
shear, moment = diagrams(reactions, point_loads, dist_loads, [], L, resolution=80)

(x_max, M_max), (x_min, M_min) = moment.extrema()
print("V(0) =", shear.values[0])
print("V(L) =", shear.values[-1])
print(f"M max = {M_max:g} en x={x_max:g}")
print(f"M min = {M_min:g} en x={x_min:g}")
