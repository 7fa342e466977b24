# path: tests/test_equilibrium.py
import pytest

from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.results import AnalysisFailure, FailureKind, ReactionSet
from beam_calc.domain.supports import Support, SupportKind
from beam_calc.engine.equilibrium import solve_reactions, solve_reactions_or_raise
from beam_calc.domain.results import AnalysisError


def _simply_supported(L=10.0):
    return [Support(0.0, SupportKind.PIN), Support(L, SupportKind.ROLLER)]


def test_simply_supported_midspan_point_load():
    res = solve_reactions(_simply_supported(), [PointLoad(5.0, -10.0)], [], [], 10.0)
    assert isinstance(res, ReactionSet)
    assert res.at(0.0).force == pytest.approx(5.0)
    assert res.at(10.0).force == pytest.approx(5.0)
    assert res.residual_Fy == pytest.approx(0.0, abs=1e-9)
    assert res.residual_M0 == pytest.approx(0.0, abs=1e-9)


def test_cantilever_tip_load():
    res = solve_reactions([Support(0.0, SupportKind.FIXED)], [PointLoad(4.0, -10.0)], [], [], 4.0)
    r = res.at(0.0)
    assert r.force == pytest.approx(10.0)
    # + horario; el empotramiento produce momento negativo (hogging) en M(0)
    assert r.moment == pytest.approx(-40.0)
    assert abs(r.moment) == pytest.approx(10.0 * 4.0)


def test_support_kind_given_as_text():
    supports = [Support(0.0, "pinned"), Support(10.0, "ROLLER")]
    res = solve_reactions(supports, [PointLoad(2.0, -10.0)], [], [], 10.0)
    assert res.ok
    assert res.at(0.0).force == pytest.approx(8.0)
    assert res.at(10.0).force == pytest.approx(2.0)


def test_inclined_load_uses_vertical_component():
    load = PointLoad(5.0, -10.0, angle=60.0, inclined=True)
    res = solve_reactions(_simply_supported(), [load], [], [], 10.0)
    assert res.at(0.0).force == pytest.approx(2.5)
    assert res.at(10.0).force == pytest.approx(2.5)
    assert any("inclinada" in n for n in res.notes)


def test_inclined_flag_off_ignores_angle():
    load = PointLoad(5.0, -10.0, angle=60.0, inclined=False)
    res = solve_reactions(_simply_supported(), [load], [], [], 10.0)
    assert res.total_force == pytest.approx(10.0)


def test_trapezoidal_load_resultant_at_centroid():
    d = DistributedLoad(0.0, 3.0, 0.0, -6.0)
    assert d.resultant == pytest.approx(-9.0)
    assert d.centroid == pytest.approx(2.0)

    res = solve_reactions(_simply_supported(3.0), [], [d], [], 3.0)
    assert res.at(0.0).force == pytest.approx(3.0)
    assert res.at(3.0).force == pytest.approx(6.0)


def test_self_cancelling_distributed_load_centroid_is_midpoint():
    d = DistributedLoad(2.0, 4.0, -3.0, 3.0)
    assert d.resultant == pytest.approx(0.0)
    assert d.centroid == pytest.approx(3.0)


def test_applied_moment_sign_convention():
    # + horario a mitad de luz: reacciones forman un par antihorario
    res = solve_reactions(_simply_supported(), [], [], [AppliedMoment(5.0, 20.0)], 10.0)
    assert res.at(0.0).force == pytest.approx(-2.0)
    assert res.at(10.0).force == pytest.approx(2.0)


def test_gerber_beam_with_internal_hinge():
    supports = [
        Support(0.0, SupportKind.FIXED),
        Support(6.0, SupportKind.INTERNAL_HINGE),
        Support(10.0, SupportKind.ROLLER),
    ]
    udl = DistributedLoad(0.0, 10.0, -2.0, -2.0)
    res = solve_reactions(supports, [], [udl], [], 10.0)

    assert res.at(10.0).force == pytest.approx(4.0)
    assert res.at(0.0).force == pytest.approx(16.0)
    assert res.at(0.0).moment == pytest.approx(-60.0)

    hinge = res.at(6.0)
    assert hinge.kind is SupportKind.INTERNAL_HINGE
    assert hinge.force == 0.0 and hinge.moment == 0.0
    assert [x for x, _ in res.forces] == [0.0, 10.0]
    assert [r.position for r in res.for_kind(SupportKind.INTERNAL_HINGE)] == [6.0]
    assert res.for_kind(SupportKind.PIN) == []
    assert res.total_force == pytest.approx(20.0)


def test_residuals_vanish_for_mixed_loading():
    supports = [
        Support(0.0, SupportKind.FIXED),
        Support(6.0, "internal hinge"),
        Support(10.0, SupportKind.ROLLER),
    ]
    point_loads = [
        PointLoad(3.0, -20.0),
        PointLoad(8.0, -10.0, angle=30.0, inclined=True),
    ]
    dist_loads = [DistributedLoad(4.0, 9.0, -5.0, -2.0)]
    moments = [AppliedMoment(2.0, 15.0), AppliedMoment(7.5, -4.0)]

    res = solve_reactions(supports, point_loads, dist_loads, moments, 10.0)
    assert res.ok
    scale = 1.0 + sum(abs(r.force) for r in res.reactions)
    assert abs(res.residual_Fy) < 1e-9 * scale
    assert abs(res.residual_M0) < 1e-9 * scale * 10.0

    # momento respecto de otro punto de referencia (x = 7)
    xr = 7.0
    Mr = 0.0
    for r in res.reactions:
        Mr += r.force * (r.position - xr) - r.moment
    for p in point_loads:
        Mr += p.vertical * (p.position - xr)
    for d in dist_loads:
        Mr += d.resultant * (d.centroid - xr)
    for m in moments:
        Mr -= m.magnitude
    assert Mr == pytest.approx(0.0, abs=1e-8 * scale * 10.0)


def test_no_supports_is_unstable():
    res = solve_reactions([], [PointLoad(5.0, -10.0)], [], [], 10.0)
    assert isinstance(res, AnalysisFailure)
    assert res.kind is FailureKind.UNSTABLE
    assert not res.ok
    assert res.message


def test_single_pin_is_unstable():
    res = solve_reactions([Support(0.0, SupportKind.PIN)], [], [], [], 10.0)
    assert res.kind is FailureKind.UNSTABLE


def test_three_simple_supports_are_indeterminate():
    supports = [Support(0.0, "Pin"), Support(5.0, "Roller"), Support(10.0, "Roller")]
    res = solve_reactions(supports, [PointLoad(2.0, -1.0)], [], [], 10.0)
    assert res.kind is FailureKind.INDETERMINATE


def test_propped_cantilever_is_indeterminate():
    supports = [Support(0.0, "Fixed"), Support(10.0, "Roller")]
    res = solve_reactions(supports, [], [], [], 10.0)
    assert res.kind is FailureKind.INDETERMINATE


def test_unsupported_segment_behind_hinge_is_singular():
    # tramo 5..10 sin apoyo: la cuenta da 3 = 3 pero el sistema es singular
    supports = [Support(0.0, "Fixed"), Support(2.0, "Roller"), Support(5.0, "hinge")]
    res = solve_reactions(supports, [PointLoad(8.0, -1.0)], [], [], 10.0)
    assert res.kind is FailureKind.SINGULAR


@pytest.mark.parametrize(
    "supports",
    [
        [Support(0.0, "Pin"), Support(0.0, "Roller")],
        [Support(-1.0, "Pin"), Support(10.0, "Roller")],
        [Support(0.0, "Pin"), Support(10.5, "Roller")],
        [Support(0.0, "Pin"), Support(10.0, "magnet")],
        [Support(0.0, "Fixed"), Support(10.0, "hinge")],
    ],
)
def test_invalid_geometry(supports):
    res = solve_reactions(supports, [], [], [], 10.0)
    assert res.kind is FailureKind.INVALID_GEOMETRY


def test_invalid_length_and_loads():
    ss = _simply_supported()
    assert solve_reactions(ss, [], [], [], 0.0).kind is FailureKind.INVALID_GEOMETRY
    assert solve_reactions(ss, [PointLoad(11.0, -1.0)], [], [], 10.0).kind is FailureKind.INVALID_GEOMETRY
    bad_dist = DistributedLoad(6.0, 4.0, -1.0, -1.0)
    assert solve_reactions(ss, [], [bad_dist], [], 10.0).kind is FailureKind.INVALID_GEOMETRY
    nan_load = PointLoad(5.0, float("nan"))
    assert solve_reactions(ss, [nan_load], [], [], 10.0).kind is FailureKind.INVALID_GEOMETRY


def test_or_raise_variant_raises_analysis_error():
    with pytest.raises(AnalysisError) as exc:
        solve_reactions_or_raise([], [], [], [], 10.0)
    assert exc.value.kind is FailureKind.UNSTABLE
    assert isinstance(exc.value, ValueError)
