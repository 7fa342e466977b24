# path: tests/test_pipeline.py
import logging

import numpy as np
import pytest

from beam_calc.domain.beam import Beam
from beam_calc.domain.labels import parse_support_kind
from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.results import AnalysisError, AnalysisFailure, AnalysisResult, FailureKind
from beam_calc.domain.settings import AnalysisSettings
from beam_calc.domain.supports import Support, SupportKind
from beam_calc.engine.normalize import normalize_inputs, validate_beam
from beam_calc.engine.pipeline import analyze


def _beam(**kw):
    base = dict(
        length=10.0,
        flexural_rigidity=2e8 * 1e-4,
        supports=(Support(0.0, "Pin"), Support(10.0, "Roller")),
        point_loads=(PointLoad(5.0, -10.0),),
    )
    base.update(kw)
    return Beam(**base)


def test_analyze_returns_aligned_diagrams():
    res = analyze(_beam(), 50)
    assert isinstance(res, AnalysisResult)
    assert res.ok
    for d in (res.shear, res.bending_moment, res.deflection):
        assert len(d) == 51
        np.testing.assert_array_equal(d.x, res.x)
    assert res.x[0] == 0.0 and res.x[-1] == pytest.approx(10.0)


def test_default_resolution_comes_from_settings():
    assert len(analyze(_beam()).x) == 101
    assert len(analyze(_beam(), settings=AnalysisSettings(resolution=10)).x) == 11


def test_analyze_failure_values():
    res = analyze(_beam(supports=()))
    assert isinstance(res, AnalysisFailure)
    assert res.kind is FailureKind.UNSTABLE
    assert "Unstable" in str(res)

    three = (Support(0.0, "Pin"), Support(5.0, "Roller"), Support(10.0, "Roller"))
    assert analyze(_beam(supports=three)).kind is FailureKind.INDETERMINATE

    assert analyze(_beam(flexural_rigidity=0.0)).kind is FailureKind.INVALID_GEOMETRY
    assert analyze(_beam(), resolution=1).kind is FailureKind.INVALID_GEOMETRY
    assert analyze(_beam(length=-1.0)).kind is FailureKind.INVALID_GEOMETRY


def test_analyze_logs_failure(caplog):
    with caplog.at_level(logging.WARNING, logger="beam_calc"):
        analyze(_beam(supports=()))
    assert any("Unstable" in rec.getMessage() for rec in caplog.records)


def test_analyze_is_pure():
    beam = _beam(
        dist_loads=(DistributedLoad(0.0, 4.0, -1.0, -3.0),),
        moments=(AppliedMoment(7.0, 5.0),),
    )
    a = analyze(beam, 40)
    b = analyze(beam, 40)
    np.testing.assert_array_equal(a.deflection.values, b.deflection.values)
    np.testing.assert_array_equal(a.bending_moment.values, b.bending_moment.values)


def test_beam_owns_its_collections():
    loads = [PointLoad(5.0, -10.0)]
    beam = _beam(point_loads=loads)
    loads.append(PointLoad(2.0, -100.0))
    assert len(beam.point_loads) == 1
    assert isinstance(beam.supports, tuple)


def test_beam_from_material():
    beam = Beam.from_material(10.0, 2e8, 1e-4, supports=[Support(0.0, "Fixed")])
    assert beam.EI == pytest.approx(2e4)
    other = beam.with_loads(point_loads=[PointLoad(10.0, 1.0)])
    assert other.supports == beam.supports
    assert len(other.point_loads) == 1 and len(beam.point_loads) == 0


@pytest.mark.parametrize(
    "text,kind",
    [
        ("Fixed", SupportKind.FIXED),
        ("pinned", SupportKind.PIN),
        ("ROLLER", SupportKind.ROLLER),
        ("Internal Hinge", SupportKind.INTERNAL_HINGE),
        ("internal_hinge", SupportKind.INTERNAL_HINGE),
        (SupportKind.PIN, SupportKind.PIN),
    ],
)
def test_parse_support_kind(text, kind):
    assert parse_support_kind(text) is kind


def test_parse_support_kind_rejects_unknown():
    with pytest.raises(AnalysisError) as exc:
        parse_support_kind("slider")
    assert exc.value.kind is FailureKind.INVALID_GEOMETRY


def test_normalize_sorts_supports_and_snaps_to_edges():
    case = normalize_inputs(
        [Support(10.0 + 1e-12, "Roller"), Support(0.0, "Pin")],
        [PointLoad(-1e-12, -1.0)], [], [], 10.0,
    )
    assert [x for x, _ in case.supports] == [0.0, 10.0]
    assert case.point_forces[0][0] == 0.0
    assert case.n_unknowns == 2 and case.n_equations == 2


def test_validate_beam_rejects_non_finite():
    with pytest.raises(AnalysisError):
        validate_beam(_beam(flexural_rigidity=float("inf")), 10)
    with pytest.raises(AnalysisError):
        validate_beam(_beam(), 2.5)
