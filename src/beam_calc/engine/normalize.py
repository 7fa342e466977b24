from __future__ import annotations

import math
from typing import Iterable, List, Tuple

import numpy as np

from beam_calc.domain.beam import Beam
from beam_calc.domain.cases import NormalizedCase
from beam_calc.domain.labels import parse_support_kind
from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.results import AnalysisError, FailureKind
from beam_calc.domain.supports import Support, SupportKind


def _invalid(msg: str) -> AnalysisError:
    return AnalysisError(FailureKind.INVALID_GEOMETRY, msg)


def _finite(*values: float) -> bool:
    try:
        return all(math.isfinite(float(v)) for v in values)
    except (TypeError, ValueError):
        return False


def _check_position(what: str, x: float, L: float, tol: float) -> float:
    if not _finite(x):
        raise _invalid(f"{what}: posición no numérica ({x!r}).")
    x = float(x)
    if x < -tol or x > L + tol:
        raise _invalid(f"{what}: x={x:g} fuera de la viga [0, {L:g}].")
    # pegar a los bordes lo que cae dentro de la tolerancia
    return min(max(x, 0.0), L)


def check_length(length: float) -> float:
    if not _finite(length) or float(length) <= 0.0:
        raise _invalid(f"Longitud de viga inválida: {length!r} (debe ser > 0).")
    return float(length)


def check_resolution(resolution: int) -> int:
    try:
        n = int(resolution)
    except (TypeError, ValueError, OverflowError):
        n = None
    if isinstance(resolution, bool) or n is None or n != resolution or n < 2:
        raise _invalid(f"Resolución inválida: {resolution!r} (entero >= 2).")
    return n


def sample_grid(length: float, resolution: int) -> np.ndarray:
    """x_j = j·L/resolution, j = 0..resolution"""
    return np.linspace(0.0, float(length), int(resolution) + 1, dtype=float)


def normalize_inputs(
    supports: Iterable[Support],
    point_loads: Iterable[PointLoad],
    dist_loads: Iterable[DistributedLoad],
    moments: Iterable[AppliedMoment],
    length: float,
    tol: float = 1e-9,
) -> NormalizedCase:
    L = check_length(length)
    notes: List[str] = []

    # 1) Apoyos
    n_sup: List[Tuple[float, SupportKind]] = []
    for s in supports:
        kind = parse_support_kind(s.kind)
        x = _check_position(f"Apoyo {kind.value}", s.position, L, tol)
        if kind is SupportKind.INTERNAL_HINGE and (x <= tol or x >= L - tol):
            raise _invalid(f"Rótula interna en x={x:g}: debe estar dentro de (0, {L:g}), no en un extremo.")
        n_sup.append((x, kind))

    n_sup.sort(key=lambda xk: xk[0])
    for (x1, k1), (x2, k2) in zip(n_sup, n_sup[1:]):
        if abs(x2 - x1) <= tol:
            raise _invalid(f"Apoyos duplicados en x={x1:g} ({k1.value} / {k2.value}).")

    # 2) Puntuales (solo componente vertical; la horizontal no se modela)
    n_points: List[Tuple[float, float]] = []
    for p in point_loads:
        if not _finite(p.magnitude, p.angle):
            raise _invalid(f"Carga puntual en x={p.position!r}: magnitud/ángulo no numérico.")
        x = _check_position("Carga puntual", p.position, L, tol)
        Fy = p.vertical
        if p.inclined and abs(float(p.angle)) > 0.0:
            notes.append(
                f"Carga inclinada en x={x:g} ({float(p.angle):g}°): Fy={Fy:g}, componente horizontal ignorada."
            )
        n_points.append((x, Fy))

    # 3) Distribuidas
    n_dists: List[DistributedLoad] = []
    for d in dist_loads:
        if not _finite(d.start_mag, d.end_mag):
            raise _invalid(f"Distribuida [{d.start!r},{d.end!r}]: intensidad no numérica.")
        a = _check_position("Distribuida (inicio)", d.start, L, tol)
        b = _check_position("Distribuida (fin)", d.end, L, tol)
        if b <= a + tol:
            raise _invalid(f"Distribuida inválida: inicio={a:g} debe ser menor que fin={b:g}.")
        if (a, b) != (float(d.start), float(d.end)):
            d = DistributedLoad(start=a, end=b, start_mag=float(d.start_mag), end_mag=float(d.end_mag))
        n_dists.append(d)

    # 4) Momentos
    n_moms: List[Tuple[float, float]] = []
    for m in moments:
        if not _finite(m.magnitude):
            raise _invalid(f"Momento en x={m.position!r}: magnitud no numérica.")
        x = _check_position("Momento aplicado", m.position, L, tol)
        n_moms.append((x, float(m.magnitude)))

    return NormalizedCase(
        length=L,
        supports=n_sup,
        point_forces=n_points,
        dist_loads=n_dists,
        moments=n_moms,
        notes=notes,
    )


def validate_beam(beam: Beam, resolution: int, tol: float = 1e-9) -> NormalizedCase:
    """Chequea todos los invariantes de entrada; AnalysisError(InvalidGeometry) si falla alguno."""
    check_resolution(resolution)
    if not _finite(beam.flexural_rigidity) or float(beam.flexural_rigidity) <= 0.0:
        raise _invalid(f"Rigidez EI inválida: {beam.flexural_rigidity!r} (debe ser > 0).")
    return normalize_inputs(
        beam.supports, beam.point_loads, beam.dist_loads, beam.moments, beam.length, tol=tol
    )
