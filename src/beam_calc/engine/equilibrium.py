from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from beam_calc.domain.cases import NormalizedCase
from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.results import (
    AnalysisError, AnalysisFailure, FailureKind, Reaction, ReactionSet,
)
from beam_calc.domain.settings import AnalysisSettings, DEFAULT_SETTINGS
from beam_calc.domain.supports import Support, SupportKind
from beam_calc.engine.normalize import normalize_inputs

logger = logging.getLogger(__name__)


def _sum_known_contributions(case: NormalizedCase) -> Tuple[float, float]:
    """
    Devuelve:
      Fy_known: suma de fuerzas conocidas (+ arriba)
      M0_known: momento respecto a x=0 (antihorario +) de cargas conocidas
    Las distribuidas entran por su resultante en el baricentro del trapecio.
    Los momentos aplicados son + horario => restan en ΣM0.
    """
    Fy = 0.0
    M0 = 0.0

    for x, f in case.point_forces:
        Fy += f
        M0 += f * x

    for dl in case.dist_loads:
        F_res = dl.resultant
        Fy += F_res
        M0 += F_res * dl.centroid

    for _, m in case.moments:
        M0 -= m

    return Fy, M0


def _left_moment_about(case: NormalizedCase, xh: float, tol: float) -> float:
    """
    M(xh) producido por las cargas conocidas a la izquierda de xh (flexión +).
    Las distribuidas que cruzan la rótula aportan solo su parte izquierda (exacta).
    Un momento aplicado justo en xh cuenta del lado izquierdo (mismo criterio
    que el diagrama: valor a la derecha del salto).
    """
    M = 0.0
    for x, f in case.point_forces:
        if x < xh - tol:
            M += f * (xh - x)
    for dl in case.dist_loads:
        M += float(dl.moment_about(xh))
    for x, m in case.moments:
        if x <= xh + tol:
            M += m
    return M


def _check_count(case: NormalizedCase) -> None:
    U = case.n_unknowns
    E = case.n_equations
    if U < E:
        if not [k for _, k in case.supports if k is not SupportKind.INTERNAL_HINGE]:
            msg = "Viga sin apoyos: mecanismo (inestable)."
        else:
            msg = f"Inestable: {U} incógnitas de reacción para {E} ecuaciones de equilibrio."
        raise AnalysisError(FailureKind.UNSTABLE, msg)
    if U > E:
        raise AnalysisError(
            FailureKind.INDETERMINATE,
            f"Hiperestático: {U} incógnitas de reacción para {E} ecuaciones (solo se resuelven vigas isostáticas).",
        )


def solve_case(case: NormalizedCase, settings: AnalysisSettings = DEFAULT_SETTINGS) -> ReactionSet:
    """
    Resuelve las reacciones de un caso ya normalizado.

    Incógnitas (en orden de x):
      Fixed  -> R (fuerza), MR (momento, + horario)
      Pin    -> R
      Roller -> R
    Ecuaciones:
      ΣFy = 0
      ΣM0 = 0  (respecto a x=0, antihorario +)
      M(x_h) = 0 por cada rótula, con lo que está a su izquierda
    Las filas de momento se escalan por 1/L antes de chequear cond(A).
    """
    _check_count(case)

    L = float(case.length)
    tol = float(settings.position_tol)

    # columnas: (índice de apoyo, "F" | "M")
    cols: List[Tuple[int, str]] = []
    for i, (_, kind) in enumerate(case.supports):
        if kind is SupportKind.INTERNAL_HINGE:
            continue
        cols.append((i, "F"))
        if kind is SupportKind.FIXED:
            cols.append((i, "M"))

    hinges = case.hinges
    n = len(cols)
    A = np.zeros((n, n), dtype=float)
    b = np.zeros(n, dtype=float)

    Fy_known, M0_known = _sum_known_contributions(case)

    # ΣFy = 0
    for c, (i, comp) in enumerate(cols):
        if comp == "F":
            A[0, c] = 1.0
    b[0] = -Fy_known

    # ΣM0 = 0
    for c, (i, comp) in enumerate(cols):
        x_i = case.supports[i][0]
        A[1, c] = x_i if comp == "F" else -1.0
    b[1] = -M0_known

    # Rótulas: M(x_h) = 0
    for r, xh in enumerate(hinges, start=2):
        for c, (i, comp) in enumerate(cols):
            x_i = case.supports[i][0]
            if x_i < xh - tol:
                A[r, c] = (xh - x_i) if comp == "F" else 1.0
        b[r] = -_left_moment_about(case, xh, tol)

    # escalado filas de momento (unidades de fuerza)
    scale = np.ones(n, dtype=float)
    scale[1:] = 1.0 / L
    As = A * scale[:, None]
    bs = b * scale

    cond = float(np.linalg.cond(As))
    if not np.isfinite(cond) or cond > float(settings.singular_cond):
        raise AnalysisError(
            FailureKind.SINGULAR,
            f"Sistema de equilibrio singular (cond={cond:.3g}): apoyos mal ubicados o alineados con las rótulas.",
        )

    try:
        sol = np.linalg.solve(As, bs)
    except np.linalg.LinAlgError as exc:
        raise AnalysisError(FailureKind.SINGULAR, f"Sistema de equilibrio singular: {exc}") from exc

    # Armar reacciones por apoyo
    forces = {}
    mom = {}
    for c, (i, comp) in enumerate(cols):
        if comp == "F":
            forces[i] = float(sol[c])
        else:
            mom[i] = float(sol[c])

    reactions: List[Reaction] = []
    for i, (x, kind) in enumerate(case.supports):
        reactions.append(Reaction(
            position=x,
            kind=kind,
            force=forces.get(i, 0.0),
            moment=mom.get(i, 0.0),
        ))

    # Residuales
    Fy_total = Fy_known + sum(r.force for r in reactions)
    M0_total = M0_known + sum(r.force * r.position - r.moment for r in reactions)

    notes: List[str] = list(case.notes)
    ref_F = max(1.0, abs(Fy_known), max((abs(r.force) for r in reactions), default=0.0))
    if abs(Fy_total) > settings.residual_tol * ref_F or abs(M0_total) > settings.residual_tol * ref_F * L:
        notes.append(f"ATENCIÓN: residuales de equilibrio altos (ΣFy={Fy_total:.3g}, ΣM0={M0_total:.3g}).")

    logger.debug(
        "Reacciones: %s | residual Fy=%.3g M0=%.3g",
        ", ".join(f"{r.kind.value}@{r.position:g}: R={r.force:g} M={r.moment:g}" for r in reactions),
        Fy_total, M0_total,
    )

    return ReactionSet(
        reactions=tuple(reactions),
        residual_Fy=Fy_total,
        residual_M0=M0_total,
        notes=tuple(notes),
    )


def solve_reactions_or_raise(
    supports: Iterable[Support],
    point_loads: Iterable[PointLoad],
    dist_loads: Iterable[DistributedLoad],
    moments: Iterable[AppliedMoment],
    length: float,
    settings: Optional[AnalysisSettings] = None,
) -> ReactionSet:
    settings = settings or DEFAULT_SETTINGS
    case = normalize_inputs(supports, point_loads, dist_loads, moments, length, tol=settings.position_tol)
    return solve_case(case, settings)


def solve_reactions(
    supports: Iterable[Support],
    point_loads: Iterable[PointLoad],
    dist_loads: Iterable[DistributedLoad],
    moments: Iterable[AppliedMoment],
    length: float,
    settings: Optional[AnalysisSettings] = None,
) -> Union[ReactionSet, AnalysisFailure]:
    """
    Equilibrio estático con rótulas internas.
    Nunca lanza por entradas inválidas: devuelve AnalysisFailure con el motivo.
    """
    try:
        return solve_reactions_or_raise(supports, point_loads, dist_loads, moments, length, settings)
    except AnalysisError as exc:
        logger.info("Equilibrio sin solución (%s): %s", exc.kind.value, exc.message)
        return exc.to_failure()
