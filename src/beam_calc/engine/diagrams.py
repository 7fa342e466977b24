from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from beam_calc.domain.cases import NormalizedCase
from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.results import Diagram, ReactionSet
from beam_calc.domain.settings import AnalysisSettings, DEFAULT_SETTINGS
from beam_calc.domain.supports import SupportKind
from beam_calc.engine.normalize import check_resolution, normalize_inputs, sample_grid


@dataclass(frozen=True)
class VMDiagram:
    """
    Diagrama V(x) y M(x) basado en superposición (cortando por la izquierda).

    Convención interna:
    - Fuerzas + arriba (reacciones y cargas puntuales, componente vertical)
    - Distribuida trapezoidal w(x) + arriba (DistributedLoad.shear_upto / moment_about)
    - Momento puntual (aplicado o reacción de empotramiento) + horario => salto + en M(x)

    En una discontinuidad se reporta el valor a la derecha del salto (x >= xi - tol).
    tol es el mismo position_tol que usa el equilibrio para las rótulas.
    """
    length: float
    tol: float

    # cargas internas
    pf_x: np.ndarray          # posiciones
    pf_Fy: np.ndarray         # Fy (+ arriba)

    dists: Tuple[DistributedLoad, ...]

    pm_x: np.ndarray          # posición
    pm_M: np.ndarray          # M (+ horario)

    def eval_V(self, x: float) -> float:
        return float(self._eval_V_array(np.asarray([x], dtype=float))[0])

    def eval_M(self, x: float) -> float:
        return float(self._eval_M_array(np.asarray([x], dtype=float))[0])

    # -------------------------
    # Evaluadores vectorizados
    # -------------------------
    def _eval_V_array(self, x: np.ndarray) -> np.ndarray:
        V = np.zeros_like(x, dtype=float)

        # puntuales: V += Fy * H(x-xi)
        if self.pf_x.size:
            H = (x[:, None] >= self.pf_x[None, :] - self.tol).astype(float)
            V += H @ self.pf_Fy

        # distribuidas: V += ∫_a^{min(x,b)} w
        for dl in self.dists:
            V += dl.shear_upto(x)

        return V

    def _eval_M_array(self, x: np.ndarray) -> np.ndarray:
        M = np.zeros_like(x, dtype=float)

        # puntuales: M += Fy*(x-xi)*H(x-xi)
        if self.pf_x.size:
            dx = (x[:, None] - self.pf_x[None, :])
            H = (dx >= 0.0).astype(float)
            M += np.sum(self.pf_Fy[None, :] * dx * H, axis=1)

        # distribuidas: M += ∫_a^{min(x,b)} w(ξ)(x-ξ) dξ
        for dl in self.dists:
            M += dl.moment_about(x)

        # momentos puntuales: M += M0 * H(x-xk)
        if self.pm_x.size:
            Hm = (x[:, None] >= self.pm_x[None, :] - self.tol).astype(float)
            M += Hm @ self.pm_M

        return M

    def sample(self, resolution: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(x, V, M) sobre la grilla uniforme de resolution+1 puntos."""
        x = sample_grid(self.length, resolution)
        return x, self._eval_V_array(x), self._eval_M_array(x)


def _reaction_terms(reactions: ReactionSet) -> Tuple[List[Tuple[float, float]], List[Tuple[float, float]]]:
    forces: List[Tuple[float, float]] = []
    moms: List[Tuple[float, float]] = []
    for r in reactions.reactions:
        if r.kind is SupportKind.INTERNAL_HINGE:
            continue
        forces.append((r.position, r.force))
        if r.kind is SupportKind.FIXED:
            moms.append((r.position, r.moment))
    return forces, moms


def build_V_M_case(
    case: NormalizedCase,
    reactions: ReactionSet,
    tol: float = DEFAULT_SETTINGS.position_tol,
) -> VMDiagram:
    """
    Construye el diagrama con las MISMAS cargas normalizadas que usó el equilibrio,
    más las reacciones como fuerzas / momentos puntuales.
    """
    r_forces, r_moms = _reaction_terms(reactions)
    forces = list(case.point_forces) + r_forces
    moms = list(case.moments) + r_moms

    return VMDiagram(
        length=float(case.length),
        tol=float(tol),
        pf_x=np.array([x for x, _ in forces], dtype=float),
        pf_Fy=np.array([f for _, f in forces], dtype=float),
        dists=tuple(case.dist_loads),
        pm_x=np.array([x for x, _ in moms], dtype=float),
        pm_M=np.array([m for _, m in moms], dtype=float),
    )


def build_V_M(
    reactions: ReactionSet,
    point_loads: Iterable[PointLoad],
    dist_loads: Iterable[DistributedLoad],
    moments: Iterable[AppliedMoment],
    length: float,
    settings: Optional[AnalysisSettings] = None,
) -> VMDiagram:
    settings = settings or DEFAULT_SETTINGS
    case = normalize_inputs([], point_loads, dist_loads, moments, length, tol=settings.position_tol)
    return build_V_M_case(case, reactions, tol=settings.position_tol)


def diagrams(
    reactions: ReactionSet,
    point_loads: Iterable[PointLoad],
    dist_loads: Iterable[DistributedLoad],
    moments: Iterable[AppliedMoment],
    length: float,
    resolution: int,
    settings: Optional[AnalysisSettings] = None,
) -> Tuple[Diagram, Diagram]:
    """(shear, bending_moment) sobre la grilla uniforme [0, L]."""
    resolution = check_resolution(resolution)
    vm = build_V_M(reactions, point_loads, dist_loads, moments, length, settings)
    x, V, M = vm.sample(resolution)
    return Diagram(x=x, values=V), Diagram(x=x, values=M)


def moment_only(
    case: NormalizedCase,
    reactions: ReactionSet,
    x: np.ndarray,
    tol: float = DEFAULT_SETTINGS.position_tol,
) -> np.ndarray:
    """Solo M(x) sobre una grilla dada (pasada de carga unitaria)."""
    return build_V_M_case(case, reactions, tol)._eval_M_array(np.asarray(x, dtype=float))
