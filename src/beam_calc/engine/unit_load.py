from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

import numpy as np

from beam_calc.domain.loads import PointLoad
from beam_calc.domain.settings import AnalysisSettings, DEFAULT_SETTINGS
from beam_calc.domain.supports import Support
from beam_calc.engine.diagrams import moment_only
from beam_calc.engine.equilibrium import solve_case
from beam_calc.engine.normalize import check_resolution, normalize_inputs, sample_grid

logger = logging.getLogger(__name__)


def _unit_row(
    supports: List[Support],
    length: float,
    x: np.ndarray,
    xi: float,
    settings: AnalysisSettings,
) -> np.ndarray:
    """M(x_j) para una carga unitaria (+ arriba) sola en xi."""
    case = normalize_inputs(supports, [PointLoad(position=float(xi), magnitude=1.0)], [], [], length,
                            tol=settings.position_tol)
    reactions = solve_case(case, settings)
    return moment_only(case, reactions, x, tol=settings.position_tol)


def unit_load_moments(
    supports: Iterable[Support],
    length: float,
    resolution: int,
    settings: Optional[AnalysisSettings] = None,
) -> np.ndarray:
    """
    Matriz (resolution+1) x (resolution+1):
      m[i, j] = M(x_j) por una carga unitaria ubicada en x_i, sin otras cargas.

    Una resolución de equilibrio por fila => O(resolution²) en total.
    Las filas son independientes: con settings.workers > 1 se reparten en un
    ThreadPoolExecutor. Si los apoyos no tienen solución lanza AnalysisError.
    """
    settings = settings or DEFAULT_SETTINGS
    resolution = check_resolution(resolution)
    supports = list(supports)
    x = sample_grid(length, resolution)

    def row(xi: float) -> np.ndarray:
        return _unit_row(supports, length, x, xi, settings)

    workers = int(settings.workers)
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            rows = list(pool.map(row, x))
    else:
        rows = [row(xi) for xi in x]

    logger.debug("Matriz de carga unitaria %dx%d (workers=%d)", len(rows), x.size, max(workers, 1))
    return np.vstack(rows)
