from __future__ import annotations

import numpy as np

from beam_calc.domain.results import AnalysisError, FailureKind


def deflect(
    x: np.ndarray,
    real_moment: np.ndarray,
    unit_matrix: np.ndarray,
    length: float,
    EI: float,
) -> np.ndarray:
    """
    Trabajo virtual (Maxwell-Mohr):
        δ_i = (1/EI) ∫_0^L M(x)·m_i(x) dx

    M: momento real sobre la grilla, m_i: fila i de la matriz de carga unitaria.
    δ + arriba (misma convención que la carga unitaria). Error de discretización O(Δx²).
    """
    x = np.asarray(x, dtype=float)
    M = np.asarray(real_moment, dtype=float)
    m = np.asarray(unit_matrix, dtype=float)

    n = x.size
    if M.shape != (n,) or m.shape != (n, n):
        raise AnalysisError(
            FailureKind.INVALID_GEOMETRY,
            f"Dimensiones incompatibles: x={x.shape}, M={M.shape}, matriz={m.shape}.",
        )
    if n < 2 or not np.isclose(x[-1] - x[0], float(length)):
        raise AnalysisError(FailureKind.INVALID_GEOMETRY, f"La grilla no cubre [0, {float(length):g}].")
    if not EI > 0.0:
        raise AnalysisError(FailureKind.INVALID_GEOMETRY, f"Rigidez EI inválida: {EI!r}.")

    # regla del trapecio compuesta, una integral por fila
    return np.trapezoid(m * M[None, :], x, axis=1) / float(EI)


def slope_from_deflection(x: np.ndarray, deflection: np.ndarray) -> np.ndarray:
    # diferencias centrales (laterales en los extremos)
    return np.gradient(np.asarray(deflection, dtype=float), np.asarray(x, dtype=float))
