from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisSettings:
    resolution: int = 100

    # Tolerancias
    position_tol: float = 1e-9
    singular_cond: float = 1e10     # cond(A) con filas de momento escaladas por 1/L
    residual_tol: float = 1e-6      # relativo, solo para notas

    # Carga unitaria: >1 => ThreadPoolExecutor
    workers: int = 1


DEFAULT_SETTINGS = AnalysisSettings()
