from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from beam_calc.domain.labels import arrow_rotation, arrow_up_down
from beam_calc.domain.results import AnalysisResult, ReactionSet
from beam_calc.domain.supports import SupportKind


@dataclass(frozen=True)
class ResultRow:
    x: float
    V: float
    M: float
    deflection: float


def results_table(result: AnalysisResult, step: float = 1.0) -> List[ResultRow]:
    """
    Tabla de resultados cada `step` unidades de longitud, más el extremo de la viga.
    Cada fila toma la muestra de la grilla más cercana (no interpola).
    """
    if not step > 0.0:
        raise ValueError(f"Paso de tabla inválido: {step!r} (debe ser > 0).")

    x = result.x
    L = float(x[-1])
    n_steps = int(np.floor(L / step + 1e-9))
    targets = [k * step for k in range(n_steps + 1)]
    if targets[-1] < L - 1e-6:
        targets.append(L)

    rows: List[ResultRow] = []
    for xt in targets:
        i = int(np.argmin(np.abs(x - xt)))
        rows.append(ResultRow(
            x=float(x[i]),
            V=float(result.shear.values[i]),
            M=float(result.bending_moment.values[i]),
            deflection=float(result.deflection.values[i]),
        ))
    return rows


def format_reactions(reactions: ReactionSet, decimals: int = 3) -> List[str]:
    """Líneas de texto: posición, tipo, fuerza (↑/↓) y momento (↻/↺) si es empotramiento."""
    lines: List[str] = []
    for r in reactions.reactions:
        if r.kind is SupportKind.INTERNAL_HINGE:
            lines.append(f"x={r.position:g}  {r.kind.value}: M=0")
            continue
        txt = f"x={r.position:g}  {r.kind.value}: R={abs(r.force):.{decimals}f} {arrow_up_down(r.force)}"
        if r.kind is SupportKind.FIXED:
            txt += f"  M={abs(r.moment):.{decimals}f} {arrow_rotation(r.moment)}"
        lines.append(txt)
    return lines
