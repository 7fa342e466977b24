from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from beam_calc.domain.loads import DistributedLoad
from beam_calc.domain.supports import SupportKind


@dataclass(frozen=True)
class NormalizedCase:
    """
    Entrada ya validada para el motor:
      - supports ordenados por x, kind ya interpretado
      - point_forces como (x, Fy) con la componente vertical de las inclinadas
      - dist_loads tal cual (se integran exactos en diagramas)
      - moments como (x, M) (+ horario)
    """
    length: float
    supports: List[Tuple[float, SupportKind]]
    point_forces: List[Tuple[float, float]]
    dist_loads: List[DistributedLoad]
    moments: List[Tuple[float, float]]
    notes: List[str]

    @property
    def n_unknowns(self) -> int:
        return sum(k.unknowns for _, k in self.supports)

    @property
    def n_equations(self) -> int:
        return 2 + sum(k.constraints for _, k in self.supports)

    @property
    def hinges(self) -> List[float]:
        return [x for x, k in self.supports if k is SupportKind.INTERNAL_HINGE]
