from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from beam_calc.domain.supports import SupportKind


class FailureKind(str, Enum):
    UNSTABLE = "Unstable"
    INDETERMINATE = "Indeterminate"
    INVALID_GEOMETRY = "InvalidGeometry"
    SINGULAR = "Singular"


class AnalysisError(ValueError):
    """
    Error interno del motor. Se convierte en AnalysisFailure en el borde
    (solve_reactions / analyze), nunca llega a la UI como excepción.
    """

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.kind = FailureKind(kind)
        self.message = message

    def to_failure(self) -> "AnalysisFailure":
        return AnalysisFailure(kind=self.kind, message=self.message)


@dataclass(frozen=True)
class AnalysisFailure:
    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Reaction:
    """
    Reacción resuelta en un apoyo.
    force: + arriba. moment: mismo sentido que AppliedMoment (+ horario).
    Para Pin/Roller y para las rótulas internas moment = 0.0 (informativo).
    """
    position: float
    kind: SupportKind
    force: float = 0.0
    moment: float = 0.0


@dataclass(frozen=True)
class ReactionSet:
    reactions: Tuple[Reaction, ...]

    residual_Fy: float = 0.0   # debería ~0
    residual_M0: float = 0.0   # debería ~0 (momento respecto a x=0)

    notes: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return True

    @property
    def forces(self) -> List[Tuple[float, float]]:
        return [(r.position, r.force) for r in self.reactions if r.kind is not SupportKind.INTERNAL_HINGE]

    @property
    def total_force(self) -> float:
        return float(sum(r.force for r in self.reactions))

    def for_kind(self, kind: SupportKind) -> List[Reaction]:
        return [r for r in self.reactions if r.kind is kind]

    def at(self, position: float, tol: float = 1e-9) -> Optional[Reaction]:
        for r in self.reactions:
            if abs(r.position - position) <= tol:
                return r
        return None


@dataclass(frozen=True, eq=False)
class Diagram:
    """
    Muestras (x, valor) sobre la grilla uniforme [0, L] con resolution+1 puntos.
    Todos los diagramas de un mismo análisis comparten x.
    """
    x: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def max(self) -> float:
        return float(np.max(self.values))

    @property
    def min(self) -> float:
        return float(np.min(self.values))

    @property
    def abs_max(self) -> float:
        return float(np.max(np.abs(self.values)))

    def extrema(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """((x_max, max), (x_min, min))"""
        i_max = int(np.argmax(self.values))
        i_min = int(np.argmin(self.values))
        return (
            (float(self.x[i_max]), float(self.values[i_max])),
            (float(self.x[i_min]), float(self.values[i_min])),
        )

    def at(self, x: float) -> float:
        return float(np.interp(float(x), self.x, self.values))


@dataclass(frozen=True)
class AnalysisResult:
    reactions: ReactionSet
    shear: Diagram
    bending_moment: Diagram
    deflection: Diagram
    notes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return True

    @property
    def x(self) -> np.ndarray:
        return self.shear.x
