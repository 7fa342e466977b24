from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from beam_calc.domain.loads import PointLoad, DistributedLoad, AppliedMoment
from beam_calc.domain.supports import Support


@dataclass(frozen=True)
class Beam:
    """
    Viga prismática: length (> 0) y rigidez a flexión EI constante (> 0).
    Las colecciones se guardan como tuplas (copia por valor de lo que entrega la UI).
    """
    length: float
    flexural_rigidity: float
    supports: Tuple[Support, ...] = ()
    point_loads: Tuple[PointLoad, ...] = ()
    dist_loads: Tuple[DistributedLoad, ...] = ()
    moments: Tuple[AppliedMoment, ...] = ()

    def __post_init__(self):
        # frozen: se reasigna vía object.__setattr__
        for name in ("supports", "point_loads", "dist_loads", "moments"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @property
    def EI(self) -> float:
        return float(self.flexural_rigidity)

    @classmethod
    def from_material(
        cls,
        length: float,
        E: float,
        I: float,
        *,
        supports: Iterable[Support] = (),
        point_loads: Iterable[PointLoad] = (),
        dist_loads: Iterable[DistributedLoad] = (),
        moments: Iterable[AppliedMoment] = (),
    ) -> "Beam":
        return cls(
            length=float(length),
            flexural_rigidity=float(E) * float(I),
            supports=tuple(supports),
            point_loads=tuple(point_loads),
            dist_loads=tuple(dist_loads),
            moments=tuple(moments),
        )

    def with_loads(
        self,
        point_loads: Optional[Iterable[PointLoad]] = None,
        dist_loads: Optional[Iterable[DistributedLoad]] = None,
        moments: Optional[Iterable[AppliedMoment]] = None,
    ) -> "Beam":
        """Copia con otras cargas; mismos apoyos, largo y rigidez."""
        return Beam(
            length=self.length,
            flexural_rigidity=self.flexural_rigidity,
            supports=self.supports,
            point_loads=tuple(point_loads) if point_loads is not None else self.point_loads,
            dist_loads=tuple(dist_loads) if dist_loads is not None else self.dist_loads,
            moments=tuple(moments) if moments is not None else self.moments,
        )
