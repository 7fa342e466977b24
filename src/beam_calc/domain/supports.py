from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class SupportKind(str, Enum):
    FIXED = "Fixed"
    PIN = "Pin"
    ROLLER = "Roller"
    INTERNAL_HINGE = "InternalHinge"

    @property
    def unknowns(self) -> int:
        """Componentes de reacción incógnita que aporta el apoyo."""
        if self is SupportKind.FIXED:
            return 2
        if self is SupportKind.INTERNAL_HINGE:
            return 0
        return 1

    @property
    def constraints(self) -> int:
        """Ecuaciones extra de equilibrio (M=0 en la rótula)."""
        return 1 if self is SupportKind.INTERNAL_HINGE else 0


@dataclass(frozen=True)
class Support:
    """
    Apoyo en position (0 <= x <= L).
    kind puede venir como SupportKind o como texto del formulario ("Pin", "hinge", ...);
    se interpreta en la validación (ver labels.parse_support_kind).
    """
    position: float
    kind: Union[SupportKind, str] = SupportKind.PIN
