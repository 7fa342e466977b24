from __future__ import annotations

import re
from typing import Dict, Union

from beam_calc.domain.results import AnalysisError, FailureKind
from beam_calc.domain.supports import SupportKind

# Nombres aceptados desde formularios / archivos (ya normalizados, ver _norm)
SUPPORT_KIND_ALIASES: Dict[str, SupportKind] = {
    "fixed": SupportKind.FIXED,
    "empotramiento": SupportKind.FIXED,
    "clamped": SupportKind.FIXED,
    "pin": SupportKind.PIN,
    "pinned": SupportKind.PIN,
    "roller": SupportKind.ROLLER,
    "internalhinge": SupportKind.INTERNAL_HINGE,
    "hinge": SupportKind.INTERNAL_HINGE,
    "rotula": SupportKind.INTERNAL_HINGE,
}


SEP_RE = re.compile(r"[\s_\-]+")


def _norm(text: str) -> str:
    return SEP_RE.sub("", (text or "").strip().lower())


def parse_support_kind(value: Union[SupportKind, str]) -> SupportKind:
    """
    Normaliza el tipo de apoyo:
      - "Pin", "pinned", "PIN" => PIN
      - "Internal Hinge", "internal_hinge", "hinge" => INTERNAL_HINGE
    Tipos desconocidos => AnalysisError(InvalidGeometry), sin default silencioso.
    """
    if isinstance(value, SupportKind):
        return value
    kind = SUPPORT_KIND_ALIASES.get(_norm(str(value)))
    if kind is None:
        raise AnalysisError(FailureKind.INVALID_GEOMETRY, f'Tipo de apoyo desconocido: "{value}".')
    return kind


def arrow_up_down(value: float) -> str:
    return "↓" if value < 0 else "↑"


def arrow_rotation(value: float) -> str:
    # + horario (misma convención que AppliedMoment)
    return "↻" if value > 0 else "↺"
