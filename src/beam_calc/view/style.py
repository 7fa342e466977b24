from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class DiagramStyle:
    line_lw: float = 1.5
    zero_lw: float = 1.0
    fill_alpha: float = 0.15

    shear_color: str = "tab:blue"
    moment_color: str = "tab:red"
    deflection_color: str = "tab:green"

    # Márgenes / zoom vertical
    y_pad: float = 1.15
    y_zoom: float = 1.0

    # Etiquetas de extremos
    label_min_frac: float = 0.01    # no etiquetar |y| < 1% del máximo
    label_min_dx_frac: float = 0.03
    font_size: int = 8

    # Unidades mostradas (solo texto, sin conversión)
    length_unit: str = "m"
    force_unit: str = "kN"
    moment_unit: str = "kN·m"
    deflection_unit: str = "m"
