from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from beam_calc.domain.results import AnalysisResult, Diagram
from beam_calc.sections.properties import SectionProperties

ArrayLike = Union[float, np.ndarray]


def bending_stress(M: ArrayLike, section: SectionProperties) -> np.ndarray:
    """σ_max = |M|·c/I (fibra extrema)"""
    return np.abs(np.asarray(M, dtype=float)) * section.c_max / section.I


def shear_stress(V: ArrayLike, section: SectionProperties) -> np.ndarray:
    """τ_max = |V|·Q/(I·t) en el eje neutro"""
    return np.abs(np.asarray(V, dtype=float)) * section.Q_max / (section.I * section.thickness)


def stress_diagrams(result: AnalysisResult, section: SectionProperties) -> Tuple[Diagram, Diagram]:
    """(σ_max(x), τ_max(x)) sobre la misma grilla que V y M."""
    x = result.x
    sigma = bending_stress(result.bending_moment.values, section)
    tau = shear_stress(result.shear.values, section)
    return Diagram(x=x, values=sigma), Diagram(x=x, values=tau)


def stress_through_depth(
    section: SectionProperties,
    M: float,
    V: float,
    n_points: int = 21,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Distribución en la altura de la sección (y desde el eje neutro, + arriba):
      σ(y) = -M·y/I   (M + flexión positiva => compresión arriba, σ<0)
      τ(y) = V·Q(y)/(I·b(y))
    """
    if section.kind == "custom":
        raise ValueError("Sección 'custom': sin geometría para la distribución en altura.")
    if n_points < 2:
        raise ValueError(f"n_points inválido: {n_points} (>= 2).")

    ybar = section.centroid_height
    y_base = np.linspace(0.0, section.height, int(n_points))
    y = y_base - ybar

    sigma = -float(M) * y / section.I

    tau = np.zeros_like(y)
    for k, yb in enumerate(y_base):
        b = section.width_at(float(yb))
        if b > 0.0:
            tau[k] = abs(float(V)) * section.Q_at(float(yb)) / (section.I * b)

    return y, sigma, tau


@dataclass(frozen=True)
class FlexCheck:
    sigma_max: float
    W: float
    W_req: float
    FS: float


def flex_check(section: SectionProperties, M: float, sigma_adm: float) -> FlexCheck:
    """
    Verificación elástica a flexión:
      σ = |M|/W,  W_req = |M|/σadm,  FS = σadm/σ
    """
    if not sigma_adm > 0.0:
        raise ValueError(f"σadm inválida: {sigma_adm!r}")
    W = section.W
    sigma = abs(float(M)) / W
    return FlexCheck(
        sigma_max=sigma,
        W=W,
        W_req=abs(float(M)) / float(sigma_adm),
        FS=float("inf") if sigma == 0.0 else float(sigma_adm) / sigma,
    )
