from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class PointLoad:
    """
    Carga puntual. magnitude: + arriba.
    angle en grados respecto de la vertical; solo se usa si inclined=True.
    """
    position: float
    magnitude: float
    angle: float = 0.0
    inclined: bool = False

    @property
    def vertical(self) -> float:
        if self.inclined:
            return float(self.magnitude) * math.cos(math.radians(float(self.angle)))
        return float(self.magnitude)


@dataclass(frozen=True)
class DistributedLoad:
    """
    Carga distribuida trapezoidal entre start y end (start < end).
    start_mag / end_mag en fuerza/longitud, + arriba, interpolación lineal.

    Para equilibrio se reemplaza por la resultante en el baricentro del trapecio;
    para los diagramas se integra exacta (shear_upto / moment_about).
    """
    start: float
    end: float
    start_mag: float
    end_mag: float

    @property
    def width(self) -> float:
        return float(self.end) - float(self.start)

    @property
    def slope(self) -> float:
        return (float(self.end_mag) - float(self.start_mag)) / self.width

    @property
    def resultant(self) -> float:
        return 0.5 * (float(self.start_mag) + float(self.end_mag)) * self.width

    @property
    def centroid(self) -> float:
        w1 = float(self.start_mag)
        w2 = float(self.end_mag)
        if abs(w1 + w2) < 1e-15:
            return 0.5 * (float(self.start) + float(self.end))
        return float(self.start) + self.width * (w1 + 2.0 * w2) / (3.0 * (w1 + w2))

    def intensity_at(self, x: float) -> float:
        if x < self.start or x > self.end:
            return 0.0
        return float(self.start_mag) + self.slope * (float(x) - float(self.start))

    def _covered(self, x: ArrayLike) -> np.ndarray:
        # largo cargado a la izquierda de x: clip(x - a, 0, b - a)
        return np.clip(np.asarray(x, dtype=float) - float(self.start), 0.0, self.width)

    def shear_upto(self, x: ArrayLike) -> np.ndarray:
        """∫_a^{min(x,b)} w(ξ) dξ"""
        t = self._covered(x)
        return float(self.start_mag) * t + 0.5 * self.slope * t * t

    def moment_about(self, x: ArrayLike) -> np.ndarray:
        """
        ∫_a^{min(x,b)} w(ξ)·(x-ξ) dξ  (momento respecto de x de la porción a la izquierda).
        Con s = ξ-a, u = x-a, k = pendiente:
            w1·(u·t - t²/2) + k·(u·t²/2 - t³/3)
        """
        xa = np.asarray(x, dtype=float)
        t = self._covered(xa)
        u = xa - float(self.start)
        w1 = float(self.start_mag)
        k = self.slope
        return w1 * (u * t - 0.5 * t * t) + k * (0.5 * u * t * t - t * t * t / 3.0)


@dataclass(frozen=True)
class AppliedMoment:
    """
    Momento concentrado. magnitude + horario:
    produce un salto + en M(x) (flexión positiva) recorriendo de izquierda a derecha.
    """
    position: float
    magnitude: float
