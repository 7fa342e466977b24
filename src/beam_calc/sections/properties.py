from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Tuple

# (b ancho, h alto, y del centroide desde la base)
Rect = Tuple[float, float, float]


def _rect_Ix_about_centroid(b: float, h: float) -> float:
    """Ix de un rectángulo b (ancho) x h (alto), respecto a su centroide (eje horizontal)."""
    return (b * h**3) / 12.0


@dataclass(frozen=True)
class SectionProperties:
    """
    Propiedades geométricas para σ = M·c/I y τ = V·Q/(I·t).

    Convención de y: y=0 en la cara inferior, y positivo hacia arriba.
    """
    kind: str
    area: float
    I: float                  # respecto al eje neutro
    centroid_height: float    # ybar desde la base
    height: float
    c_max: float              # distancia máx. a fibra extrema
    thickness: float          # ancho en el eje neutro (t para τ)
    Q_max: float              # momento estático sobre el eje neutro
    rects: Tuple[Rect, ...] = ()

    @property
    def W(self) -> float:
        """Módulo resistente elástico crítico."""
        return self.I / self.c_max

    def width_at(self, y: float) -> float:
        """Ancho de la sección a la altura y (desde la base)."""
        if self.kind == "circular":
            r = 0.5 * self.height
            d = y - r
            return 2.0 * math.sqrt(max(r * r - d * d, 0.0))
        return sum(b for b, h, yc in self.rects if yc - 0.5 * h <= y <= yc + 0.5 * h)

    def Q_at(self, y: float) -> float:
        """Momento estático del área por encima de y respecto al eje neutro."""
        ybar = self.centroid_height
        if self.kind == "circular":
            r = 0.5 * self.height
            s = min(max((y - r) / r, -1.0), 1.0)
            return (2.0 / 3.0) * r**3 * (1.0 - s * s) ** 1.5
        Q = 0.0
        for b, h, yc in self.rects:
            top = yc + 0.5 * h
            bot = max(yc - 0.5 * h, y)
            if top <= bot:
                continue
            Q += b * (top - bot) * (0.5 * (top + bot) - ybar)
        return abs(Q)


def _positive(**dims: float) -> None:
    for name, v in dims.items():
        if not (isinstance(v, (int, float)) and math.isfinite(v) and v > 0):
            raise ValueError(f"Dimensión inválida {name}={v!r} (debe ser > 0).")


def _from_rects(kind: str, rects: List[Rect]) -> SectionProperties:
    """Sección armada con rectángulos: teorema de ejes paralelos."""
    A_tot = sum(b * h for b, h, _ in rects)
    ybar = sum(b * h * yc for b, h, yc in rects) / A_tot
    Ix = sum(_rect_Ix_about_centroid(b, h) + b * h * (yc - ybar) ** 2 for b, h, yc in rects)
    H = max(yc + 0.5 * h for _, h, yc in rects)

    props = SectionProperties(
        kind=kind,
        area=A_tot,
        I=Ix,
        centroid_height=ybar,
        height=H,
        c_max=max(ybar, H - ybar),
        thickness=0.0,
        Q_max=0.0,
        rects=tuple(rects),
    )
    # t y Q en el eje neutro
    return replace(props, thickness=props.width_at(ybar), Q_max=props.Q_at(ybar))


def rectangular(b: float, h: float) -> SectionProperties:
    _positive(b=b, h=h)
    return _from_rects("rectangular", [(float(b), float(h), 0.5 * float(h))])


def circular(d: float) -> SectionProperties:
    _positive(d=d)
    d = float(d)
    r = 0.5 * d
    return SectionProperties(
        kind="circular",
        area=math.pi * r * r,
        I=math.pi * d**4 / 64.0,
        centroid_height=r,
        height=d,
        c_max=r,
        thickness=d,
        Q_max=2.0 * r**3 / 3.0,
    )


def i_beam(bf: float, tf: float, hw: float, tw: float) -> SectionProperties:
    """Doble T simétrica: 2 alas bf x tf + alma hw x tw."""
    _positive(bf=bf, tf=tf, hw=hw, tw=tw)
    bf, tf, hw, tw = float(bf), float(tf), float(hw), float(tw)
    return _from_rects("i-beam", [
        (bf, tf, 0.5 * tf),
        (tw, hw, tf + 0.5 * hw),
        (bf, tf, tf + hw + 0.5 * tf),
    ])


def t_beam(bf: float, tf: float, hw: float, tw: float) -> SectionProperties:
    """T: ala superior bf x tf sobre alma hw x tw."""
    _positive(bf=bf, tf=tf, hw=hw, tw=tw)
    bf, tf, hw, tw = float(bf), float(tf), float(hw), float(tw)
    return _from_rects("t-beam", [
        (tw, hw, 0.5 * hw),
        (bf, tf, hw + 0.5 * tf),
    ])


def custom(area: float, I: float, c_max: float, thickness: float, Q_max: float) -> SectionProperties:
    _positive(area=area, I=I, c_max=c_max, thickness=thickness, Q_max=Q_max)
    return SectionProperties(
        kind="custom",
        area=float(area),
        I=float(I),
        centroid_height=float(c_max),
        height=2.0 * float(c_max),
        c_max=float(c_max),
        thickness=float(thickness),
        Q_max=float(Q_max),
    )
