from __future__ import annotations

from typing import List, Optional, Sequence, Set, Tuple

import numpy as np
from matplotlib.figure import Figure

from beam_calc.domain.results import AnalysisResult, Diagram
from beam_calc.view.style import DiagramStyle


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 3) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


# -------------------------
# Extremos locales robustos
# -------------------------
def _find_local_extrema_indices(y: np.ndarray, *, tol_slope: float) -> List[Tuple[str, int]]:
    """
    Detecta extremos locales por cambios de signo en dy, IGNORANDO mesetas (dy≈0).
    Devuelve lista de ("max"/"min", idx_en_y).
    """
    n = len(y)
    if n < 5:
        return []

    dy = np.diff(y)
    s = np.zeros_like(dy, dtype=int)
    s[dy > +tol_slope] = +1
    s[dy < -tol_slope] = -1

    nz = np.nonzero(s)[0]
    if nz.size < 2:
        return []

    s_nz = s[nz]
    out: List[Tuple[str, int]] = []

    # + a - => máximo, - a + => mínimo
    for k in range(1, len(s_nz)):
        if s_nz[k - 1] > 0 and s_nz[k] < 0:
            out.append(("max", int(nz[k - 1] + 1)))
        elif s_nz[k - 1] < 0 and s_nz[k] > 0:
            out.append(("min", int(nz[k - 1] + 1)))

    return out


def _select_extrema_with_spacing(
    x: np.ndarray,
    y: np.ndarray,
    candidates: List[Tuple[str, int]],
    *,
    y_abs_min: float,
    min_dx: float,
) -> List[Tuple[str, int]]:
    """
    Filtra extremos con |y| chico y los demasiado cercanos en x.
    Prioriza por |y| descendente.
    """
    cand2 = [(k, i) for (k, i) in candidates if abs(float(y[i])) >= y_abs_min]
    if not cand2:
        return []

    cand2.sort(key=lambda ki: abs(float(y[ki[1]])), reverse=True)

    picked: List[Tuple[str, int]] = []
    picked_x: List[float] = []
    for kind, i in cand2:
        xi = float(x[i])
        if all(abs(xi - xj) >= min_dx for xj in picked_x):
            picked.append((kind, i))
            picked_x.append(xi)

    picked.sort(key=lambda ki: float(x[ki[1]]))
    return picked


def pick_extrema(x: np.ndarray, y: np.ndarray, style: DiagramStyle = DiagramStyle()) -> List[Tuple[str, int]]:
    if len(x) == 0:
        return []
    max_abs = float(np.max(np.abs(y)))
    if max_abs <= 0.0:
        return []

    extrema = _find_local_extrema_indices(y, tol_slope=1e-6 * max_abs)
    extrema.extend([("max", int(np.argmax(y))), ("min", int(np.argmin(y)))])

    seen: Set[int] = set()
    uniq: List[Tuple[str, int]] = []
    for kind, i in extrema:
        if i in seen:
            continue
        seen.add(i)
        uniq.append((kind, i))

    x_span = max(float(x[-1] - x[0]), 1e-12)
    return _select_extrema_with_spacing(
        x, y, uniq,
        y_abs_min=style.label_min_frac * max_abs,
        min_dx=style.label_min_dx_frac * x_span,
    )


def _annotate_extrema(ax, x: np.ndarray, y: np.ndarray, unit: str, style: DiagramStyle):
    picked = pick_extrema(x, y, style)
    if not picked:
        return

    x_min, x_max = ax.get_xlim()
    y_min, y_max = ax.get_ylim()
    mx = 0.03 * (x_max - x_min)
    my = 0.03 * (y_max - y_min)

    for kind, i in picked:
        xi = float(x[i])
        yi = float(y[i])
        ax.scatter([xi], [yi], s=18, zorder=6)

        if kind == "max":
            tx, ty, va = xi, yi + my, "bottom"
        else:
            tx, ty, va = xi, yi - my, "top"

        tx = _clamp(tx, x_min + mx, x_max - mx)
        ty = _clamp(ty, y_min + my, y_max - my)

        ax.text(tx, ty, f"{_fmt_plain(yi)} {unit}", ha="center", va=va, fontsize=style.font_size, zorder=7)


# -------------------------
# Render
# -------------------------
def _render(ax, diag: Diagram, *, color: str, ylabel: str, title: str, unit: str,
            style: DiagramStyle, xlim: Optional[Tuple[float, float]]):
    ax.clear()
    x = np.asarray(diag.x, dtype=float)
    y = np.asarray(diag.values, dtype=float)

    ax.plot(x, y, color=color, linewidth=style.line_lw)
    ax.fill_between(x, y, 0.0, color=color, alpha=style.fill_alpha)
    ax.axhline(0.0, linewidth=style.zero_lw, color="black")

    if xlim is None:
        ax.set_xlim(float(x[0]), float(x[-1]))
    else:
        ax.set_xlim(xlim[0], xlim[1])

    ymax = float(np.max(np.abs(y))) if len(y) else 1.0
    if ymax <= 0.0:
        ymax = 1.0
    ax.set_ylim(-ymax * style.y_zoom * style.y_pad, ymax * style.y_zoom * style.y_pad)

    _annotate_extrema(ax, x, y, unit, style)

    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.25)


def render_shear(ax, diag: Diagram, style: DiagramStyle = DiagramStyle(),
                 xlim: Optional[Tuple[float, float]] = None):
    _render(ax, diag, color=style.shear_color, ylabel=f"V [{style.force_unit}]",
            title="Diagrama de Corte V(x)", unit=style.force_unit, style=style, xlim=xlim)


def render_moment(ax, diag: Diagram, style: DiagramStyle = DiagramStyle(),
                  xlim: Optional[Tuple[float, float]] = None):
    _render(ax, diag, color=style.moment_color, ylabel=f"M [{style.moment_unit}]",
            title="Diagrama de Momento Flector M(x)", unit=style.moment_unit, style=style, xlim=xlim)


def render_deflection(ax, diag: Diagram, style: DiagramStyle = DiagramStyle(),
                      xlim: Optional[Tuple[float, float]] = None):
    _render(ax, diag, color=style.deflection_color, ylabel=f"δ [{style.deflection_unit}]",
            title="Elástica δ(x)", unit=style.deflection_unit, style=style, xlim=xlim)
    ax.set_xlabel(f"x [{style.length_unit}]")


def render_result(result: AnalysisResult, axes: Optional[Sequence] = None,
                  style: DiagramStyle = DiagramStyle()) -> Figure:
    """
    V, M y δ en tres ejes apilados. Sin axes crea una Figure nueva
    (sin pyplot, sirve con cualquier backend).
    """
    if axes is None:
        fig = Figure(figsize=(8.0, 9.0), constrained_layout=True)
        axes = fig.subplots(3, 1, sharex=True)
    else:
        fig = axes[0].figure

    render_shear(axes[0], result.shear, style)
    render_moment(axes[1], result.bending_moment, style)
    render_deflection(axes[2], result.deflection, style)
    return fig
