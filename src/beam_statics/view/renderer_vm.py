from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
from matplotlib.figure import Figure

from beam_statics.domain.labels import fmt_num, unit_labels
from beam_statics.domain.results import AnalysisResults, DiagramPoint
from beam_statics.view.style import DEFAULT_STYLE, DiagramStyle


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


def _xy(points: Sequence[DiagramPoint]) -> Tuple[np.ndarray, np.ndarray]:
    x = np.array([p.position for p in points], dtype=float)
    y = np.array([p.value for p in points], dtype=float)
    return x, y


# -------------------------
# Extremos locales robustos
# -------------------------
def find_local_extrema_indices(y: np.ndarray, *, tol_slope: float) -> List[tuple[str, int]]:
    """
    Detecta extremos locales por cambios de signo en dy, IGNORANDO mesetas (dy≈0).
    Devuelve lista de ("max"/"min", idx_en_y).
    """
    if len(y) < 5:
        return []

    dy = np.diff(y)
    s = np.zeros_like(dy, dtype=int)
    s[dy > +tol_slope] = +1
    s[dy < -tol_slope] = -1

    nz = np.nonzero(s)[0]
    if nz.size < 2:
        return []

    s_nz = s[nz]
    out: List[tuple[str, int]] = []
    # + a - => máximo; - a + => mínimo
    for k in range(1, len(s_nz)):
        if s_nz[k - 1] > 0 and s_nz[k] < 0:
            out.append(("max", int(nz[k - 1] + 1)))
        elif s_nz[k - 1] < 0 and s_nz[k] > 0:
            out.append(("min", int(nz[k - 1] + 1)))
    return out


def select_extrema(
    x: np.ndarray,
    y: np.ndarray,
    *,
    min_dx_frac: float = 0.03,
) -> List[tuple[str, int]]:
    """
    Extremos locales + globales, sin valores ≈0 ni etiquetas demasiado juntas.
    Prioriza por |y| y devuelve ordenado por x.
    """
    if len(x) == 0:
        return []
    max_abs = max(float(np.max(np.abs(y))), 1e-12)

    cands = find_local_extrema_indices(y, tol_slope=1e-6 * max_abs)
    cands.extend([("max", int(np.argmax(y))), ("min", int(np.argmin(y)))])

    seen: Set[int] = set()
    uniq: List[tuple[str, int]] = []
    for kind, i in cands:
        if i not in seen and abs(float(y[i])) >= 0.01 * max_abs:
            seen.add(i)
            uniq.append((kind, i))

    uniq.sort(key=lambda ki: abs(float(y[ki[1]])), reverse=True)
    min_dx = min_dx_frac * max(float(x[-1] - x[0]), 1e-12)

    picked: List[tuple[str, int]] = []
    for kind, i in uniq:
        if all(abs(float(x[i]) - float(x[j])) >= min_dx for _, j in picked):
            picked.append((kind, i))
    picked.sort(key=lambda ki: float(x[ki[1]]))
    return picked


def _annotate_extrema(ax, x: np.ndarray, y: np.ndarray, unit: str, style: DiagramStyle) -> None:
    picked = select_extrema(x, y)
    if not picked:
        return

    x_min, x_max = ax.get_xlim()
    y_min, y_max = ax.get_ylim()
    mx = 0.03 * (x_max - x_min)
    my = 0.03 * (y_max - y_min)

    for kind, i in picked:
        xi, yi = float(x[i]), float(y[i])
        ax.scatter([xi], [yi], s=style.marker_size, zorder=6)
        ty = yi + my if kind == "max" else yi - my
        ax.text(
            _clamp(xi, x_min + mx, x_max - mx),
            _clamp(ty, y_min + my, y_max - my),
            f"{fmt_num(yi, 2)} {unit}",
            ha="center", va="bottom" if kind == "max" else "top",
            fontsize=style.font_size, zorder=7,
        )


# -------------------------
# Render
# -------------------------
def _render(ax, points, *, color, title, ylabel, xlabel, unit, style, annotate) -> None:
    ax.clear()
    x, y = _xy(points)

    ax.plot(x, y, color=color, linewidth=style.line_lw)
    ax.fill_between(x, 0.0, y, color=color, alpha=style.fill_alpha)
    ax.axhline(0.0, linewidth=style.axis_lw, color="black")

    if len(x):
        ax.set_xlim(float(x[0]), float(x[-1]))
        ymax = max(float(np.max(np.abs(y))), 1e-9)
        ax.set_ylim(-ymax * style.y_pad, ymax * style.y_pad)

    if annotate:
        _annotate_extrema(ax, x, y, unit, style)

    ax.set_title(title)
    ax.set_ylabel(ylabel)
    ax.set_xlabel(xlabel)
    ax.grid(True, alpha=style.grid_alpha)


def render_shear(ax, points: Sequence[DiagramPoint], units: str = "metric",
                 style: DiagramStyle = DEFAULT_STYLE, annotate: bool = True) -> None:
    u = unit_labels(units)
    _render(ax, points, color=style.shear_color, title="Shear Force Diagram V(x)",
            ylabel=f"V [{u['force']}]", xlabel=f"x [{u['length']}]", unit=u["force"],
            style=style, annotate=annotate)


def render_moment(ax, points: Sequence[DiagramPoint], units: str = "metric",
                  style: DiagramStyle = DEFAULT_STYLE, annotate: bool = True) -> None:
    u = unit_labels(units)
    _render(ax, points, color=style.moment_color, title="Bending Moment Diagram M(x)",
            ylabel=f"M [{u['moment']}]", xlabel=f"x [{u['length']}]", unit=u["moment"],
            style=style, annotate=annotate)


def save_diagram_images(
    results: AnalysisResults,
    out_dir: str | Path,
    units: str = "metric",
    style: Optional[DiagramStyle] = None,
) -> Dict[str, str]:
    """
    PNG de V(x) y M(x) para la memoria PDF. Devuelve {"v": path, "m": path}.
    Usa Figure directamente (sin pyplot) para no depender de un backend interactivo.
    """
    st = style or DEFAULT_STYLE
    d = Path(out_dir)
    d.mkdir(parents=True, exist_ok=True)

    out: Dict[str, str] = {}
    for key, points, render in (
        ("v", results.shear_force, render_shear),
        ("m", results.bending_moment, render_moment),
    ):
        fig = Figure(figsize=(st.fig_width_in, st.fig_height_in), dpi=st.dpi)
        ax = fig.add_subplot(1, 1, 1)
        render(ax, points, units=units, style=st)
        fig.tight_layout()
        path = d / f"{key}.png"
        fig.savefig(path)
        out[key] = str(path)
    return out
