from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class DiagramStyle:
    line_lw: float = 1.6
    fill_alpha: float = 0.18
    axis_lw: float = 1.0
    grid_alpha: float = 0.25

    shear_color: str = "tab:blue"
    moment_color: str = "tab:red"

    # Escala vertical: margen sobre el |valor| máximo
    y_pad: float = 1.15

    # Anotaciones de extremos
    marker_size: float = 18.0
    font_size: int = 8

    # Exportación
    fig_width_in: float = 8.0
    fig_height_in: float = 3.2
    dpi: int = 150


DEFAULT_STYLE = DiagramStyle()
