from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import numpy as np

from beam_statics.domain.beam import Beam
from beam_statics.domain.results import DiagramPoint, Extremum, Reaction
from beam_statics.engine.normalize import normalize_inputs

N_POINTS = 100


@dataclass(frozen=True)
class VMDiagram:
    """
    Diagrama V(x) y M(x) por superposición, cortando la viga en x y tomando el
    cuerpo libre a la izquierda del corte.

    Convención interna:
    - Reacciones + arriba, cargas + abajo
    - Distribuida lineal w1 -> w2 entre a y b (+ abajo)
    - Momento puntual CCW+ => salto + en M(x)
    - Apoyos en x = L no entran (valor justo a la izquierda del borde)
    - Empotramiento: entra con su fuerza y un salto -M_R si queda a la
      izquierda del corte
    """
    length: float

    # reacciones que participan en las sumas
    rf_x: np.ndarray
    rf_V: np.ndarray
    rm_x: np.ndarray          # empotramientos (salto de momento)
    rm_M: np.ndarray

    # cargas
    pf_x: np.ndarray
    pf_F: np.ndarray          # componente vertical (+ abajo)

    dl_a: np.ndarray
    dl_b: np.ndarray
    dl_w1: np.ndarray
    dl_w2: np.ndarray

    pm_x: np.ndarray
    pm_M: np.ndarray          # CCW+

    def eval_V(self, x: float) -> float:
        return float(self._eval_V_array(np.asarray([x], dtype=float))[0])

    def eval_M(self, x: float) -> float:
        return float(self._eval_M_array(np.asarray([x], dtype=float))[0])

    # -------------------------
    # Evaluadores vectorizados
    # -------------------------
    def _dist_partial(self, x: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Para cada x: (fuerza acumulada, momento respecto al corte) de todas las
        distribuidas, integrando desde a hasta min(x, b).
        """
        xcol = x[:, None]
        a = self.dl_a[None, :]
        b = self.dl_b[None, :]
        w1 = self.dl_w1[None, :]
        k = ((self.dl_w2 - self.dl_w1) / (self.dl_b - self.dl_a))[None, :]

        t = np.clip(xcol - a, 0.0, b - a)
        F = w1 * t + 0.5 * k * t * t
        # ∫_0^t (x - a - s)(w1 + k s) ds
        Mc = (xcol - a) * F - (0.5 * w1 * t * t + k * t * t * t / 3.0)
        return np.sum(F, axis=1), np.sum(Mc, axis=1)

    def _eval_V_array(self, x: np.ndarray) -> np.ndarray:
        V = np.zeros_like(x, dtype=float)

        if self.rf_x.size:
            H = (x[:, None] >= self.rf_x[None, :]).astype(float)
            V += H @ self.rf_V

        if self.pf_x.size:
            H = (x[:, None] >= self.pf_x[None, :]).astype(float)
            V -= H @ self.pf_F

        if self.dl_a.size:
            F, _ = self._dist_partial(x)
            V -= F

        return V

    def _eval_M_array(self, x: np.ndarray) -> np.ndarray:
        M = np.zeros_like(x, dtype=float)

        if self.rf_x.size:
            dx = x[:, None] - self.rf_x[None, :]
            H = (dx >= 0.0).astype(float)
            M += np.sum(self.rf_V[None, :] * dx * H, axis=1)

        if self.rm_x.size:
            H = (x[:, None] >= self.rm_x[None, :]).astype(float)
            M += H @ self.rm_M

        if self.pf_x.size:
            dx = x[:, None] - self.pf_x[None, :]
            H = (dx >= 0.0).astype(float)
            M -= np.sum(self.pf_F[None, :] * dx * H, axis=1)

        if self.dl_a.size:
            _, Mc = self._dist_partial(x)
            M -= Mc

        if self.pm_x.size:
            H = (x[:, None] >= self.pm_x[None, :]).astype(float)
            M += H @ self.pm_M

        return M

    def stations(self, n_points: int = N_POINTS) -> np.ndarray:
        # x_i = i·L/(n-1), con x_{n-1} = L exacto
        return np.linspace(0.0, float(self.length), int(n_points), dtype=float)

    def sample(self, n_points: int = N_POINTS) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        x = self.stations(n_points)
        return x, self._eval_V_array(x), self._eval_M_array(x)


def build_V_M(beam: Beam, reactions: Sequence[Reaction], eps: float = 1e-9) -> VMDiagram:
    data = normalize_inputs(beam)
    L = float(beam.length)
    types = {s.id: s.type for s in beam.supports}

    rf_x: List[float] = []
    rf_V: List[float] = []
    rm_x: List[float] = []
    rm_M: List[float] = []
    for r in reactions:
        x = float(r.position)
        # un apoyo en el extremo derecho es el borde del cuerpo libre:
        # V(L) y M(L) son los valores justo a su izquierda
        if x >= L - eps:
            continue
        if types.get(r.support_id) == "fixed":
            rm_x.append(x)
            rm_M.append(-float(r.moment))
        rf_x.append(x)
        rf_V.append(float(r.vertical_force))

    return VMDiagram(
        length=L,
        rf_x=np.array(rf_x, dtype=float),
        rf_V=np.array(rf_V, dtype=float),
        rm_x=np.array(rm_x, dtype=float),
        rm_M=np.array(rm_M, dtype=float),
        pf_x=np.array([p.x for p in data.point_forces], dtype=float),
        pf_F=np.array([p.Fv for p in data.point_forces], dtype=float),
        dl_a=np.array([d.x1 for d in data.dist_loads], dtype=float),
        dl_b=np.array([d.x2 for d in data.dist_loads], dtype=float),
        dl_w1=np.array([d.w1 for d in data.dist_loads], dtype=float),
        dl_w2=np.array([d.w2 for d in data.dist_loads], dtype=float),
        pm_x=np.array([m.x for m in data.moments], dtype=float),
        pm_M=np.array([m.M for m in data.moments], dtype=float),
    )


def to_points(x: np.ndarray, y: np.ndarray) -> List[DiagramPoint]:
    return [DiagramPoint(position=float(xi), value=float(yi)) for xi, yi in zip(x, y)]


def sample_diagrams(
    beam: Beam,
    reactions: Sequence[Reaction],
    n_points: int = N_POINTS,
) -> Tuple[List[DiagramPoint], List[DiagramPoint]]:
    """
    (cortante, momento) muestreados en n_points estaciones uniformes sobre [0, L].
    """
    diag = build_V_M(beam, reactions)
    x, V, M = diag.sample(n_points)
    return to_points(x, V), to_points(x, M)


def find_extremum(points: Sequence[DiagramPoint]) -> Extremum:
    """Muestra de mayor |valor| (la primera en caso de empate)."""
    if not points:
        return Extremum(position=0.0, value=0.0)
    best = points[0]
    for p in points[1:]:
        if abs(p.value) > abs(best.value):
            best = p
    return Extremum(position=best.position, value=best.value)


def interpolate_value(points: Sequence[DiagramPoint], position: float) -> float:
    """
    Interpolación lineal entre las muestras que encierran `position`.
    Fuera de rango devuelve la muestra extrema más cercana.
    """
    if not points:
        return 0.0
    xs = np.array([p.position for p in points], dtype=float)
    ys = np.array([p.value for p in points], dtype=float)
    return float(np.interp(float(position), xs, ys))
