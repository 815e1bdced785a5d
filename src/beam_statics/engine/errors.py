from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Entrada inválida para el motor (viga o apoyos no soportados).
    Aborta el análisis: nunca se devuelve un resultado parcial.
    """
