# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del paquete de lista negra de claves públicas.
# --------------------------------------------------------------
"""Inicializa el paquete `blacklist` y documenta sus módulos principales."""

__all__ = [
    "config",
    "errors",
    "fingerprint",
    "keys",
    "logger",
    "models",
    "storage",
    "validation",
]
