# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones de la lista negra de claves públicas.
# --------------------------------------------------------------
"""Errores que propagan el cálculo de huellas y la persistencia de entradas."""


class BlacklistError(Exception):
    """Error base de todas las operaciones de la lista negra."""


class UnsupportedKeyType(BlacklistError):
    """La clave no tiene una codificación definida para calcular su huella."""


class ConfigurationError(BlacklistError):
    """El entorno de ejecución no ofrece el digest requerido (fatal)."""


class EntryNotFound(BlacklistError):
    """No existe ninguna entrada con el identificador solicitado."""


class DuplicateEntry(BlacklistError):
    """Ya existe una entrada con el mismo tipo y huella."""
