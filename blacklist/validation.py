# --------------------------------------------------------------
# File: validation.py
# Description: Comprobación de claves candidatas contra la lista negra.
# --------------------------------------------------------------
"""Funciones de coincidencia entre claves públicas y entradas almacenadas."""

from __future__ import annotations

from typing import Iterable, Optional

from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from blacklist.fingerprint import compute_fingerprint
from blacklist.logger import get_logger
from blacklist.models import BlacklistEntry

__all__ = ["find_match", "is_blacklisted", "matches"]

log = get_logger("blacklist.validation")


def _same_fingerprint(candidate: Optional[str], stored: Optional[str]) -> bool:
    if candidate is None or stored is None:
        return False
    return candidate.lower() == stored.strip().lower()


def matches(candidate_key: Optional[PublicKeyTypes], entry: BlacklistEntry) -> bool:
    """Indica si la huella de ``candidate_key`` coincide con la de ``entry``.

    Args:
        candidate_key (Optional[PublicKeyTypes]): Clave a comprobar.
        entry (BlacklistEntry): Entrada de la lista negra.

    Returns:
        bool: ``True`` si ambas huellas coinciden; una clave ausente nunca coincide.

    Raises:
        UnsupportedKeyType: Si la clave no admite huella.

    """

    return _same_fingerprint(compute_fingerprint(candidate_key), entry.fingerprint)


def find_match(
    candidate_key: Optional[PublicKeyTypes], entries: Iterable[BlacklistEntry]
) -> Optional[BlacklistEntry]:
    """Devuelve la primera entrada que coincide con la clave, o ``None``.

    La huella de la clave se calcula una sola vez para todas las entradas.
    """

    fingerprint = compute_fingerprint(candidate_key)
    if fingerprint is None:
        return None
    for entry in entries:
        if _same_fingerprint(fingerprint, entry.fingerprint):
            log.warning("Clave en lista negra: huella %s (entrada %s).", fingerprint, entry.id)
            return entry
    return None


def is_blacklisted(candidate_key: Optional[PublicKeyTypes], entries: Iterable[BlacklistEntry]) -> bool:
    return find_match(candidate_key, entries) is not None
