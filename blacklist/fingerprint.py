# --------------------------------------------------------------
# File: fingerprint.py
# Description: Cálculo de la huella canónica de claves públicas para la lista negra.
# --------------------------------------------------------------
"""Huellas SHA-256 de claves públicas comparables contra entradas almacenadas.

Para claves RSA la huella no se calcula sobre la codificación DER completa sino
sobre los bytes del módulo. Las listas negras suelen deberse a generadores de
números aleatorios débiles, que afectan a ``n`` y no al exponente elegido, así
que excluir ``e`` permite capturar todas las claves generadas con ese módulo.
Para el resto de familias (EC, DSA, EdDSA...) la huella se calcula sobre la
codificación SubjectPublicKeyInfo tal cual.
"""

from __future__ import annotations

import re
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from blacklist.config import DIGEST_ALGORITHM
from blacklist.errors import ConfigurationError, UnsupportedKeyType
from blacklist.logger import get_logger

__all__ = [
    "compute_fingerprint",
    "ensure_digest_available",
    "is_fingerprint",
    "normalize_fingerprint",
    "rsa_modulus_bytes",
]

log = get_logger("blacklist.fingerprint")

FINGERPRINT_RE = re.compile(r"^[0-9a-f]{64}$")


def _new_digest() -> hashes.Hash:
    """Instancia el digest configurado o falla con ``ConfigurationError``."""

    try:
        return hashes.Hash(hashes.SHA256())
    except UnsupportedAlgorithm as exc:
        raise ConfigurationError(f"Digest {DIGEST_ALGORITHM} no disponible en este entorno.") from exc


def ensure_digest_available() -> None:
    """Comprueba una sola vez, al arrancar, que el digest esté disponible.

    Raises:
        ConfigurationError: Si el backend criptográfico no ofrece SHA-256.

    """

    digest = _new_digest()
    digest.update(b"")
    digest.finalize()
    log.debug("Digest %s disponible.", DIGEST_ALGORITHM)


def rsa_modulus_bytes(modulus: int) -> bytes:
    """Serializa el módulo en complemento a dos, big-endian y longitud mínima.

    La representación incluye un ``0x00`` inicial cuando el bit más alto del
    primer byte quedaría activado, igual que ``BigInteger.toByteArray()``. Las
    huellas existentes dependen de estos bytes exactos.

    Args:
        modulus (int): Módulo ``n`` de la clave RSA.

    Returns:
        bytes: Bytes del módulo con signo.

    """

    if modulus < 0:
        raise ValueError("El módulo RSA no puede ser negativo.")
    length = modulus.bit_length() // 8 + 1
    return modulus.to_bytes(length, "big", signed=True)


def _sha256_hex(data: bytes) -> str:
    digest = _new_digest()
    digest.update(data)
    return digest.finalize().hex()


def compute_fingerprint(key: Optional[PublicKeyTypes]) -> Optional[str]:
    """Calcula la huella canónica de una clave pública.

    Args:
        key (Optional[PublicKeyTypes]): Clave pública de ``cryptography`` o ``None``.

    Returns:
        Optional[str]: 64 caracteres hexadecimales en minúsculas, o ``None`` si
        no se ha proporcionado clave.

    Raises:
        UnsupportedKeyType: Si la clave no tiene una codificación definida.
        ConfigurationError: Si SHA-256 no está disponible.

    """

    if key is None:
        return None

    if isinstance(key, rsa.RSAPublicKey):
        # Solo el módulo: el exponente público queda fuera a propósito.
        modulus = key.public_numbers().n
        fingerprint = _sha256_hex(rsa_modulus_bytes(modulus))
        log.debug("Huella creada para clave pública RSA: %s", fingerprint)
        return fingerprint

    public_bytes = getattr(key, "public_bytes", None)
    if public_bytes is None:
        raise UnsupportedKeyType(f"Tipo de clave no soportado: {type(key).__name__}")
    try:
        encoded = public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise UnsupportedKeyType(
            f"La clave {type(key).__name__} no tiene codificación SubjectPublicKeyInfo."
        ) from exc
    if not isinstance(encoded, (bytes, bytearray)):
        raise UnsupportedKeyType(f"Codificación inválida para {type(key).__name__}.")

    fingerprint = _sha256_hex(bytes(encoded))
    log.debug("Huella creada para clave pública %s: %s", type(key).__name__, fingerprint)
    return fingerprint


def normalize_fingerprint(value: str) -> str:
    """Normaliza una huella hexadecimal a minúsculas y sin espacios.

    Raises:
        ValueError: Si el resultado no son 64 caracteres hexadecimales.

    """

    normalized = value.strip().lower()
    if not FINGERPRINT_RE.match(normalized):
        raise ValueError("La huella debe tener 64 caracteres hexadecimales.")
    return normalized


def is_fingerprint(value: object) -> bool:
    """Indica si ``value`` es una huella válida (sin distinguir mayúsculas)."""

    if not isinstance(value, str):
        return False
    return FINGERPRINT_RE.match(value.strip().lower()) is not None
