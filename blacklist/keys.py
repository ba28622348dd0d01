# --------------------------------------------------------------
# File: keys.py
# Description: Carga de claves públicas y descripción de su keyspec.
# --------------------------------------------------------------
"""Utilidades para obtener claves públicas desde PEM/DER y describirlas."""

from __future__ import annotations

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dh, dsa, ec, ed448, ed25519, rsa, x448, x25519
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from blacklist.errors import UnsupportedKeyType

__all__ = ["keyspec_for", "load_public_key"]

_PEM_MARKER = b"-----BEGIN"

# Familias de tamaño fijo y el nombre con el que se describen.
_FIXED_KEYSPECS = (
    (ed25519.Ed25519PublicKey, "Ed25519"),
    (ed448.Ed448PublicKey, "Ed448"),
    (x25519.X25519PublicKey, "X25519"),
    (x448.X448PublicKey, "X448"),
)


def load_public_key(data: bytes | str) -> PublicKeyTypes:
    """Carga una clave pública en formato PEM o DER (SubjectPublicKeyInfo).

    Args:
        data (bytes | str): Contenido PEM (texto o bytes) o DER.

    Returns:
        PublicKeyTypes: Clave pública de ``cryptography``.

    Raises:
        ValueError: Si los datos no contienen una clave pública válida.
        UnsupportedKeyType: Si el algoritmo de la clave no está soportado.

    """

    raw = data.encode("ascii") if isinstance(data, str) else data
    try:
        if raw.lstrip().startswith(_PEM_MARKER):
            return serialization.load_pem_public_key(raw.strip())
        return serialization.load_der_public_key(raw)
    except UnsupportedAlgorithm as exc:
        raise UnsupportedKeyType(str(exc)) from exc


def keyspec_for(key: PublicKeyTypes) -> str:
    """Describe la clave como 'RSA2048', 'secp256r1', 'Ed25519', 'DSA1024'..."""

    if isinstance(key, rsa.RSAPublicKey):
        return f"RSA{key.key_size}"
    if isinstance(key, ec.EllipticCurvePublicKey):
        return key.curve.name
    if isinstance(key, dsa.DSAPublicKey):
        return f"DSA{key.key_size}"
    if isinstance(key, dh.DHPublicKey):
        return f"DH{key.key_size}"
    for key_type, name in _FIXED_KEYSPECS:
        if isinstance(key, key_type):
            return name
    raise UnsupportedKeyType(f"Tipo de clave no soportado: {type(key).__name__}")
