# --------------------------------------------------------------
# File: models.py
# Description: Modelos de entradas de la lista negra y su unión etiquetada.
# --------------------------------------------------------------
"""Modelos Pydantic que representan entradas de la lista negra.

Cada tipo de entrada es una variante independiente identificada por su campo
``type``; ``ENTRY_TYPES`` asocia cada discriminador con su modelo y
``parse_entry`` reconstruye la variante adecuada a partir de datos persistidos.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Type, Union

from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from blacklist.fingerprint import compute_fingerprint, normalize_fingerprint
from blacklist.keys import keyspec_for

__all__ = [
    "ENTRY_TYPES",
    "PUBLICKEY",
    "BlacklistEntry",
    "PublicKeyBlacklistEntry",
    "parse_entry",
]

PUBLICKEY = "PUBLICKEY"


class PublicKeyBlacklistEntry(BaseModel):
    """Entrada de lista negra para una clave pública.

    Attributes:
        type (str): Discriminador fijo ``"PUBLICKEY"``; no puede reasignarse.
        id (int): Identificador asignado al persistir; ``0`` hasta entonces.
        fingerprint (Optional[str]): Huella hexadecimal de 64 caracteres.
        keyspec (str): Descripción informativa ('RSA2048', 'secp256r1'...).

    La clave pública asociada (``key``) es transitoria: vive solo en memoria y
    nunca forma parte de ``model_dump`` ni de lo que se persiste.

    """

    model_config = ConfigDict(validate_assignment=True)

    type: Literal["PUBLICKEY"] = Field(default=PUBLICKEY, frozen=True)
    id: int = Field(default=0, ge=0)
    fingerprint: Optional[str] = None
    keyspec: str = ""

    _key: Optional[PublicKeyTypes] = PrivateAttr(default=None)

    @field_validator("fingerprint")
    @classmethod
    def _normalize(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_fingerprint(value)

    @classmethod
    def from_key(cls, key: PublicKeyTypes, *, id: int = 0) -> "PublicKeyBlacklistEntry":
        """Crea una entrada a partir de una clave viva.

        Args:
            key (PublicKeyTypes): Clave pública a incluir en la lista negra.
            id (int): Identificador inicial, normalmente ``0``.

        Returns:
            PublicKeyBlacklistEntry: Entrada con huella, keyspec y clave adjunta.

        """

        entry = cls(id=id)
        entry.set_fingerprint(key)
        entry.keyspec = keyspec_for(key)
        entry.key = key
        return entry

    @property
    def key(self) -> Optional[PublicKeyTypes]:
        """Clave pública transitoria; no está disponible tras persistir."""

        return self._key

    @key.setter
    def key(self, value: Optional[PublicKeyTypes]) -> None:
        # No recalcula la huella: hay que llamar a set_fingerprint(key).
        self._key = value

    def set_fingerprint(self, key: Optional[PublicKeyTypes]) -> None:
        """Calcula y guarda la huella de ``key``.

        Los errores de ``compute_fingerprint`` se propagan sin traducir y la
        huella anterior se conserva.
        """

        self.fingerprint = compute_fingerprint(key)

    def same_as(self, other: "BlacklistEntry") -> bool:
        """Dos entradas con el mismo tipo y huella son equivalentes."""

        return (
            self.fingerprint is not None
            and self.type == other.type
            and self.fingerprint == other.fingerprint
        )

    def to_record(self) -> Dict[str, Any]:
        """Devuelve el estado persistible de la entrada (sin la clave)."""

        return self.model_dump(mode="json")


# Unión etiquetada de variantes; hoy solo existe la de claves públicas.
BlacklistEntry = Union[PublicKeyBlacklistEntry]

ENTRY_TYPES: Dict[str, Type[PublicKeyBlacklistEntry]] = {
    PUBLICKEY: PublicKeyBlacklistEntry,
}


def parse_entry(data: Dict[str, Any]) -> BlacklistEntry:
    """Reconstruye la variante de entrada indicada por ``data["type"]``.

    Raises:
        ValueError: Si el discriminador no corresponde a ningún tipo conocido.

    """

    entry_type = data.get("type", PUBLICKEY)
    model = ENTRY_TYPES.get(entry_type)
    if model is None:
        raise ValueError(f"Tipo de entrada desconocido: {entry_type!r}")
    return model.model_validate(data)
