# --------------------------------------------------------------
# File: services.py
# Description: Servicios de administración y consulta de la lista negra de claves.
# --------------------------------------------------------------
"""Funciones de la capa de servicios para gestionar y consultar la lista negra."""

from typing import Any, Dict, Iterable, List, Tuple, Union

from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from api.pki import cert_public_key
from blacklist import config
from blacklist.errors import DuplicateEntry, EntryNotFound, UnsupportedKeyType
from blacklist.fingerprint import ensure_digest_available
from blacklist.keys import load_public_key
from blacklist.logger import get_logger
from blacklist.models import PublicKeyBlacklistEntry
from blacklist.storage import BlacklistStore
from blacklist.validation import find_match

log = get_logger("blacklist.services")


def _store() -> BlacklistStore:
    """Devuelve el almacén configurado en ``BLACKLIST_PATH``."""

    return BlacklistStore(config.BLACKLIST_PATH)


def bootstrap() -> None:
    """Valida el entorno al arrancar el proceso.

    Raises:
        ConfigurationError: Si SHA-256 no está disponible; el proceso no debe
        continuar.
    """

    ensure_digest_available()
    log.info("Lista negra preparada en %s", config.BLACKLIST_PATH)


def add_public_key(key_data: Union[bytes, str]) -> Tuple[bool, str, str]:
    """Incluye en la lista negra una clave pública en PEM o DER.

    Args:
        key_data (Union[bytes, str]): Clave pública serializada.

    Returns:
        Tuple[bool, str, str]: Indicador de éxito, mensaje para la interfaz y
        traza de depuración.
    """

    try:
        key = load_public_key(key_data)
        entry = PublicKeyBlacklistEntry.from_key(key)
    except UnsupportedKeyType as exc:
        return False, f"Tipo de clave no soportado: {exc}", ""
    except ValueError:
        return False, "No se ha podido leer la clave pública.", ""

    try:
        entry = _store().save(entry)
    except DuplicateEntry:
        return False, "La clave ya está en la lista negra.", f"[ADD] fingerprint={entry.fingerprint}"

    debug = f"[ADD] id={entry.id} keyspec={entry.keyspec} fingerprint={entry.fingerprint}"
    return True, "Clave añadida a la lista negra.", debug


def add_fingerprint(fingerprint: str, keyspec: str = "") -> Tuple[bool, str, str]:
    """Incluye una huella ya calculada, sin clave asociada.

    Args:
        fingerprint (str): Huella hexadecimal de 64 caracteres.
        keyspec (str): Descripción informativa de la clave.

    Returns:
        Tuple[bool, str, str]: Indicador de éxito, mensaje y traza de depuración.
    """

    try:
        entry = PublicKeyBlacklistEntry(fingerprint=fingerprint, keyspec=keyspec)
    except ValueError:
        return False, "La huella debe tener 64 caracteres hexadecimales.", ""

    try:
        entry = _store().save(entry)
    except DuplicateEntry:
        return False, "La huella ya está en la lista negra.", f"[ADD] fingerprint={entry.fingerprint}"
    return True, "Huella añadida a la lista negra.", f"[ADD] id={entry.id} fingerprint={entry.fingerprint}"


def import_fingerprints(lines: Iterable[str], keyspec: str = "") -> Tuple[bool, str, str]:
    """Importa huellas en bloque, una por línea.

    Cada línea contiene una huella y, opcionalmente, su keyspec separado por
    espacios. Se ignoran líneas vacías y las que empiezan por ``#``.

    Args:
        lines (Iterable[str]): Líneas de entrada.
        keyspec (str): Keyspec por defecto para líneas que no lo indiquen.

    Returns:
        Tuple[bool, str, str]: ``True`` si no hubo líneas inválidas, resumen de
        la importación y traza con los números de línea rechazados.
    """

    store = _store()
    imported = duplicated = 0
    invalid: List[int] = []

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(None, 1)
        try:
            entry = PublicKeyBlacklistEntry(
                fingerprint=parts[0],
                keyspec=parts[1].strip() if len(parts) > 1 else keyspec,
            )
        except ValueError:
            invalid.append(lineno)
            continue
        try:
            store.save(entry)
            imported += 1
        except DuplicateEntry:
            duplicated += 1

    msg = f"Importadas {imported} huellas; {duplicated} duplicadas; {len(invalid)} inválidas."
    debug = f"[IMPORT] lineas_invalidas={invalid}" if invalid else "[IMPORT] OK"
    log.info(msg)
    return not invalid, msg, debug


def remove_entry(entry_id: int) -> Tuple[bool, str]:
    """Elimina una entrada de la lista negra por su identificador."""

    try:
        _store().delete(entry_id)
    except EntryNotFound:
        return False, f"No existe la entrada {entry_id}."
    return True, f"Entrada {entry_id} eliminada."


def list_entries() -> List[Dict[str, Any]]:
    """Devuelve las entradas almacenadas en formato serializable."""

    return [entry.to_record() for entry in _store().all()]


def _check_key(key: PublicKeyTypes, tag: str) -> Tuple[bool, str, str]:
    try:
        candidate = PublicKeyBlacklistEntry.from_key(key)
    except UnsupportedKeyType as exc:
        return False, f"Tipo de clave no soportado: {exc}", ""

    match = find_match(candidate.key, _store().all())
    debug = f"[{tag}] keyspec={candidate.keyspec} fingerprint={candidate.fingerprint}"
    if match is not None:
        return False, f"Clave rechazada: figura en la lista negra (entrada {match.id}).", debug
    return True, "La clave no figura en la lista negra.", debug


def check_public_key(key_data: Union[bytes, str]) -> Tuple[bool, str, str]:
    """Comprueba una clave pública serializada contra la lista negra.

    Args:
        key_data (Union[bytes, str]): Clave pública en PEM o DER.

    Returns:
        Tuple[bool, str, str]: ``True`` si la clave se acepta, mensaje para la
        interfaz y traza con la huella calculada.
    """

    try:
        key = load_public_key(key_data)
    except UnsupportedKeyType as exc:
        return False, f"Tipo de clave no soportado: {exc}", ""
    except ValueError:
        return False, "No se ha podido leer la clave pública.", ""
    return _check_key(key, "CHECK")


def check_certificate(cert_data: bytes) -> Tuple[bool, str, str]:
    """Comprueba la clave pública de un certificado X.509 contra la lista negra.

    Args:
        cert_data (bytes): Certificado en PEM o DER.

    Returns:
        Tuple[bool, str, str]: ``True`` si la clave del certificado se acepta,
        mensaje y traza de depuración.
    """

    try:
        key = cert_public_key(cert_data)
    except UnsupportedKeyType as exc:
        return False, f"Tipo de clave no soportado: {exc}", ""
    except ValueError:
        return False, "No se ha podido leer el certificado.", ""
    return _check_key(key, "CERT")
