# --------------------------------------------------------------
# File: storage.py
# Description: Persistencia JSON de las entradas de la lista negra.
# --------------------------------------------------------------
"""Almacén de entradas de la lista negra sobre un fichero JSON local."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from typing import Any, Dict, List, Optional

from blacklist import config
from blacklist.errors import DuplicateEntry, EntryNotFound
from blacklist.fingerprint import normalize_fingerprint
from blacklist.logger import get_logger
from blacklist.models import BlacklistEntry, parse_entry

__all__ = ["BlacklistStore", "load_db", "save_db"]

log = get_logger("blacklist.storage")

# Un candado por fichero, compartido por todas las instancias del almacén.
_PATH_LOCKS: Dict[str, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: str) -> threading.Lock:
    key = os.path.abspath(path)
    with _PATH_LOCKS_GUARD:
        return _PATH_LOCKS.setdefault(key, threading.Lock())


def _empty_db() -> Dict[str, Any]:
    return {"next_id": 1, "entries": {}}


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def load_db(path: str) -> Dict[str, Any]:
    """Carga el archivo JSON de la lista negra.

    Args:
        path (str): Ruta del archivo JSON.

    Returns:
        Dict[str, Any]: Estructura cargada o la base vacía si el archivo no existe.

    Raises:
        json.JSONDecodeError: Si el archivo existe pero está corrupto.

    """

    try:
        with open(path, "r", encoding="utf-8") as handler:
            return json.load(handler)
    except FileNotFoundError:
        return _empty_db()


def save_db(db: Dict[str, Any], path: str) -> None:
    """Guarda la base de datos JSON aplicando escritura atómica."""

    _ensure_parent_dir(path)
    # Fichero temporal único: escritores concurrentes no comparten ruta.
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=os.path.dirname(path) or ".",
        prefix=f"{os.path.basename(path)}.",
        suffix=".tmp",
        delete=False,
    ) as handler:
        json.dump(db, handler, indent=2, ensure_ascii=False)
        tmp_path = handler.name
    try:
        os.replace(tmp_path, path)
    except OSError:
        os.unlink(tmp_path)
        raise


class BlacklistStore:
    """Colaborador de persistencia: ``load(id)``, ``save(entry)`` y afines.

    Solo se guarda ``to_record()`` de cada entrada, por lo que la clave
    transitoria nunca llega al disco. El ciclo leer-modificar-escribir se
    serializa con un candado por fichero compartido entre instancias.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or config.BLACKLIST_PATH
        self._lock = _lock_for(self.path)

    def load(self, entry_id: int) -> BlacklistEntry:
        """Recupera la entrada ``entry_id``.

        Raises:
            EntryNotFound: Si no existe.

        """

        record = load_db(self.path)["entries"].get(str(entry_id))
        if record is None:
            raise EntryNotFound(f"No existe la entrada {entry_id}.")
        return parse_entry(record)

    def save(self, entry: BlacklistEntry) -> BlacklistEntry:
        """Inserta o actualiza una entrada; asigna ``id`` si aún vale ``0``.

        Args:
            entry (BlacklistEntry): Entrada a persistir.

        Returns:
            BlacklistEntry: La misma entrada, con su identificador definitivo.

        Raises:
            ValueError: Si la entrada no tiene huella.
            DuplicateEntry: Si otra entrada ya tiene el mismo tipo y huella.
            EntryNotFound: Si se actualiza un ``id`` que no existe.

        """

        if entry.fingerprint is None:
            raise ValueError("No se puede guardar una entrada sin huella.")

        with self._lock:
            db = load_db(self.path)
            entries = db["entries"]
            for key, record in entries.items():
                if key != str(entry.id) and parse_entry(record).same_as(entry):
                    raise DuplicateEntry(
                        f"La huella {entry.fingerprint} ya está en la entrada {key}."
                    )

            if entry.id == 0:
                entry.id = db["next_id"]
                db["next_id"] = entry.id + 1
            elif str(entry.id) not in entries:
                raise EntryNotFound(f"No existe la entrada {entry.id}.")

            entries[str(entry.id)] = entry.to_record()
            save_db(db, self.path)

        log.info("Entrada %s guardada (%s %s).", entry.id, entry.type, entry.keyspec)
        return entry

    def delete(self, entry_id: int) -> None:
        """Elimina la entrada ``entry_id``.

        Raises:
            EntryNotFound: Si no existe.

        """

        with self._lock:
            db = load_db(self.path)
            if db["entries"].pop(str(entry_id), None) is None:
                raise EntryNotFound(f"No existe la entrada {entry_id}.")
            save_db(db, self.path)
        log.info("Entrada %s eliminada.", entry_id)

    def all(self) -> List[BlacklistEntry]:
        """Devuelve todas las entradas ordenadas por identificador."""

        entries = load_db(self.path)["entries"]
        return [parse_entry(entries[key]) for key in sorted(entries, key=int)]

    def find_by_fingerprint(self, fingerprint: str) -> Optional[BlacklistEntry]:
        """Busca la entrada con esa huella, sin distinguir mayúsculas."""

        wanted = normalize_fingerprint(fingerprint)
        for entry in self.all():
            if entry.fingerprint == wanted:
                return entry
        return None
