# --------------------------------------------------------------
# File: test_storage.py
# Description: Pruebas sobre la persistencia JSON de la lista negra.
# --------------------------------------------------------------

import json
import threading

import pytest

from blacklist.errors import DuplicateEntry, EntryNotFound
from blacklist.models import PublicKeyBlacklistEntry
from blacklist.storage import BlacklistStore, load_db, save_db

FP1 = "11" * 32
FP2 = "22" * 32


@pytest.fixture
def store(tmp_path) -> BlacklistStore:
    """Almacén sobre un fichero temporal."""
    return BlacklistStore(str(tmp_path / "blacklist.json"))


def test_load_db_returns_empty_when_missing(tmp_path):
    """Comprueba que load_db devuelva la estructura base cuando no existe archivo.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        None: Las aserciones validan la estructura creada en memoria.
    """
    path = tmp_path / "blacklist.json"
    db = load_db(str(path))
    assert db == {"next_id": 1, "entries": {}}
    assert not path.exists()


def test_save_db_is_atomic(tmp_path):
    """Garantiza que el guardado se realice sin archivos residuales."""
    path = tmp_path / "sub" / "blacklist.json"
    save_db({"next_id": 1, "entries": {}}, str(path))
    assert path.exists()
    assert list((tmp_path / "sub").glob("*.tmp")) == []


def test_load_db_with_corrupt_json(tmp_path):
    """Un fichero corrupto no se sustituye en silencio por una lista vacía."""
    path = tmp_path / "blacklist.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_db(str(path))


def test_save_assigns_ids_and_load_roundtrip(store):
    """Guardar asigna identificadores consecutivos y ``load`` los recupera.

    Returns:
        None: Las aserciones comparan las entradas recuperadas.
    """
    first = store.save(PublicKeyBlacklistEntry(fingerprint=FP1, keyspec="RSA2048"))
    second = store.save(PublicKeyBlacklistEntry(fingerprint=FP2))
    assert (first.id, second.id) == (1, 2)

    loaded = store.load(1)
    assert loaded.fingerprint == FP1
    assert loaded.keyspec == "RSA2048"
    assert loaded.type == "PUBLICKEY"
    assert [e.id for e in store.all()] == [1, 2]


def test_saved_file_never_contains_key(store, ec_public_key):
    """La clave transitoria no llega al fichero y no se recupera al cargar."""
    entry = store.save(PublicKeyBlacklistEntry.from_key(ec_public_key))
    with open(store.path, "r", encoding="utf-8") as handler:
        record = json.load(handler)["entries"][str(entry.id)]
    assert set(record) == {"type", "id", "fingerprint", "keyspec"}
    assert store.load(entry.id).key is None


def test_save_rejects_duplicates(store):
    """Dos entradas con el mismo tipo y huella no pueden coexistir."""
    store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    with pytest.raises(DuplicateEntry):
        store.save(PublicKeyBlacklistEntry(fingerprint=FP1.upper()))
    assert len(store.all()) == 1


def test_save_updates_existing(store):
    """Guardar una entrada con id existente la actualiza."""
    entry = store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    entry.keyspec = "secp256r1"
    store.save(entry)
    assert store.load(entry.id).keyspec == "secp256r1"
    assert len(store.all()) == 1


def test_save_unknown_id_and_missing_fingerprint(store):
    """Actualizar un id inexistente o guardar sin huella falla."""
    with pytest.raises(EntryNotFound):
        store.save(PublicKeyBlacklistEntry(id=42, fingerprint=FP1))
    with pytest.raises(ValueError):
        store.save(PublicKeyBlacklistEntry())


def test_delete_and_load_missing(store):
    """Eliminar borra la entrada; cargar o borrar una inexistente falla."""
    entry = store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    store.delete(entry.id)
    with pytest.raises(EntryNotFound):
        store.load(entry.id)
    with pytest.raises(EntryNotFound):
        store.delete(entry.id)


def test_ids_are_not_reused_after_delete(store):
    """Los identificadores borrados no se reasignan."""
    first = store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    store.delete(first.id)
    second = store.save(PublicKeyBlacklistEntry(fingerprint=FP2))
    assert second.id == first.id + 1


def test_find_by_fingerprint(store):
    """La búsqueda por huella no distingue mayúsculas."""
    store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    assert store.find_by_fingerprint(FP1.upper()).fingerprint == FP1
    assert store.find_by_fingerprint(FP2) is None


def test_stores_on_same_path_share_lock(tmp_path):
    """Instancias distintas sobre el mismo fichero comparten candado."""
    path = tmp_path / "blacklist.json"
    assert BlacklistStore(str(path))._lock is BlacklistStore(str(tmp_path / "." / "blacklist.json"))._lock
    assert BlacklistStore(str(path))._lock is not BlacklistStore(str(tmp_path / "otra.json"))._lock


def test_concurrent_saves_from_separate_instances(tmp_path):
    """Guardados simultáneos desde varios hilos no pierden entradas.

    Cada hilo usa su propia instancia del almacén, como hace la capa de
    servicios en cada llamada.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        None: Las aserciones comprueban que todas las huellas persisten.
    """
    path = str(tmp_path / "blacklist.json")
    workers = 40
    barrier = threading.Barrier(workers)
    errors = []

    def _worker(i: int) -> None:
        barrier.wait()
        try:
            BlacklistStore(path).save(PublicKeyBlacklistEntry(fingerprint=f"{i:064x}"))
        except Exception as exc:  # se revisa en las aserciones
            errors.append(exc)

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    stored = BlacklistStore(path).all()
    assert len(stored) == workers
    assert sorted(e.id for e in stored) == list(range(1, workers + 1))
    assert {e.fingerprint for e in stored} == {f"{i:064x}" for i in range(workers)}
    assert list(tmp_path.glob("*.tmp")) == []


def test_duplicate_check_uses_entry_equivalence(store, monkeypatch):
    """La detección de duplicados delega en ``same_as``."""
    store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    monkeypatch.setattr(PublicKeyBlacklistEntry, "same_as", lambda self, other: False)
    store.save(PublicKeyBlacklistEntry(fingerprint=FP1))
    assert len(store.all()) == 2
