# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar almacenamiento y generar claves.
# --------------------------------------------------------------

import importlib
from typing import Iterator

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH y recarga blacklist.config para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    data_dir.mkdir()
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))
    monkeypatch.delenv("BLACKLIST_PATH", raising=False)

    import blacklist.config as config_module

    importlib.reload(config_module)

    yield
    # tmp_path se limpia automáticamente por pytest


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Clave RSA de 2048 bits reutilizada durante toda la sesión."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key() -> rsa.RSAPrivateKey:
    """Segunda clave RSA, distinta de ``rsa_private_key``."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def ec_public_key() -> ec.EllipticCurvePublicKey:
    """Clave pública EC P-256 recién generada."""
    return ec.generate_private_key(ec.SECP256R1()).public_key()
