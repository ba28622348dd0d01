# api/pki.py
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.types import CertificatePublicKeyTypes

from blacklist.errors import UnsupportedKeyType


def _load_cert(cert_data: bytes) -> x509.Certificate:
    # Acepta PEM o DER indistintamente
    if cert_data.lstrip().startswith(b"-----BEGIN"):
        return x509.load_pem_x509_certificate(cert_data.strip())
    return x509.load_der_x509_certificate(cert_data)


def cert_public_key(cert_data: bytes) -> CertificatePublicKeyTypes:
    """
    Extrae el objeto clave pública de un certificado X.509 (PEM o DER).
    Un algoritmo de clave desconocido se señala con UnsupportedKeyType.
    """
    cert = _load_cert(cert_data)
    try:
        return cert.public_key()
    except UnsupportedAlgorithm as exc:
        raise UnsupportedKeyType(str(exc)) from exc
