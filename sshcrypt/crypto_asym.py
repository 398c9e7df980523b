# --------------------------------------------------------------
# File: crypto_asym.py
# Description: Cifrado RSA-OAEP de la clave simétrica con claves PEM.
# --------------------------------------------------------------
"""Primitivas asimétricas para envolver y desenvolver la clave de un solo uso."""

from typing import Optional

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

_OAEP = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA256()),
    algorithm=hashes.SHA256(),
    label=None,
)


def load_rsa_public_pem(pub_pem: bytes) -> rsa.RSAPublicKey:
    """Carga una clave pública PEM (PKCS#1 o SubjectPublicKeyInfo).

    Raises:
        ValueError: Si el PEM está mal formado.
        TypeError: Si la clave no es RSA.

    """

    key = serialization.load_pem_public_key(pub_pem)
    if not isinstance(key, rsa.RSAPublicKey):
        raise TypeError(f"se requiere una clave RSA, no {type(key).__name__}")
    return key


def load_rsa_private_pem(priv_pem: bytes, password: Optional[bytes] = None) -> rsa.RSAPrivateKey:
    """Carga una clave privada PEM, cifrada o no.

    Raises:
        ValueError: PEM mal formado o passphrase incorrecta.
        TypeError: Passphrase ausente para una clave cifrada, o clave no RSA.

    """

    key = serialization.load_pem_private_key(priv_pem, password=password)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise TypeError(f"se requiere una clave RSA, no {type(key).__name__}")
    return key


def rsa_oaep_encrypt(pub_pem: bytes, data: bytes) -> bytes:
    """Cifra `data` con la clave pública RSA indicada (OAEP, SHA-256).

    Args:
        pub_pem (bytes): Clave pública del destinatario en formato PEM.
        data (bytes): Clave simétrica a proteger.

    Returns:
        bytes: Bloque cifrado del tamaño del módulo RSA.

    """

    return load_rsa_public_pem(pub_pem).encrypt(data, _OAEP)


def rsa_oaep_decrypt(priv_pem: bytes, data: bytes, password: Optional[bytes] = None) -> bytes:
    """Descifra un bloque producido por `rsa_oaep_encrypt`.

    Args:
        priv_pem (bytes): Clave privada PEM del destinatario.
        data (bytes): Bloque cifrado.
        password (Optional[bytes]): Passphrase del PEM, si lo protege.

    Returns:
        bytes: Clave simétrica recuperada.

    Raises:
        ValueError: Si la clave privada no corresponde o el bloque está corrupto.

    """

    return load_rsa_private_pem(priv_pem, password).decrypt(data, _OAEP)
