# --------------------------------------------------------------
# File: backend.py
# Description: Interfaz estrecha con las operaciones criptográficas delegadas.
# --------------------------------------------------------------
"""Adaptador entre la orquestación del sobre y la librería `cryptography`.

`envelope` solo conoce estos cinco métodos, de modo que las pruebas pueden
sustituir el backend por uno falso sin tocar la lógica de orquestación.
"""

from sshcrypt import crypto_asym, crypto_sym
from sshcrypt.models import PemKey
from sshcrypt.storage import read_bytes


class CryptoBackend:
    """Operaciones criptográficas respaldadas por `cryptography`."""

    def generate_random_bytes(self, n: int) -> bytes:
        return crypto_sym.generate_symmetric_key(n)

    def symmetric_encrypt(self, key: bytes, data: bytes) -> bytes:
        return crypto_sym.aes_cbc_encrypt_with_key(key, data)

    def symmetric_decrypt(self, key: bytes, data: bytes) -> bytes:
        return crypto_sym.aes_cbc_decrypt_with_key(key, data)

    def asymmetric_encrypt(self, pem_key: PemKey, data: bytes) -> bytes:
        return crypto_asym.rsa_oaep_encrypt(read_bytes(pem_key.path), data)

    def asymmetric_decrypt(self, pem_key: PemKey, data: bytes) -> bytes:
        return crypto_asym.rsa_oaep_decrypt(read_bytes(pem_key.path), data, pem_key.password)
