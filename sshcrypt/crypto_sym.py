# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-256-CBC con PBKDF2 para el cifrado del contenido.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico del archivo con una clave de un solo uso.

El formato es el de `openssl enc -aes-256-cbc -md sha512 -pbkdf2 -iter N
-salt -a`: cabecera `Salted__`, salt de 8 bytes, datos con relleno PKCS#7 y
armadura base64 en líneas de 64 columnas. La clave simétrica se usa como
password de PBKDF2-HMAC-SHA512, del que se derivan clave e IV a la vez.
"""

import base64
import os
from typing import Tuple

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

KEY_SIZE = 32
IV_SIZE = 16
SALT_SIZE = 8
SALT_MAGIC = b"Salted__"
ARMOR_WIDTH = 64
PBKDF2_ITERATIONS = 100_000


def generate_symmetric_key(length: int = KEY_SIZE) -> bytes:
    """Genera una clave aleatoria de un solo uso (256 bits por defecto).

    Args:
        length (int): Número de bytes a generar.

    Returns:
        bytes: Bytes procedentes del generador seguro del sistema.

    """

    return os.urandom(length)


def _derive_key_iv(password: bytes, salt: bytes, iterations: int) -> Tuple[bytes, bytes]:
    """Deriva clave AES e IV con PBKDF2-HMAC-SHA512."""

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_SIZE + IV_SIZE,
        salt=salt,
        iterations=iterations,
    )
    material = kdf.derive(password)
    return material[:KEY_SIZE], material[KEY_SIZE:]


def armor(data: bytes) -> bytes:
    """Codifica en base64 con líneas de 64 columnas, como `openssl -a`."""

    encoded = base64.b64encode(data)
    lines = [encoded[i : i + ARMOR_WIDTH] for i in range(0, len(encoded), ARMOR_WIDTH)]
    return b"".join(line + b"\n" for line in lines)


def dearmor(data: bytes) -> bytes:
    """Decodifica base64 ignorando saltos de línea; rechaza caracteres ajenos."""

    return base64.b64decode(b"".join(data.split()), validate=True)


def aes_cbc_encrypt_with_key(
    key: bytes, plaintext: bytes, iterations: int = PBKDF2_ITERATIONS
) -> bytes:
    """Cifra datos con AES-256-CBC usando `key` como password de PBKDF2.

    Args:
        key (bytes): Clave simétrica de un solo uso.
        plaintext (bytes): Datos en claro.
        iterations (int): Iteraciones de PBKDF2; ambos extremos deben usar el mismo valor.

    Returns:
        bytes: Ciphertext con cabecera `Salted__`, en armadura base64.

    """

    salt = os.urandom(SALT_SIZE)
    aes_key, iv = _derive_key_iv(key, salt, iterations)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext) + padder.finalize()

    encryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return armor(SALT_MAGIC + salt + ciphertext)


def aes_cbc_decrypt_with_key(
    key: bytes, armored: bytes, iterations: int = PBKDF2_ITERATIONS
) -> bytes:
    """Descifra un ciphertext producido por `aes_cbc_encrypt_with_key`.

    Args:
        key (bytes): Clave simétrica recuperada del sobre.
        armored (bytes): Ciphertext en armadura base64.
        iterations (int): Iteraciones de PBKDF2; ambos extremos deben usar el mismo valor.

    Returns:
        bytes: Datos originales en claro.

    Raises:
        ValueError: Armadura inválida, cabecera ausente, longitud o relleno incorrectos.

    """

    raw = dearmor(armored)
    if not raw.startswith(SALT_MAGIC) or len(raw) < len(SALT_MAGIC) + SALT_SIZE:
        raise ValueError("ciphertext sin cabecera Salted__")
    salt = raw[len(SALT_MAGIC) : len(SALT_MAGIC) + SALT_SIZE]
    ciphertext = raw[len(SALT_MAGIC) + SALT_SIZE :]
    aes_key, iv = _derive_key_iv(key, salt, iterations)

    decryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    return unpadder.update(padded) + unpadder.finalize()
