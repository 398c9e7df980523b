# --------------------------------------------------------------
# File: envelope.py
# Description: Orquestación del cifrado y descifrado en sobre de archivos.
# --------------------------------------------------------------
"""Cifrado híbrido de archivos para destinatarios con clave SSH.

Cifrar `name.ext` produce `name.ext.enc` (contenido cifrado con una clave
simétrica de un solo uso) y `name.ext.symmetric-key.enc` (esa clave cifrada
con la clave pública del destinatario, en base64). Descifrar `name.ext.enc`
recupera `name.ext` con la clave privada correspondiente.

Las claves simétricas y sus formas intermedias viven solo en memoria; en
disco aparecen únicamente los artefactos finales.
"""

from __future__ import annotations

import base64
import binascii
import getpass
import logging
import os
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm

from sshcrypt.backend import CryptoBackend
from sshcrypt.crypto_sym import KEY_SIZE, dearmor
from sshcrypt.errors import EnvelopeError, KeyConversionError, UsageError
from sshcrypt.keys import Prompt, prepare_private_key, prepare_public_key
from sshcrypt.models import CryptConfig, DecryptMode, EncryptMode, EnvelopePaths
from sshcrypt.storage import read_bytes, remove_if_exists, write_atomic

logger = logging.getLogger(__name__)


def _require_file(path: str) -> None:
    if not os.path.isfile(path):
        raise UsageError(f"{path}: no existe el archivo de entrada")


def _write_envelope(paths: EnvelopePaths, ciphertext: bytes, encoded_key: bytes) -> None:
    """Escribe ambos artefactos o ninguno."""

    write_atomic(paths.ciphertext, ciphertext)
    try:
        write_atomic(paths.symmetric_key, encoded_key)
    except Exception:
        remove_if_exists(paths.ciphertext)
        raise


def encrypt_file(
    plaintext_path: str,
    cfg: CryptConfig,
    *,
    backend: Optional[CryptoBackend] = None,
) -> EnvelopePaths:
    """Cifra un archivo para el titular de la clave pública configurada.

    Args:
        plaintext_path (str): Archivo en claro.
        cfg (CryptConfig): Configuración en modo cifrado.
        backend (Optional[CryptoBackend]): Implementación de las primitivas.

    Returns:
        EnvelopePaths: Rutas de `<basename>.enc` y `<basename>.symmetric-key.enc`.

    Raises:
        UsageError: Modo incorrecto o archivo de entrada inexistente.
        KeyConversionError: Clave pública ausente, corrupta o no RSA.
        EnvelopeError: Fallo en alguna primitiva de cifrado.

    """

    if not isinstance(cfg.mode, EncryptMode):
        raise UsageError("la configuración no está en modo cifrado")
    _require_file(plaintext_path)
    backend = backend or CryptoBackend()
    paths = EnvelopePaths.for_plaintext(plaintext_path, cfg.output_dir)

    logger.info("generando clave simétrica de %d bits", KEY_SIZE * 8)
    key = backend.generate_random_bytes(KEY_SIZE)

    logger.info("cifrando %s con AES-256-CBC", plaintext_path)
    try:
        ciphertext = backend.symmetric_encrypt(key, read_bytes(plaintext_path))
    except ValueError as exc:
        raise EnvelopeError(f"{plaintext_path}: fallo en el cifrado simétrico") from exc

    pem_key = prepare_public_key(cfg.mode.public_key)

    logger.info("cifrando la clave simétrica con %s", pem_key.path)
    try:
        wrapped = backend.asymmetric_encrypt(pem_key, key)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyConversionError(f"{pem_key.path}: clave pública no utilizable") from exc
    encoded_key = base64.encodebytes(wrapped)
    del key, wrapped

    _write_envelope(paths, ciphertext, encoded_key)
    logger.info("generados %s y %s", paths.ciphertext, paths.symmetric_key)
    return paths


def decrypt_file(
    ciphertext_path: str,
    cfg: CryptConfig,
    *,
    backend: Optional[CryptoBackend] = None,
    prompt: Prompt = getpass.getpass,
) -> str:
    """Descifra `<name>.enc` usando su clave compañera y la clave privada.

    Args:
        ciphertext_path (str): Archivo cifrado terminado en `.enc`.
        cfg (CryptConfig): Configuración en modo descifrado.
        backend (Optional[CryptoBackend]): Implementación de las primitivas.
        prompt (Prompt): Petición de passphrases.

    Returns:
        str: Ruta del archivo en claro recuperado.

    Raises:
        UsageError: Modo incorrecto, ciphertext inexistente o sin sufijo `.enc`.
        KeyConversionError: Clave privada ausente, corrupta o passphrase incorrecta.
        EnvelopeError: Clave compañera ausente, clave privada que no
            corresponde o ciphertext corrupto.

    """

    if not isinstance(cfg.mode, DecryptMode):
        raise UsageError("la configuración no está en modo descifrado")
    paths = EnvelopePaths.for_ciphertext(ciphertext_path)
    _require_file(paths.ciphertext)
    # La clave compañera se exige antes de tocar la clave privada.
    if not os.path.isfile(paths.symmetric_key):
        raise EnvelopeError(f"{paths.symmetric_key}: no existe la clave simétrica cifrada")
    backend = backend or CryptoBackend()

    with prepare_private_key(
        cfg.mode.private_key,
        allow_passphraseless=cfg.allow_passphraseless_temp_key,
        prompt=prompt,
    ) as pem_key:
        try:
            wrapped = dearmor(read_bytes(paths.symmetric_key))
        except binascii.Error as exc:
            raise EnvelopeError(f"{paths.symmetric_key}: base64 no válido") from exc

        logger.info("descifrando la clave simétrica con %s", cfg.mode.private_key)
        try:
            key = backend.asymmetric_decrypt(pem_key, wrapped)
        except ValueError as exc:
            raise EnvelopeError(
                f"{paths.symmetric_key}: la clave privada no corresponde o el archivo está dañado"
            ) from exc
        except (TypeError, UnsupportedAlgorithm) as exc:
            raise KeyConversionError(f"{pem_key.path}: clave privada no utilizable") from exc
    del wrapped

    logger.info("descifrando %s", paths.ciphertext)
    try:
        plaintext = backend.symmetric_decrypt(key, read_bytes(paths.ciphertext))
    except ValueError as exc:
        raise EnvelopeError(f"{paths.ciphertext}: ciphertext corrupto o clave incorrecta") from exc
    finally:
        del key

    output_path = paths.plaintext_path(cfg.output_dir)
    write_atomic(output_path, plaintext)
    logger.info("recuperado %s", output_path)
    return output_path
