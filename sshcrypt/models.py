# --------------------------------------------------------------
# File: models.py
# Description: Modelos de configuración y de nombres de artefactos del sobre.
# --------------------------------------------------------------
"""Modelos Pydantic que describen una ejecución de sshcrypt."""

from __future__ import annotations

import os
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sshcrypt import config
from sshcrypt.errors import UsageError

ENC_SUFFIX = ".enc"
SYMMETRIC_KEY_SUFFIX = ".symmetric-key.enc"


class EncryptMode(BaseModel):
    """Cifrado para el titular de `public_key`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["encrypt"] = "encrypt"
    public_key: str


class DecryptMode(BaseModel):
    """Descifrado con la clave privada `private_key`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["decrypt"] = "decrypt"
    private_key: str


class CryptConfig(BaseModel):
    """Configuración explícita que recibe cada etapa del proceso.

    Attributes:
        mode (EncryptMode | DecryptMode): Operación y ruta de la clave.
        verbose (bool): Activa el registro a nivel INFO.
        allow_passphraseless_temp_key (bool): Permite que la copia PEM
            temporal de la clave privada se cree sin passphrase.
        output_dir (str): Directorio donde se escriben los resultados.

    """

    model_config = ConfigDict(frozen=True)

    mode: Union[EncryptMode, DecryptMode] = Field(discriminator="kind")
    verbose: bool = False
    allow_passphraseless_temp_key: bool = False
    output_dir: str = "."

    @classmethod
    def from_args(
        cls,
        *,
        encrypt: Optional[str] = None,
        decrypt: Optional[str] = None,
        verbose: bool = False,
        output_dir: Optional[str] = None,
    ) -> "CryptConfig":
        """Construye la configuración a partir de las opciones de la CLI.

        Args:
            encrypt (Optional[str]): Clave pública del destinatario.
            decrypt (Optional[str]): Clave privada propia.
            verbose (bool): Registro detallado.
            output_dir (Optional[str]): Directorio de salida; por defecto el actual.

        Returns:
            CryptConfig: Configuración inmutable lista para usar.

        """

        if encrypt and decrypt:
            raise UsageError("--encrypt y --decrypt son excluyentes")
        if encrypt:
            mode: Union[EncryptMode, DecryptMode] = EncryptMode(
                public_key=os.path.expanduser(encrypt)
            )
        elif decrypt:
            mode = DecryptMode(private_key=os.path.expanduser(decrypt))
        else:
            raise UsageError("se requiere --encrypt o --decrypt")

        return cls(
            mode=mode,
            verbose=verbose,
            allow_passphraseless_temp_key=config.passphraseless_temp_key(),
            output_dir=os.path.expanduser(output_dir) if output_dir else ".",
        )


class EnvelopePaths(BaseModel):
    """Rutas de los dos artefactos que forman un sobre cifrado."""

    model_config = ConfigDict(frozen=True)

    ciphertext: str
    symmetric_key: str

    @classmethod
    def for_plaintext(cls, plaintext_path: str, output_dir: str = ".") -> "EnvelopePaths":
        """Nombres de salida al cifrar `name.ext`: `name.ext.enc` y `name.ext.symmetric-key.enc`."""

        base = os.path.join(output_dir, os.path.basename(plaintext_path))
        return cls(ciphertext=base + ENC_SUFFIX, symmetric_key=base + SYMMETRIC_KEY_SUFFIX)

    @classmethod
    def for_ciphertext(cls, ciphertext_path: str) -> "EnvelopePaths":
        """Localiza la clave compañera junto al ciphertext.

        Raises:
            UsageError: Si la ruta no termina en `.enc`.

        """

        if not ciphertext_path.endswith(ENC_SUFFIX):
            raise UsageError(f"{ciphertext_path}: se esperaba un archivo terminado en {ENC_SUFFIX}")
        stem = ciphertext_path[: -len(ENC_SUFFIX)]
        return cls(ciphertext=ciphertext_path, symmetric_key=stem + SYMMETRIC_KEY_SUFFIX)

    def plaintext_path(self, output_dir: str = ".") -> str:
        """Ruta del archivo en claro que produce el descifrado."""

        name = os.path.basename(self.ciphertext)[: -len(ENC_SUFFIX)]
        return os.path.join(output_dir, name)


class PemKey(BaseModel):
    """Clave asimétrica lista para usar en formato PEM.

    Attributes:
        path (str): Ruta del archivo PEM.
        password (Optional[bytes]): Passphrase que protege el PEM, si la hay.
        converted (bool): True si el PEM se generó a partir de una clave OpenSSH.

    """

    model_config = ConfigDict(frozen=True)

    path: str
    password: Optional[bytes] = None
    converted: bool = False
