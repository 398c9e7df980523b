# --------------------------------------------------------------
# File: config.py
# Description: Lectura de variables de entorno y ajustes por defecto.
# --------------------------------------------------------------
"""Configuración de sshcrypt obtenida del entorno (y de un `.env` opcional)."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Permite crear la copia temporal de la clave privada sin passphrase.
# Solo para pruebas automatizadas: reduce la protección de esa copia.
NO_PASSWORD_ENV = "SC_TMP_DECRYPT_SSH_KEYGEN_NO_PASSWORD"
TMP_DIR_ENV = "SC_TMP_DIR"

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str) -> bool:
    """Interpreta una variable de entorno como booleano.

    Args:
        name (str): Nombre de la variable.

    Returns:
        bool: True si la variable vale `1`, `true`, `yes` u `on`.

    """

    return os.getenv(name, "").strip().lower() in _TRUTHY


def passphraseless_temp_key() -> bool:
    """Indica si la copia temporal de la clave privada puede ir sin passphrase."""

    return env_flag(NO_PASSWORD_ENV)


def temp_parent_dir() -> Optional[str]:
    """Directorio padre para la carpeta temporal de claves (None = el del sistema)."""

    return os.getenv(TMP_DIR_ENV) or None
