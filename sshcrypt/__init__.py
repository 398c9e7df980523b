# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del paquete sshcrypt.
# --------------------------------------------------------------
"""Cifrado de archivos para destinatarios identificados por su clave SSH."""

__version__ = "0.1.0"

__all__ = [
    "backend",
    "cli",
    "config",
    "crypto_asym",
    "crypto_sym",
    "envelope",
    "errors",
    "keys",
    "models",
    "storage",
]
