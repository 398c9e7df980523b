# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones propia de sshcrypt.
# --------------------------------------------------------------
"""Excepciones que separan errores de uso, de claves y de cifrado."""


class SshCryptError(Exception):
    """Excepción base para todos los errores de sshcrypt."""


class UsageError(SshCryptError):
    """Opciones contradictorias o ausentes, o archivo de entrada inexistente."""


class KeyConversionError(SshCryptError):
    """Clave inexistente, passphrase incorrecta, clave corrupta o de tipo no soportado."""


class EnvelopeError(SshCryptError):
    """Fallo al abrir el sobre: clave compañera ausente, clave privada errónea o datos corruptos."""
