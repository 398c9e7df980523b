# --------------------------------------------------------------
# File: storage.py
# Description: Utilidades de lectura y escritura atómica de artefactos.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para los archivos del sobre."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Optional

__all__ = ["read_bytes", "remove_if_exists", "write_atomic"]

logger = logging.getLogger(__name__)


def _default_mode() -> int:
    """Permisos de un archivo nuevo según la umask del proceso (como `open`)."""

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _ensure_parent_dir(path: str) -> str:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)
    return parent


def read_bytes(path: str) -> bytes:
    """Lee un archivo completo en modo binario."""

    with open(path, "rb") as handler:
        return handler.read()


def write_atomic(path: str, data: bytes, mode: Optional[int] = None) -> None:
    """Escribe `data` en `path` aplicando escritura atómica.

    El contenido se vuelca primero en un temporal único del mismo directorio,
    de modo que dos ejecuciones simultáneas nunca comparten nombre intermedio,
    y después se renombra sobre el destino.

    Args:
        path (str): Ruta final del archivo.
        data (bytes): Contenido a escribir.
        mode (Optional[int]): Permisos a aplicar antes del renombrado. Sin valor
            se usan los de un archivo nuevo (0666 menos la umask), no los 0600 de mkstemp.

    """

    parent = _ensure_parent_dir(path)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=parent)
    try:
        with os.fdopen(fd, "wb") as handler:
            handler.write(data)
        os.chmod(tmp_path, _default_mode() if mode is None else mode)
        os.replace(tmp_path, path)
    except Exception:
        remove_if_exists(tmp_path)
        raise
    logger.debug("escrito %s (%d bytes)", path, len(data))


def remove_if_exists(path: str) -> bool:
    """Elimina `path` si existe; devuelve True si había algo que borrar."""

    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    logger.debug("eliminado %s", path)
    return True
