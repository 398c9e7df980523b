# --------------------------------------------------------------
# File: cli.py
# Description: Interfaz de línea de órdenes `ssh-crypt`.
# --------------------------------------------------------------
"""Punto de entrada de la herramienta `ssh-crypt`.

Uso::

    ssh-crypt -e ~/.ssh/id_rsa.pub archivo.txt    # archivo.txt.enc + archivo.txt.symmetric-key.enc
    ssh-crypt -d ~/.ssh/id_rsa archivo.txt.enc    # archivo.txt

Códigos de salida: 0 éxito, 2 error de uso, 1 error de clave o de cifrado.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from sshcrypt import __version__
from sshcrypt.envelope import decrypt_file, encrypt_file
from sshcrypt.errors import SshCryptError, UsageError
from sshcrypt.models import CryptConfig, EncryptMode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Define las opciones de la herramienta."""

    parser = argparse.ArgumentParser(
        prog="ssh-crypt",
        description=(
            "Cifra un archivo para el titular de una clave pública SSH, o lo "
            "descifra con la clave privada correspondiente."
        ),
        epilog=(
            "SC_TMP_DECRYPT_SSH_KEYGEN_NO_PASSWORD=1 crea la copia PEM temporal "
            "de la clave privada sin passphrase (solo para pruebas)."
        ),
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "-e",
        "--encrypt",
        metavar="PATH_TO_RECIPIENT_PUBLIC_KEY",
        help="Cifra para la clave pública indicada.",
    )
    action.add_argument(
        "-d",
        "--decrypt",
        metavar="PATH_TO_PRIVATE_KEY",
        help="Descifra con la clave privada indicada.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        metavar="DIR",
        help="Directorio de salida. (por defecto: el directorio actual)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Muestra cada paso del proceso (nivel INFO).",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("input", metavar="path/to/input/file", help="Archivo a cifrar o descifrar.")
    return parser


def setup_logging(verbose: bool = False) -> None:
    """Configura el nivel de registro según las opciones del usuario."""

    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def run(cfg: CryptConfig, input_path: str) -> None:
    """Ejecuta el cifrado o el descifrado según el modo configurado."""

    if isinstance(cfg.mode, EncryptMode):
        encrypt_file(input_path, cfg)
    else:
        decrypt_file(input_path, cfg)


def main(argv: Optional[List[str]] = None) -> int:
    """Analiza los argumentos, ejecuta la operación y devuelve el código de salida."""

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    input_path = os.path.expanduser(args.input)
    try:
        cfg = CryptConfig.from_args(
            encrypt=args.encrypt,
            decrypt=args.decrypt,
            verbose=args.verbose,
            output_dir=args.output_dir,
        )
        if not os.path.isfile(input_path):
            raise UsageError(f"{input_path}: no existe el archivo de entrada")
        run(cfg, input_path)
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        logger.error("%s", exc)
        return EXIT_USAGE
    except SshCryptError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    except OSError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
