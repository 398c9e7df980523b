# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar el entorno y generar claves RSA.
# --------------------------------------------------------------

import os
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from sshcrypt import config


def write_ssh_keypair(
    directory: Path,
    key: rsa.RSAPrivateKey,
    name: str = "id_rsa",
    password: Optional[bytes] = None,
) -> Tuple[Path, Path]:
    """Escribe un par de claves en formato OpenSSH, como `ssh-keygen -N ...`.

    Args:
        directory (Path): Carpeta de destino.
        key (rsa.RSAPrivateKey): Clave a serializar.
        name (str): Nombre base de los archivos.
        password (Optional[bytes]): Passphrase de la clave privada; sin ella
            se escribe en claro, como `ssh-keygen -N ""`.

    Returns:
        Tuple[Path, Path]: Rutas de la clave privada y de la pública.
    """
    directory.mkdir(parents=True, exist_ok=True)
    priv = directory / name
    priv.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=(
                serialization.BestAvailableEncryption(password)
                if password
                else serialization.NoEncryption()
            ),
        )
    )
    os.chmod(priv, 0o600)
    pub = directory / f"{name}.pub"
    pub.write_bytes(
        key.public_key().public_bytes(
            encoding=serialization.Encoding.OpenSSH,
            format=serialization.PublicFormat.OpenSSH,
        )
        + b" temporary-key\n"
    )
    return priv, pub


@pytest.fixture(autouse=True)
def _isolate_workdir(tmp_path_factory, monkeypatch) -> Iterator[Path]:
    """Ejecuta cada prueba en una carpeta de trabajo vacía y con entorno limpio.

    Args:
        tmp_path_factory (pytest.TempPathFactory): Crea una base propia,
            separada de `tmp_path`.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar entorno y cwd.

    Returns:
        Iterator[Path]: Carpeta de trabajo de la prueba.
    """
    base = tmp_path_factory.mktemp("env")
    work = base / "work"
    work.mkdir()
    temp_parent = base / "_tmp"
    temp_parent.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.delenv(config.NO_PASSWORD_ENV, raising=False)
    monkeypatch.setenv(config.TMP_DIR_ENV, str(temp_parent))
    yield work


@pytest.fixture
def workdir(_isolate_workdir) -> Path:
    """Carpeta de trabajo actual de la prueba."""
    return _isolate_workdir


@pytest.fixture
def temp_parent(_isolate_workdir) -> Path:
    """Carpeta donde se crean los directorios temporales de claves."""
    return _isolate_workdir.parent / "_tmp"


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Clave RSA de 2048 bits compartida por toda la sesión."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key() -> rsa.RSAPrivateKey:
    """Segunda clave RSA, ajena a la primera."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def ssh_keypair(tmp_path, rsa_private_key) -> Tuple[Path, Path]:
    """Par OpenSSH (privada, pública) fuera de la carpeta de trabajo."""
    return write_ssh_keypair(tmp_path / "_ssh", rsa_private_key)


@pytest.fixture
def other_ssh_keypair(tmp_path, other_rsa_private_key) -> Tuple[Path, Path]:
    """Par OpenSSH que no corresponde a `ssh_keypair`."""
    return write_ssh_keypair(tmp_path / "_ssh_other", other_rsa_private_key)


@pytest.fixture
def prompt_factory() -> Callable[..., Callable[[str], str]]:
    """Construye funciones de petición que devuelven respuestas predefinidas.

    Returns:
        Callable[..., Callable[[str], str]]: Fábrica que recibe las respuestas
        en orden y devuelve un sustituto de `getpass.getpass`.
    """

    def factory(*answers: str) -> Callable[[str], str]:
        replies = iter(answers)
        asked = []

        def prompt(message: str) -> str:
            asked.append(message)
            return next(replies)

        prompt.asked = asked
        return prompt

    return factory


@pytest.fixture
def keypair_writer() -> Callable[..., Tuple[Path, Path]]:
    """Expone `write_ssh_keypair` a las pruebas que generan sus propias claves."""
    return write_ssh_keypair
