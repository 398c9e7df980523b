# --------------------------------------------------------------
# File: test_cli.py
# Description: Pruebas de la interfaz de línea de órdenes ssh-crypt.
# --------------------------------------------------------------

import os

import pytest

from sshcrypt import __version__
from sshcrypt.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main


@pytest.fixture
def hello_file(tmp_path):
    """Archivo `test-file` con `hello world\\n`."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    path = data_dir / "test-file"
    path.write_text("hello world\n")
    return path


def test_encrypt_then_decrypt(hello_file, ssh_keypair, tmp_path, monkeypatch):
    """Comprueba el ciclo completo desde la CLI en carpetas separadas.

    Returns:
        None: El archivo descifrado es idéntico al original.
    """
    priv, pub = ssh_keypair
    encrypt_dir = tmp_path / "encrypt"
    decrypt_dir = tmp_path / "decrypt"
    encrypt_dir.mkdir()
    decrypt_dir.mkdir()

    monkeypatch.chdir(encrypt_dir)
    assert main(["-e", str(pub), str(hello_file)]) == EXIT_OK
    assert sorted(os.listdir(encrypt_dir)) == ["test-file.enc", "test-file.symmetric-key.enc"]

    monkeypatch.chdir(decrypt_dir)
    monkeypatch.setenv("SC_TMP_DECRYPT_SSH_KEYGEN_NO_PASSWORD", "1")
    assert main(["--decrypt", str(priv), str(encrypt_dir / "test-file.enc")]) == EXIT_OK
    assert (decrypt_dir / "test-file").read_bytes() == hello_file.read_bytes()


def test_both_modes_is_usage_error(hello_file, ssh_keypair, capsys):
    """Verifica que `-e` y `-d` juntos terminen con código de uso.

    Returns:
        None: argparse sale con código 2.
    """
    priv, pub = ssh_keypair
    with pytest.raises(SystemExit) as exc:
        main(["-e", str(pub), "-d", str(priv), str(hello_file)])
    assert exc.value.code == EXIT_USAGE


def test_no_mode_is_usage_error(hello_file):
    """Comprueba que omitir `-e` y `-d` sea un error de uso.

    Returns:
        None: argparse sale con código 2.
    """
    with pytest.raises(SystemExit) as exc:
        main([str(hello_file)])
    assert exc.value.code == EXIT_USAGE


def test_missing_input_file(ssh_keypair, workdir):
    """Garantiza que un archivo inexistente devuelva código de uso sin tocar nada.

    Returns:
        None: Código 2 y carpeta de trabajo vacía.
    """
    _, pub = ssh_keypair
    assert main(["-e", str(pub), "missing.txt"]) == EXIT_USAGE
    assert os.listdir(workdir) == []


def test_wrong_key_fails(hello_file, ssh_keypair, other_ssh_keypair, workdir, monkeypatch):
    """Verifica que descifrar con otra clave devuelva error sin salida en claro.

    Returns:
        None: Código 1 y ningún `test-file` en la carpeta.
    """
    _, pub = ssh_keypair
    other_priv, _ = other_ssh_keypair
    assert main(["-e", str(pub), str(hello_file)]) == EXIT_OK
    monkeypatch.setenv("SC_TMP_DECRYPT_SSH_KEYGEN_NO_PASSWORD", "1")
    assert main(["-d", str(other_priv), "test-file.enc"]) == EXIT_FAILURE
    assert not (workdir / "test-file").exists()


def test_missing_key_file_fails(hello_file, tmp_path):
    """Comprueba que una clave pública inexistente sea un fallo de clave.

    Returns:
        None: Código 1.
    """
    assert main(["-e", str(tmp_path / "nope.pub"), str(hello_file)]) == EXIT_FAILURE


def test_version(capsys):
    """Valida que `-V` muestre la versión y salga con éxito.

    Returns:
        None: La salida estándar contiene el número de versión.
    """
    with pytest.raises(SystemExit) as exc:
        main(["-V"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out
