# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from rsasteps import __main__ as cli
from rsasteps import keys


def run_cli(mocker, *argv: str) -> None:
    mocker.patch("sys.argv", ["rsasteps", *argv])
    cli.main()


def test_modpow_trace(mocker, capsys):
    run_cli(mocker, "-n", "modpow", "--base", "4", "--exponent", "13", "--modulus", "497")
    out = capsys.readouterr().out
    assert "Exponent in binary: 1101" in out
    assert out.rstrip().endswith("Final exponent bit processed. Result = 445")


@pytest.mark.parametrize("number,code", [(97, 0), (561, 1), (1, 1)])
def test_isprime(mocker, capsys, number, code):
    if code:
        with pytest.raises(SystemExit) as excinfo:
            run_cli(mocker, "-n", "isprime", "--number", str(number))
        assert excinfo.value.code == code
        assert f"{number} is not prime." in capsys.readouterr().out
    else:
        run_cli(mocker, "-n", "isprime", "--number", str(number))
        assert f"{number} is prime." in capsys.readouterr().out


def test_keygen_encrypt_decrypt(mocker, capsys, tmp_path):
    priv, pub = tmp_path / "key.pem", tmp_path / "key.pub"
    run_cli(mocker, "-n", "keygen", "--p", "17", "--q", "19", "-P", str(priv), "-p", str(pub))
    out = capsys.readouterr().out
    assert "n = p * q = 17 * 19 = 323" in out
    assert keys.RSAPrivKey.import_key(priv).expo == 173
    assert keys.RSAPubKey.import_key(pub).expo == 5

    run_cli(mocker, "-n", "encrypt", "-p", str(pub), "--message", "A")
    ciphertext = capsys.readouterr().out.strip()
    assert int(ciphertext) == pow(65, 5, 323)

    run_cli(mocker, "-n", "decrypt", "-P", str(priv), "--ciphertext", ciphertext, "--steps")
    out = capsys.readouterr().out
    assert f"({ciphertext} ^ 173) % 323" in out
    assert out.rstrip().endswith("A")


def test_keygen_random(mocker, capsys, tmp_path):
    priv, pub = tmp_path / "key.pem", tmp_path / "key.pub"
    run_cli(mocker, "-n", "keygen", "-P", str(priv), "-p", str(pub))
    assert "Public key (n, e)" in capsys.readouterr().out
    key = keys.RSAPrivKey.import_key(priv)
    low, high = keys.DEFAULT_PRIME_RANGE
    assert low <= key.p <= high and low <= key.q <= high


def test_keygen_refuses_overwrite(mocker, capsys, tmp_path):
    priv, pub = tmp_path / "key.pem", tmp_path / "key.pub"
    priv.write_text("keep me", encoding="ascii")
    with pytest.raises(SystemExit) as excinfo:
        run_cli(mocker, "-n", "keygen", "--p", "17", "--q", "19", "-P", str(priv), "-p", str(pub))
    assert excinfo.value.code == 1
    assert "already exists" in capsys.readouterr().out
    assert priv.read_text(encoding="ascii") == "keep me"


@pytest.mark.parametrize("argv,message", [
    (("keygen", "--p", "15", "--q", "19"), "p = 15 is not prime."),
    (("keygen", "--p", "17", "--q", "19", "--pub-exponent", "6"), "has no inverse"),
    (("modpow", "--base", "2", "--exponent", "-1", "--modulus", "7"), "Exponent must be non-negative."),
])
def test_library_errors_exit(mocker, capsys, tmp_path, argv, message):
    argv = argv + ("-P", str(tmp_path / "k.pem"), "-p", str(tmp_path / "k.pub")) if argv[0] == "keygen" else argv
    with pytest.raises(SystemExit) as excinfo:
        run_cli(mocker, "-n", *argv)
    assert excinfo.value.code == 2
    assert message in capsys.readouterr().out


def test_encrypt_too_large(mocker, capsys, tmp_path):
    pub = tmp_path / "key.pub"
    keys.RSAPrivKey(17, 19, 5).pub.export(pub)
    with pytest.raises(SystemExit) as excinfo:
        run_cli(mocker, "-n", "encrypt", "-p", str(pub), "--message", "HI")
    assert excinfo.value.code == 2
    assert "must be smaller than the modulus 323" in capsys.readouterr().out


def test_non_interactive_missing(mocker):
    with pytest.raises(IOError, match="Argument number is missing"):
        run_cli(mocker, "-n", "isprime")


def test_interactive_prompts(mocker, capsys):
    mocker.patch("builtins.input", side_effect=["isprime", "abc", "97"])
    run_cli(mocker)
    out = capsys.readouterr().out
    assert "We could not convert your value to int." in out
    assert "97 is prime." in out


def test_bad_key_file_exit(mocker, capsys, tmp_path):
    pub = tmp_path / "key.pub"
    pub.write_text("not a pem\n", encoding="ascii")
    with pytest.raises(SystemExit) as excinfo:
        run_cli(mocker, "-n", "encrypt", "-p", str(pub), "--message", "A")
    assert excinfo.value.code == 2
    assert "Error: PEM Headline not a pem does not match" in capsys.readouterr().out


def test_missing_key_file_exit(mocker, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(mocker, "-n", "decrypt", "-P", str(tmp_path / "absent.pem"), "--ciphertext", "32")
    assert excinfo.value.code == 2
    assert capsys.readouterr().out.startswith("Error: ")
