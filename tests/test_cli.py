# tests/test_cli.py
import json

from pkg_jwt.cli import main


def _run(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


def test_encode_then_decode(capsys):
    code, out = _run(capsys, ["encode", "--key", "s3cret", "--claims", '{"sub": "a"}', "--exp", "600"])
    assert code == 0
    token = out["token"]

    code, out = _run(capsys, ["decode", token, "--key", "s3cret"])
    assert code == 0
    assert out["claims"]["sub"] == "a"
    assert "exp" in out["claims"]


def test_decode_failure_is_reported(capsys):
    code, out = _run(capsys, ["decode", "a.b", "--key", "s3cret"])
    assert code == 1
    assert out == {"ok": False, "error": "invalid_token", "detail": "Token must have three segments"}


def test_unsupported_algorithm(capsys):
    code, out = _run(capsys, ["encode", "--alg", "PS256", "--key", "s3cret"])
    assert code == 1
    assert out["error"] == "algorithm_not_supported"


def test_issuer_keys_and_key_files(capsys, tmp_path):
    key_file = tmp_path / "partner.key"
    key_file.write_text("partner-secret")

    _, out = _run(capsys, ["encode", "--key", f"@{key_file}", "--claims", '{"iss": "partner"}'])
    token = out["token"]

    code, out = _run(capsys, ["decode", token, "--key", "ours", "-I", "partner", f"@{key_file}"])
    assert code == 0
    assert out["claims"] == {"iss": "partner"}


def test_jwks_file(capsys, tmp_path):
    jwks_file = tmp_path / "jwks.json"
    # "c2VjcmV0" is base64url("secret")
    jwks_file.write_text(json.dumps({"keys": [{"kty": "oct", "kid": "k1", "k": "c2VjcmV0"}]}))

    _, out = _run(capsys, ["encode", "--key", "secret", "--kid", "k1"])
    code, out = _run(capsys, ["decode", out["token"], "--jwks", str(jwks_file)])
    assert code == 0
    assert out["claims"] == {}
