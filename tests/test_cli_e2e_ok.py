import json
import os
import sys
import subprocess
from pathlib import Path

import re

OID_RE = re.compile(r"([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})", re.I)

def parse_object_id(output: str) -> str:
    m = OID_RE.search(output)
    assert m, f"Cannot parse object_id from output:\n{output}"
    return m.group(1)

ROOT = Path(__file__).resolve().parents[1]
PY = sys.executable
CLI = [PY, "-m", "precrypt.cli"]

def _env():
    env = os.environ.copy()

    env["PYTHONPATH"] = os.pathsep.join([
        str(ROOT),
        env.get("PYTHONPATH", "")
    ])

    return env

def run(args, cwd=None) -> str:
    r = subprocess.run(args, cwd=cwd, env=_env(), capture_output=True, text=True)
    assert r.returncode == 0, (
        f"CMD failed:\n{args}\nSTDOUT:\n{r.stdout}\nSTDERR:\n{r.stderr}"
    )
    return r.stdout

def test_cli_e2e_ok(tmp_path: Path):
    keys = tmp_path / "keys"
    store = keys / "store"
    keys.mkdir()

    alice = keys / "alice.json"
    bob = keys / "bob.json"
    bob_pub = keys / "bob.pub.json"
    rk = keys / "rk_alice_bob.txt"

    # 1) key pairs
    run(CLI + ["keygen", "--out", str(alice)])
    run(CLI + ["keygen", "--out", str(bob), "--public-out", str(bob_pub)])
    assert "SecretKey" not in json.loads(bob_pub.read_text())

    # 2) Alice delegates to Bob
    run(CLI + ["rekey", "--owner", str(alice), "--delegate", str(bob_pub), "--out", str(rk)])

    # 3) Encrypt -> object_id
    out = run(CLI + ["encrypt",
                     "--owner", str(alice),
                     "--plaintext", "hello world",
                     "--store_dir", str(store)])
    object_id = parse_object_id(out)

    # 4) Alice can read her own second-level ciphertext
    out2 = run(CLI + ["decrypt", "--key", str(alice),
                      "--object_id", object_id, "--store_dir", str(store)])
    assert "[OWNER] Plaintext: hello world" in out2

    # 5) Proxy transforms it for Bob (stored as version 2)
    out3 = run(CLI + ["reencrypt", "--rekey", str(rk),
                      "--object_id", object_id, "--store_dir", str(store)])
    assert "version 2" in out3

    # 6) Bob decrypts the re-encrypted version
    out4 = run(CLI + ["decrypt", "--key", str(bob),
                      "--object_id", object_id, "--store_dir", str(store)])
    assert "[DELEGATE] Plaintext: hello world" in out4

def test_cli_file_roundtrip(tmp_path: Path):
    keys = tmp_path / "keys"
    store = keys / "store"
    keys.mkdir()
    alice = keys / "alice.json"
    src = tmp_path / "photo.png"
    dst = tmp_path / "photo.out.png"
    src.write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)))

    run(CLI + ["keygen", "--out", str(alice)])
    out = run(CLI + ["encrypt", "--owner", str(alice), "--in", str(src),
                     "--validate", "--store_dir", str(store)])
    object_id = parse_object_id(out)
    run(CLI + ["decrypt", "--key", str(alice), "--object_id", object_id,
               "--store_dir", str(store), "--out", str(dst)])
    assert dst.read_bytes() == src.read_bytes()

def test_cli_split_combine(tmp_path: Path):
    keys = tmp_path / "keys"
    keys.mkdir()
    alice = keys / "alice.json"
    shares = keys / "shares"
    recovered = keys / "alice.recovered.json"

    run(CLI + ["keygen", "--out", str(alice)])
    run(CLI + ["split", "--key", str(alice), "--threshold", "2", "--shares", "3",
               "--out-dir", str(shares)])
    assert sorted(p.name for p in shares.iterdir()) == ["share_1.txt", "share_2.txt", "share_3.txt"]

    run(CLI + ["combine", "--shares", str(shares / "share_1.txt"), str(shares / "share_3.txt"),
               "--out", str(recovered)])
    assert json.loads(recovered.read_text()) == json.loads(alice.read_text())
