# -*- coding: utf-8 -*-
"""
cli.py  (local PRE tool: owner / proxy / delegate roles on files)
-----------------------------------------------------------------
Commands:
  pre-local keygen    --out keys/alice.json --public-out keys/alice.pub.json
  pre-local rekey     --owner keys/alice.json --delegate keys/bob.pub.json --out keys/rk_alice_bob.txt
  pre-local encrypt   --owner keys/alice.json --plaintext "hello" --store_dir keys/store
  pre-local reencrypt --rekey keys/rk_alice_bob.txt --object_id <OID> --store_dir keys/store
  pre-local decrypt   --key keys/bob.json --object_id <OID> --store_dir keys/store
  pre-local split     --key keys/alice.json --threshold 2 --shares 3 --out-dir keys/shares
  pre-local combine   --shares keys/shares/share_1.txt keys/shares/share_3.txt --out keys/alice.recovered.json

encrypt prints the object_id first so scripts can capture it.
reencrypt stores the first-level bundle as a new version of the same object;
decrypt picks the self or delegate path from the bundle level.

Notes:
- Key files hold the secret key in clear.  Use split/combine to keep
  offline backups instead of copying the key file around.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from precrypt import serialize
from precrypt.config import PreConfig
from precrypt.errors import PreError
from precrypt.models import FirstLevelEncryptionResponse, KeyPair, SecretKey
from precrypt.object_store import FileObjectStore
from precrypt.pre import PreClient
from precrypt.proxy import re_encrypt_response
from precrypt.serialize import b64d, b64e
from precrypt.sharing import combine_secret, split_secret


def _client(args: argparse.Namespace) -> PreClient:
    return PreClient(config=args.config, validate_uploads=getattr(args, "validate", False))


# ── owner ────────────────────────────────────────────────────────────────────

def cmd_keygen(args: argparse.Namespace) -> None:
    kp = _client(args).generate_random_key_pair()
    serialize.save_json(args.out, serialize.dump_key_pair(kp))
    print(f"[OWNER] KeyGen OK -> {args.out}")
    if args.public_out:
        serialize.save_json(args.public_out, serialize.dump_public_key(kp.public_key))
        print(f"[OWNER] Public key -> {args.public_out}")


def cmd_rekey(args: argparse.Namespace) -> None:
    client = _client(args)
    owner = serialize.load_key_pair(serialize.load_json(args.owner))
    delegate_pk = serialize.load_public_key(serialize.load_json(args.delegate))

    rk = client.generate_re_encryption_key(owner.secret_key.first, delegate_pk.second)

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        f.write(serialize.dump_re_key(rk))
    print(f"[OWNER] ReKeyGen OK -> {args.out}")


def cmd_encrypt(args: argparse.Namespace) -> None:
    client = _client(args)
    owner = serialize.load_key_pair(serialize.load_json(args.owner))

    if args.infile:
        with open(args.infile, "rb") as f:
            message = f.read()
    else:
        message = args.plaintext.encode("utf-8")

    resp = client.second_level_encrypt(owner.secret_key, message, client.generate_random_scalar())

    store = FileObjectStore(args.store_dir)
    obj_id = store.put(serialize.dump_response(resp))

    print(obj_id)
    print(f"[OWNER] Encrypt OK -> {args.store_dir}/{obj_id}  ({len(message)} bytes)")


# ── proxy ────────────────────────────────────────────────────────────────────

def cmd_reencrypt(args: argparse.Namespace) -> None:
    with open(args.rekey, "r", encoding="utf-8") as f:
        rk = serialize.load_re_key(f.read())

    store = FileObjectStore(args.store_dir)
    resp = serialize.load_response(store.get(args.object_id, version=args.version))
    if isinstance(resp, FirstLevelEncryptionResponse):
        raise SystemExit("[PROXY] ReEncrypt FAILED: object is already a first-level ciphertext")

    first_level = re_encrypt_response(resp, rk)
    store.put(serialize.dump_response(first_level), object_id=args.object_id)
    print(f"[PROXY] ReEncrypt OK -> {args.object_id} "
          f"(version {store.latest_version(args.object_id)})")


# ── delegate / owner ─────────────────────────────────────────────────────────

def cmd_decrypt(args: argparse.Namespace) -> None:
    client = _client(args)
    kp = serialize.load_key_pair(serialize.load_json(args.key))

    store = FileObjectStore(args.store_dir)
    resp = serialize.load_response(store.get(args.object_id, version=args.version))

    if isinstance(resp, FirstLevelEncryptionResponse):
        role = "DELEGATE"
        pt = client.decrypt_first_level(resp, kp.secret_key)
    else:
        role = "OWNER"
        pt = client.decrypt_second_level(resp.encrypted_key, resp.encrypted_message, kp.secret_key)

    if args.outfile:
        with open(args.outfile, "wb") as f:
            f.write(pt)
        print(f"[{role}] Decrypt OK -> {args.outfile}")
    else:
        print(f"[{role}] Plaintext:", pt.decode("utf-8", errors="replace"))


# ── key backup ───────────────────────────────────────────────────────────────

def cmd_split(args: argparse.Namespace) -> None:
    kp = serialize.load_key_pair(serialize.load_json(args.key))
    shares = split_secret(kp.secret_key.to_bytes(), args.threshold, args.shares)

    os.makedirs(args.out_dir, exist_ok=True)
    for share in shares:
        path = os.path.join(args.out_dir, f"share_{share[0]}.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write(b64e(share))
    print(f"[OWNER] Split OK -> {args.out_dir}  ({args.threshold}-of-{args.shares})")


def cmd_combine(args: argparse.Namespace) -> None:
    shares = []
    for path in args.shares:
        with open(path, "r", encoding="utf-8") as f:
            shares.append(b64d(f.read().strip()))

    sk = SecretKey.from_bytes(combine_secret(shares))
    kp = KeyPair(secret_key=sk, public_key=_client(args).secret_to_public_key(sk))
    serialize.save_json(args.out, serialize.dump_key_pair(kp))
    print(f"[OWNER] Combine OK -> {args.out}")


# ── main ─────────────────────────────────────────────────────────────────────

def build_parser(config: PreConfig) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="BN254 proxy re-encryption tool")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    s0 = sub.add_parser("keygen", help="Generate a key pair")
    s0.add_argument("--out",        required=True, help="Key pair JSON output path")
    s0.add_argument("--public-out", dest="public_out", help="Also write the public key alone")
    s0.set_defaults(func=cmd_keygen)

    s1 = sub.add_parser("rekey", help="Derive a re-encryption key owner -> delegate")
    s1.add_argument("--owner",    required=True, help="Owner key pair JSON")
    s1.add_argument("--delegate", required=True, help="Delegate public key (or key pair) JSON")
    s1.add_argument("--out",      required=True, help="Output path for the base64 re-encryption key")
    s1.set_defaults(func=cmd_rekey)

    s2 = sub.add_parser("encrypt", help="Second-level encrypt and store a message")
    s2.add_argument("--owner", required=True, help="Owner key pair JSON")
    src = s2.add_mutually_exclusive_group(required=True)
    src.add_argument("--plaintext", help="Plaintext string to encrypt")
    src.add_argument("--in", dest="infile", help="File to encrypt")
    s2.add_argument("--store_dir", default=config.store_dir, help="Ciphertext store directory")
    s2.add_argument("--validate", action="store_true",
                    help="Apply the upload policy (image types, size limit)")
    s2.set_defaults(func=cmd_encrypt)

    s3 = sub.add_parser("reencrypt", help="Proxy: transform a stored ciphertext for the delegate")
    s3.add_argument("--rekey",     required=True, help="Re-encryption key file")
    s3.add_argument("--object_id", required=True, help="Object ID printed by encrypt")
    s3.add_argument("--version",   type=int, default=None, help="Version to transform (default: latest)")
    s3.add_argument("--store_dir", default=config.store_dir, help="Ciphertext store directory")
    s3.set_defaults(func=cmd_reencrypt)

    s4 = sub.add_parser("decrypt", help="Decrypt a stored ciphertext")
    s4.add_argument("--key",       required=True, help="Key pair JSON of the reader")
    s4.add_argument("--object_id", required=True, help="Object ID printed by encrypt")
    s4.add_argument("--version",   type=int, default=None, help="Version to decrypt (default: latest)")
    s4.add_argument("--store_dir", default=config.store_dir, help="Ciphertext store directory")
    s4.add_argument("--out", dest="outfile", help="Write plaintext bytes here instead of printing")
    s4.set_defaults(func=cmd_decrypt)

    s5 = sub.add_parser("split", help="Split a secret key into backup shares")
    s5.add_argument("--key",       required=True, help="Key pair JSON")
    s5.add_argument("--threshold", type=int, default=2, help="Shares needed to recover (default: 2)")
    s5.add_argument("--shares",    type=int, default=3, help="Shares to create (default: 3)")
    s5.add_argument("--out-dir",   dest="out_dir", required=True, help="Directory for share files")
    s5.set_defaults(func=cmd_split)

    s6 = sub.add_parser("combine", help="Recover a key pair from backup shares")
    s6.add_argument("--shares", nargs="+", required=True, help="Share files")
    s6.add_argument("--out",    required=True, help="Recovered key pair JSON")
    s6.set_defaults(func=cmd_combine)
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    config = PreConfig.from_env()
    args = build_parser(config).parse_args(argv)
    args.config = config
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    try:
        args.func(args)
    except (PreError, ValueError, FileNotFoundError) as e:
        raise SystemExit(f"[ERROR] {type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
