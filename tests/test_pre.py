import pytest

from precrypt import codec
from precrypt.config import PreConfig
from precrypt.errors import (
    DecryptionFailed,
    InvalidKeySize,
    InvalidScalar,
    NonInvertibleScalar,
    ValidationError,
)
from precrypt.models import FirstLevelSymmetricKey, SecretKey
from precrypt.pre import EncryptionOptions, PreClient
from precrypt.proxy import re_encrypt, re_encrypt_response

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def gt_bytes(x) -> bytes:
    return codec.gt_to_bytes(x)


# ---- pairing / keys ---------------------------------------------------------

def test_bilinearity(client):
    p = client.provider
    lhs = p.pairing(p.g1_mul(client.g1, 5), p.g2_mul(client.g2, 7))
    assert gt_bytes(lhs) == gt_bytes(p.gt_pow(client.Z, 35))

def test_public_key_matches_secret(client, alice):
    pk = client.secret_to_public_key(alice.secret_key)
    assert pk == alice.public_key
    assert gt_bytes(pk.first) == gt_bytes(client.provider.gt_pow(client.Z, alice.secret_key.first))

def test_scalars_in_range(client):
    for _ in range(8):
        assert 0 <= client.generate_random_scalar() < client.order

def test_re_encryption_key(client, alice, bob):
    rk = client.generate_re_encryption_key(alice.secret_key.first, bob.public_key.second)
    expected = client.provider.g2_mul(client.g2, alice.secret_key.first * bob.secret_key.second)
    assert client.provider.g2_eq(rk, expected)

def test_re_encryption_key_rejects_bad_scalar(client, bob):
    with pytest.raises(InvalidScalar):
        client.generate_re_encryption_key(client.order, bob.public_key.second)


# ---- second-level (owner) ---------------------------------------------------

def test_self_decrypt(client, alice):
    msg = b"this is a test message"
    resp = client.second_level_encrypt(alice.secret_key, msg, client.generate_random_scalar())
    assert client.decrypt_second_level(resp.encrypted_key, resp.encrypted_message,
                                       alice.secret_key) == msg

def test_self_decrypt_wrong_key_fails(client, alice, bob):
    resp = client.second_level_encrypt(alice.secret_key, b"secret", client.generate_random_scalar())
    with pytest.raises(DecryptionFailed):
        client.decrypt_second_level(resp.encrypted_key, resp.encrypted_message, bob.secret_key)

def test_empty_message(client, alice):
    resp = client.second_level_encrypt(alice.secret_key, b"", 11)
    assert len(resp.encrypted_message) == 12 + 16
    assert client.decrypt_second_level(resp.encrypted_key, resp.encrypted_message,
                                       alice.secret_key) == b""

def test_encrypt_is_deterministic_with_options(client, alice):
    key_gt = client.provider.gt_pow(client.Z, 3)
    opts = EncryptionOptions(key_gt=key_gt, nonce=bytes(12))
    r1 = client.second_level_encrypt(alice.secret_key, b"fixed", 42, opts)
    r2 = client.second_level_encrypt(alice.secret_key, b"fixed", 42, opts)
    assert r1.encrypted_key == r2.encrypted_key
    assert r1.encrypted_message == r2.encrypted_message
    assert r1.encrypted_message[:12] == bytes(12)
    assert codec.g1_to_bytes(r1.encrypted_key.first) == \
        codec.g1_to_bytes(client.provider.g1_mul(client.g1, 42))
    assert client.decrypt_second_level_key(r1.encrypted_key, alice.secret_key) == \
        client.derive_symmetric_key(key_gt)

def test_encrypt_options_validation(client, alice):
    with pytest.raises(ValueError):
        client.second_level_encrypt(alice.secret_key, b"x", 1, EncryptionOptions(key=bytes(32)))
    key_gt = client.provider.gt_pow(client.Z, 3)
    with pytest.raises(InvalidKeySize):
        client.second_level_encrypt(alice.secret_key, b"x", 1,
                                    EncryptionOptions(key_gt=key_gt, key=bytes(20)))

def test_encrypt_rejects_out_of_range_scalar(client, alice):
    with pytest.raises(InvalidScalar):
        client.second_level_encrypt(alice.secret_key, b"x", client.order)
    with pytest.raises(InvalidScalar):
        client.second_level_encrypt(alice.secret_key, b"x", -1)


# ---- proxy + first-level (delegate) ----------------------------------------

def test_delegate_decrypt(client, alice, bob):
    msg = b"shared with bob"
    resp = client.second_level_encrypt(alice.secret_key, msg, client.generate_random_scalar())
    rk = client.generate_re_encryption_key(alice.secret_key.first, bob.public_key.second)

    out = re_encrypt_response(resp, rk)
    assert out.encrypted_message == resp.encrypted_message
    assert gt_bytes(out.encrypted_key.second) == gt_bytes(resp.encrypted_key.second)
    assert client.decrypt_first_level(out, bob.secret_key) == msg

def test_re_encrypt_is_pairing_with_rekey(client, alice, bob):
    resp = client.second_level_encrypt(alice.secret_key, b"m", 9)
    rk = client.generate_re_encryption_key(alice.secret_key.first, bob.public_key.second)
    fl = re_encrypt(resp.encrypted_key, rk)
    exp = client.provider.gt_pow(client.Z, 9 * alice.secret_key.first * bob.secret_key.second)
    assert gt_bytes(fl.first) == gt_bytes(exp)

def test_delegate_decrypt_wrong_delegate_fails(client, alice, bob):
    eve = client.generate_random_key_pair()
    resp = client.second_level_encrypt(alice.secret_key, b"not for eve", client.generate_random_scalar())
    rk = client.generate_re_encryption_key(alice.secret_key.first, bob.public_key.second)
    with pytest.raises(DecryptionFailed):
        client.decrypt_first_level(re_encrypt_response(resp, rk), eve.secret_key)

def test_first_level_zero_second_scalar(client):
    fl = FirstLevelSymmetricKey(first=client.Z, second=client.Z)
    with pytest.raises(NonInvertibleScalar):
        client.decrypt_first_level_key(fl, SecretKey(1, 0))


# ---- upload policy ----------------------------------------------------------

def test_validate_accepts_png(client):
    client.validate(PNG)

def test_validate_rejects_text(client):
    with pytest.raises(ValidationError) as ei:
        client.validate(b"hello world")
    assert "Invalid file type" in str(ei.value)

def test_validate_rejects_oversize():
    small = PreClient(config=PreConfig(max_upload_size=16))
    with pytest.raises(ValidationError):
        small.validate(PNG)

def test_validate_uploads_flag(alice):
    strict = PreClient(validate_uploads=True)
    with pytest.raises(ValidationError):
        strict.second_level_encrypt(alice.secret_key, b"plain text", 5)
    resp = strict.second_level_encrypt(alice.secret_key, PNG, 5)
    assert strict.decrypt_second_level(resp.encrypted_key, resp.encrypted_message,
                                       alice.secret_key) == PNG

def test_key_size_16(alice):
    c16 = PreClient(config=PreConfig(key_size=16))
    key_gt, key = c16.generate_random_symmetric_key()
    assert len(key) == 16
    resp = c16.second_level_encrypt(alice.secret_key, b"aes-128", 3)
    assert c16.decrypt_second_level(resp.encrypted_key, resp.encrypted_message,
                                    alice.secret_key) == b"aes-128"
