import base64

from precrypt import codec, serialize
from precrypt.models import KeyPair, PublicKey, SecretKey
from precrypt.proxy import re_encrypt_response

# Alice's key pair from the gnark-crypto implementation's mock data.
SK_FIRST  = 0x1b3c4f2629e642f076a6f9da84d8dba47176d88659e2027193d1a9710d790a45
SK_SECOND = 0x12b4bd11710ac1a327c74386d0229500352339a20bb33c685723791c700fb253

PK_FIRST_B64 = (
    "AF/OsI1el6csnTJZ07epOCOL+nRKDJjo/p5B814seI0qQkTggOLxzjNs0iCBxA/ATvmYVoy2OKvT+xUfLgawrh//"
    "NXJ9JFMMBZtsCdGOMMDda/mW3gVqcgudYCvUW21YBR+sAy+vTabYWOF15zpge5eYekwMx/m9aE/RG2fkX2oP2KL5"
    "a1NsVml7OpFiDssib/C9bdnWYIQrIRzi3fiAOClBMioocAmaWrblAqpAiOBfN44ej01V8WPAh7hlYEWKJlZBUe0+"
    "6TmJW+K2dEEgI0HCJIzQ4K6VBAzWy2Ae9b0KQrOpypd/rwrH5DCwEggrJZHzcskav84gww34m5tztx0SEoHvap1/"
    "NFUpII+qoyp6t277+lUzCYpIsUOA4lYTCPK9mrziRzdSeU/milhxsaFSB5pBvGJKgv+b/PgECTgRJRqEuF1lRCZd"
    "wgWHQ2sPuln+UMik9SY+Ilyarb8EOCK0P9u2QCA3uLokZ8Fq2hiLlJt5jWI3SOPtqAneMFYJ"
)
PK_SECOND_B64 = (
    "EtvW8XMRpM9xgPs7mEvtjyHSoeZf049i6UIQAdKOT3cu1HPlSRApPrfYImE6IX6jZxrUisoFM6MpdAn6Hb/rIhQ1"
    "daopaZRN0MsG3hHZ1BCiBplhVitcfcbWQZKBVMjFLgxvEEupAY8oq5ymxdEowzA7AnX4EPl+FOtDqzILTpA="
)

PK_FIRST = base64.b64decode(PK_FIRST_B64)
PK_SECOND = base64.b64decode(PK_SECOND_B64)


def test_vector_sizes():
    assert len(PK_FIRST) == codec.GT_SIZE
    assert len(PK_SECOND) == codec.G2_SIZE

def test_public_key_from_reference_secret(client):
    pk = client.secret_to_public_key(SecretKey(SK_FIRST, SK_SECOND))
    assert codec.g2_to_bytes(pk.second) == PK_SECOND
    assert codec.gt_to_bytes(pk.first) == PK_FIRST

def test_reference_public_key_bytes_roundtrip(client):
    pk = PublicKey.from_bytes(PK_FIRST + PK_SECOND)
    assert pk.to_bytes() == PK_FIRST + PK_SECOND
    assert pk == client.secret_to_public_key(SecretKey(SK_FIRST, SK_SECOND))

def test_reference_key_pair_document(client):
    sk = SecretKey(SK_FIRST, SK_SECOND)
    blob = serialize.dump_key_pair(KeyPair(secret_key=sk,
                                           public_key=client.secret_to_public_key(sk)))
    assert blob == {
        "PublicKey": {"First": PK_FIRST_B64, "Second": PK_SECOND_B64},
        "SecretKey": {
            "First":  "1b3c4f2629e642f076a6f9da84d8dba47176d88659e2027193d1a9710d790a45",
            "Second": "12b4bd11710ac1a327c74386d0229500352339a20bb33c685723791c700fb253",
        },
    }

def test_key_pair_document_hex_is_unpadded():
    sk = SecretKey(0xabc, 0x1)
    blob = serialize.dump_key_pair(KeyPair(
        secret_key=sk,
        public_key=PublicKey.from_bytes(PK_FIRST + PK_SECOND),
    ))
    assert blob["SecretKey"] == {"First": "abc", "Second": "1"}
    assert serialize.load_key_pair(blob).secret_key == sk

def test_delegate_decrypts_with_reference_keys(client, bob):
    alice = KeyPair(secret_key=SecretKey(SK_FIRST, SK_SECOND),
                    public_key=PublicKey.from_bytes(PK_FIRST + PK_SECOND))
    resp = client.second_level_encrypt(alice.secret_key, b"cross-checked", 17)
    rk = client.generate_re_encryption_key(alice.secret_key.first, bob.public_key.second)

    out = re_encrypt_response(resp, rk)
    assert client.decrypt_first_level(out, bob.secret_key) == b"cross-checked"
