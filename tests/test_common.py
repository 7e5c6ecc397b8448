import pytest

from caesarlab.classical.common import (
    ALPHABET,
    Operation,
    build_permuted_alphabet,
    decrypt,
    encrypt,
    parse_keyed_key,
    parse_shift,
    substitute,
    validate_alphabet,
)
from caesarlab.core.utils import normalize_az

CRYPTO_ALPHABET = "CRYPTOGAHBDEFIJKLMNQSUVWXZ"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("hello world", "HELLOWORLD"),
        ("Hello, World!", "HELLOWORLD"),
        ("123 ABC xyz 456", "ABCXYZ"),
        ("NoChanges", "NOCHANGES"),
        ("!@#$%^&*()_+", ""),
        ("   leading space", "LEADINGSPACE"),
        ("trailing space   ", "TRAILINGSPACE"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_az(raw, expected):
    assert normalize_az(raw) == expected


@pytest.mark.parametrize("raw", ["Hello, World!", "abc 123 XyZ", "", "Ünïcödé text"])
def test_normalize_is_idempotent(raw):
    once = normalize_az(raw)
    assert normalize_az(once) == once
    assert all("A" <= ch <= "Z" for ch in once)


@pytest.mark.parametrize(
    "keyword, expected",
    [
        ("cryptography", CRYPTO_ALPHABET),
        ("hello", "HELOABCDFGIJKMNPQRSTUVWXYZ"),
        ("ZYXWVUTSRQPONMLKJIHGFEDCBA", "ZYXWVUTSRQPONMLKJIHGFEDCBA"),
        ("", ALPHABET),
        ("q", "QABCDEFGHIJKLMNOPRSTUVWXYZ"),
        ("crypto graphy!", CRYPTO_ALPHABET),
    ],
)
def test_build_permuted_alphabet(keyword, expected):
    assert build_permuted_alphabet(keyword) == expected


@pytest.mark.parametrize("keyword", ["cryptography", "hello", "aaaaaaa", "zebras", "thequickbrownfoxjumpsoverthelazydog"])
def test_permuted_alphabet_is_bijective(keyword):
    alpha = build_permuted_alphabet(keyword)
    assert len(alpha) == 26
    assert sorted(alpha) == list(ALPHABET)


def test_validate_alphabet():
    assert validate_alphabet(CRYPTO_ALPHABET.lower()) == CRYPTO_ALPHABET
    with pytest.raises(ValueError):
        validate_alphabet("ABC")
    with pytest.raises(ValueError):
        validate_alphabet("A" * 26)


@pytest.mark.parametrize(
    "text, shift, alphabet, op, expected",
    [
        ("HELLO", 3, ALPHABET, Operation.ENCRYPT, "KHOOR"),
        ("XYZ", 3, ALPHABET, Operation.ENCRYPT, "ABC"),
        ("KHOOR", 3, ALPHABET, Operation.DECRYPT, "HELLO"),
        ("ABC", 3, ALPHABET, Operation.DECRYPT, "XYZ"),
        ("CEZAR", 3, CRYPTO_ALPHABET, Operation.ENCRYPT, "PJYDT"),
        ("PJYDT", 3, CRYPTO_ALPHABET, Operation.DECRYPT, "CEZAR"),
        ("HELLO", 29, ALPHABET, Operation.ENCRYPT, "KHOOR"),
        ("HELLO", -23, ALPHABET, Operation.ENCRYPT, "KHOOR"),
        ("KHOOR", 3, ALPHABET, "decrypt", "HELLO"),
    ],
)
def test_substitute_known_vectors(text, shift, alphabet, op, expected):
    assert substitute(text, shift, alphabet, op) == expected


def test_substitute_skips_characters_outside_alphabet():
    assert substitute("HE LLO!", 3, ALPHABET, Operation.ENCRYPT) == "KHOOR"
    assert substitute("hello", 3) == ""


@pytest.mark.parametrize("alphabet", [ALPHABET, CRYPTO_ALPHABET, build_permuted_alphabet("hello")])
def test_round_trip(alphabet):
    text = normalize_az("Attack at Dawn! Secret Message follows.")
    for k in range(1, 26):
        ct = substitute(text, k, alphabet, Operation.ENCRYPT)
        assert substitute(ct, k, alphabet, Operation.DECRYPT) == text


def test_encrypt_decrypt_normalize_first():
    assert encrypt("Hello, World!", 3) == "KHOORZRUOG"
    assert decrypt("khoor zruog", 3) == "HELLOWORLD"
    assert decrypt(encrypt("Secret Message", 8, CRYPTO_ALPHABET), 8, CRYPTO_ALPHABET) == "SECRETMESSAGE"


def test_parse_shift():
    assert parse_shift(" 7 ") == 7
    assert parse_shift("-3") == -3
    with pytest.raises(ValueError, match="integer"):
        parse_shift("three")


@pytest.mark.parametrize("key", ["3:cryptography", "3,cryptography", "3 cryptography", " 3 : Cryptography "])
def test_parse_keyed_key(key):
    assert parse_keyed_key(key) == (3, "CRYPTOGRAPHY")


@pytest.mark.parametrize("key", ["3", "cryptography", "x:cryptography", "3:123", "1:2:3"])
def test_parse_keyed_key_rejects_bad_keys(key):
    with pytest.raises(ValueError):
        parse_keyed_key(key)


def test_encrypt_rejects_malformed_alphabet():
    with pytest.raises(ValueError, match="exactly once"):
        encrypt("HELLO", 3, "ABCDEF")
