from datetime import timedelta

from usuarios_api.utils.security import (
    create_access_token,
    decode_token,
    generate_token_id,
    hash_password,
    hash_token_id,
    verify_password,
)


def test_hash_password_never_returns_plaintext():
    hashed = hash_password("123456")
    assert hashed != "123456"
    assert verify_password("123456", hashed)
    assert not verify_password("1234567", hashed)


def test_same_password_hashes_differently():
    assert hash_password("secreto") != hash_password("secreto")


def test_verify_password_with_malformed_hash_is_false():
    assert verify_password("123456", "not-a-hash") is False


def test_access_token_claims():
    token = create_access_token({"sub": 7, "jti": "abc"})
    claims = decode_token(token)
    assert claims["sub"] == "7"
    assert claims["jti"] == "abc"
    assert "iat" in claims
    assert "exp" not in claims


def test_expired_token_does_not_decode():
    token = create_access_token({"sub": 1, "jti": "x"}, expires_delta=timedelta(minutes=-5))
    assert decode_token(token) is None


def test_tampered_token_does_not_decode():
    token = create_access_token({"sub": 1, "jti": "x"})
    head, payload, signature = token.split(".")
    tampered = ".".join([head, payload, signature[::-1]])
    assert decode_token(tampered) is None
    assert decode_token("basura") is None


def test_token_ids_are_random_and_hash_is_stable():
    first, second = generate_token_id(), generate_token_id()
    assert first != second
    assert hash_token_id(first) == hash_token_id(first)
    assert len(hash_token_id(first)) == 64
    assert hash_token_id(first) != first
