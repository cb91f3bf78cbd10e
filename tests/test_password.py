"""Tests for password hashing."""

from jwtpizza.auth.password import (
    generate_temp_password,
    hash_password,
    needs_rehash,
    verify_password,
)


def test_hash_is_not_plaintext():
    hashed = hash_password("diner")
    assert hashed != "diner"
    assert hashed.startswith("$argon2id$")


def test_verify_accepts_correct_password():
    assert verify_password("diner", hash_password("diner"))


def test_verify_rejects_wrong_password():
    assert not verify_password("wrong", hash_password("diner"))


def test_verify_rejects_malformed_hash():
    assert not verify_password("diner", "not-a-hash")


def test_needs_rehash_for_malformed_hash():
    assert needs_rehash("not-a-hash")


def test_temp_password_minimum_length():
    assert len(generate_temp_password(4)) == 12
    assert generate_temp_password() != generate_temp_password()
