"""Tests for the token codec."""

import pytest
from jose import jwt

from jwtpizza.auth.jwt import TokenCodec
from jwtpizza.core.errors import InvalidSignature
from jwtpizza.models.user import Role, User, UserRole


def make_user(user_id=7, roles=(Role.DINER,)):
    user = User(id=user_id, name="pizza diner", email="d@jwt.com", password_hash="x")
    user.roles = [UserRole(role=r) for r in roles]
    return user


def test_issue_produces_three_segment_token(codec):
    token = codec.issue(make_user())
    assert len(token.split(".")) == 3


def test_verify_round_trips_claims(codec):
    claims = codec.verify(codec.issue(make_user(roles=(Role.DINER, Role.ADMIN))))

    assert claims.id == 7
    assert claims.name == "pizza diner"
    assert claims.email == "d@jwt.com"
    assert [r.role for r in claims.roles] == ["diner", "admin"]


def test_franchisee_role_carries_object_id(codec):
    user = make_user()
    user.roles = [UserRole(role=Role.FRANCHISEE, object_id=3)]

    claims = codec.verify(codec.issue(user))

    assert claims.roles[0].role == "franchisee"
    assert claims.roles[0].objectId == 3


def test_tokens_for_same_user_are_unique(codec):
    user = make_user()
    assert codec.issue(user) != codec.issue(user)


def test_token_signed_with_other_secret_is_rejected(codec):
    other = TokenCodec("some-other-secret")
    with pytest.raises(InvalidSignature):
        codec.verify(other.issue(make_user()))


def test_tampered_payload_is_rejected(codec):
    header, payload, signature = codec.issue(make_user()).split(".")
    forged_payload = jwt.encode(
        {"id": 1, "name": "x", "email": "a@jwt.com", "roles": [{"role": "admin"}]},
        "attacker",
    ).split(".")[1]

    with pytest.raises(InvalidSignature):
        codec.verify(".".join([header, forged_payload, signature]))


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "a.b"])
def test_malformed_tokens_are_rejected(codec, token):
    with pytest.raises(InvalidSignature):
        codec.verify(token)


def test_token_missing_required_claims_is_rejected(settings, codec):
    token = jwt.encode({"id": 1}, settings.jwt_secret_key, algorithm="HS256")
    with pytest.raises(InvalidSignature):
        codec.verify(token)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenCodec("")
