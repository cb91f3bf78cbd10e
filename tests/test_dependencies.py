"""Tests for the role authorizer policies."""

import pytest

from jwtpizza.auth.dependencies import (
    RoleGate,
    get_current_identity,
    require_authenticated,
    require_role,
    require_self_or_role,
)
from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.auth.jwt import RoleClaim
from jwtpizza.core.errors import Forbidden, ObscuredNotFound, Unauthorized
from jwtpizza.models.user import Role

DINER = ResolvedIdentity(id=2, name="pizza diner", email="d@jwt.com", roles=(RoleClaim(role="diner"),))
ADMIN = ResolvedIdentity(id=1, name="admin", email="a@jwt.com", roles=(RoleClaim(role="admin"),))


def test_require_authenticated_rejects_anonymous():
    with pytest.raises(Unauthorized) as exc:
        require_authenticated(None)
    assert exc.value.status_code == 401


def test_require_authenticated_passes_identity_through():
    assert require_authenticated(DINER) is DINER


def test_self_may_act_on_self():
    require_self_or_role(DINER, DINER.id, Role.ADMIN)


def test_role_holder_may_act_on_others():
    require_self_or_role(ADMIN, DINER.id, Role.ADMIN)


def test_other_user_without_role_is_forbidden():
    with pytest.raises(Forbidden) as exc:
        require_self_or_role(DINER, ADMIN.id, Role.ADMIN)
    assert exc.value.status_code == 403


def test_missing_role_is_hidden_as_not_found():
    with pytest.raises(ObscuredNotFound) as exc:
        require_role(DINER, Role.ADMIN)
    assert exc.value.status_code == 404
    assert exc.value.message == "unknown endpoint"


def test_role_holder_passes_role_check():
    require_role(ADMIN, Role.ADMIN)


def test_forbidden_and_obscured_are_distinct_errors():
    assert not issubclass(Forbidden, ObscuredNotFound)
    assert not issubclass(ObscuredNotFound, Forbidden)


async def test_get_current_identity_rejects_anonymous():
    with pytest.raises(Unauthorized):
        await get_current_identity(None)


async def test_role_gate():
    gate = RoleGate(Role.ADMIN)
    assert await gate(ADMIN) is ADMIN
    with pytest.raises(ObscuredNotFound):
        await gate(DINER)
