"""Tests for identity and tenant resolution."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from rbauth.auth.identity import IdentityResolver


class TestGetIdentity:
    @pytest.mark.parametrize(
        ("user", "expected"),
        [
            ({"fullname": "A", "email": "b@x.com"}, "A"),
            ({"email": "b@x.com"}, "b@x.com"),
            ({}, ""),
            ({"name": "Ann", "username": "ann1", "email": "a@x.com"}, "Ann"),
            ({"username": "ann1", "email": "a@x.com"}, "ann1"),
            ({"fullname": "", "name": None, "email": "a@x.com"}, "a@x.com"),
            ({"id": 4, "roles": ["admin"]}, ""),
        ],
    )
    def test_field_priority(self, user: dict, expected: str) -> None:
        assert IdentityResolver().get_identity(user) == expected

    def test_none_user(self) -> None:
        assert IdentityResolver().get_identity(None) == ""

    @pytest.mark.parametrize("user", ["bob", ["x"], 42])
    def test_non_record_user_has_empty_identity(self, user: object) -> None:
        assert IdentityResolver().get_identity(user) == ""

    def test_attribute_object(self) -> None:
        user = SimpleNamespace(fullname=None, name="Ann", username=None, email=None)
        assert IdentityResolver().get_identity(user) == "Ann"

    def test_custom_identifier_wins(self) -> None:
        resolver = IdentityResolver(user_identifier=lambda user: f"#{user['id']}")
        assert resolver.get_identity({"id": 4, "fullname": "A"}) == "#4"


class TestGetTenantIdentity:
    def test_none_without_custom_function(self) -> None:
        assert IdentityResolver().get_tenant_identity({"tenant": "acme"}) is None

    def test_custom_function(self) -> None:
        resolver = IdentityResolver(tenant_identifier=lambda user: user["tenant"])
        assert resolver.get_tenant_identity({"tenant": "acme"}) == "acme"
