"""Unit tests for the Claim and UserLoginInfo value objects."""

import pytest

from custom_identity import Claim, UserLoginInfo


class TestClaim:
    def test_equality_is_structural(self):
        assert Claim("role", "admin") == Claim("role", "admin")
        assert hash(Claim("role", "admin")) == hash(Claim("role", "admin"))

    def test_no_case_normalization(self):
        assert Claim("role", "admin") != Claim("role", "Admin")
        assert Claim("Role", "admin") != Claim("role", "admin")

    def test_empty_type_rejected(self):
        with pytest.raises(ValueError):
            Claim("", "admin")

    def test_none_value_rejected(self):
        with pytest.raises(ValueError):
            Claim("role", None)

    def test_empty_value_allowed(self):
        assert Claim("flag", "").value == ""

    def test_str(self):
        assert str(Claim("role", "admin")) == "role: admin"


class TestUserLoginInfo:
    def test_display_name_is_optional(self):
        login = UserLoginInfo("github", "42")

        assert login.provider_display_name is None
        assert login == UserLoginInfo("github", "42", None)
