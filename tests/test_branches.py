"""Tests for branch-name validation."""

import pytest

from repoguard.branches.validator import BranchCheck, is_exempt, validate_branch_name
from repoguard.config.schema import DEFAULT_PREFIXES


class TestValidateBranchName:
    @pytest.mark.parametrize("prefix", DEFAULT_PREFIXES)
    def test_every_allowed_prefix_passes(self, prefix):
        check = validate_branch_name(f"{prefix}/something")
        assert check.valid is True
        assert check.prefix == prefix
        assert check.description == "something"
        assert check.reason is None

    def test_feature_login(self):
        assert validate_branch_name("feature/login").valid is True

    def test_no_slash_fails(self):
        check = validate_branch_name("randomname")
        assert check.valid is False
        assert check.allowed_prefixes == DEFAULT_PREFIXES
        assert "<prefix>/<description>" in check.reason

    def test_prefix_is_case_sensitive(self):
        check = validate_branch_name("Feature/login")
        assert check.valid is False
        assert check.prefix == "Feature"
        assert check.allowed_prefixes == DEFAULT_PREFIXES

    def test_unknown_prefix_fails(self):
        check = validate_branch_name("wip/login")
        assert check.valid is False
        assert "wip" in check.reason

    def test_splits_on_first_slash_only(self):
        check = validate_branch_name("bugfix/api/timeout")
        assert check.valid is True
        assert check.prefix == "bugfix"
        assert check.description == "api/timeout"

    def test_empty_prefix_fails(self):
        assert validate_branch_name("/login").valid is False

    def test_empty_name_fails(self):
        assert validate_branch_name("").valid is False

    def test_custom_prefixes(self):
        check = validate_branch_name("release/1.2", ["release"])
        assert check.valid is True
        failed = validate_branch_name("feature/x", ["release"])
        assert failed.valid is False
        assert failed.allowed_prefixes == ("release",)


class TestBranchCheck:
    def test_suggestion_uses_first_prefix(self):
        check = validate_branch_name("randomname")
        assert check.suggestion() == "feature/randomname"

    def test_suggestion_keeps_description(self):
        check = validate_branch_name("Feature/login")
        assert check.suggestion() == "feature/login"

    def test_is_frozen(self):
        check = validate_branch_name("feature/x")
        assert isinstance(check, BranchCheck)
        with pytest.raises(AttributeError):
            check.valid = False  # type: ignore[misc]


class TestExempt:
    def test_exact_match(self):
        assert is_exempt("main", ["main", "develop"]) is True
        assert is_exempt("main-old", ["main", "develop"]) is False
        assert is_exempt("Main", ["main"]) is False
