"""Tests for CODEOWNERS attribution: collect_owners and is_sole_owner."""

import pytest

from prgate_core.declarations import parse_code_owners
from prgate_core.ownership import collect_owners, is_sole_owner, is_valid_owner, owners_by_file


class TestIsValidOwner:
    def test_user_is_valid(self):
        assert is_valid_owner("@alice") is True

    def test_team_is_ignored(self, caplog):
        assert is_valid_owner("@org/team") is False
        assert "is a team" in caplog.text

    def test_bare_name_is_ignored(self, caplog):
        assert is_valid_owner("alice") is False
        assert "doesn't start with @" in caplog.text

    def test_email_is_ignored(self):
        assert is_valid_owner("alice@example.com") is False


class TestCollectOwners:
    def test_collects_from_all_matching_entries_in_precedence_order(self):
        entries = parse_code_owners("* @alice org/team bob\n/src/ @bob @alice\n")
        owners = collect_owners(["/src/a.py", "/README.md"], entries)
        assert owners == ["@bob", "@alice"]

    def test_never_contains_team_or_unprefixed_tokens(self):
        entries = parse_code_owners("* @org/everyone plain @carol\n*.py @acme/py dave @erin\n")
        owners = collect_owners(["/a.py", "/b.txt"], entries)
        assert owners == ["@erin", "@carol"]
        assert all(o.startswith("@") and "/" not in o for o in owners)

    def test_no_files_gives_no_owners(self):
        entries = parse_code_owners("* @alice\n")
        assert collect_owners([], entries) == []

    def test_unmatched_file_contributes_nothing(self):
        entries = parse_code_owners("/docs/ @writer\n")
        assert collect_owners(["/src/main.py"], entries) == []


class TestOwnersByFile:
    def test_reports_owners_per_file(self):
        entries = parse_code_owners("* @alice\n/vendor/\n")
        result = owners_by_file(["/src/a.py", "/vendor/lib.py"], entries)
        assert result == {"/src/a.py": ["@alice"], "/vendor/lib.py": ["@alice"]}


class TestIsSoleOwner:
    def test_owner_of_all_files(self):
        entries = parse_code_owners("/src/ @alice\n*.md @alice\n")
        assert is_sole_owner("alice", ["/src/a.py", "/README.md"], entries) is True

    def test_actor_not_listed_anywhere_fails_closed(self):
        entries = parse_code_owners("* @bob\n")
        assert is_sole_owner("alice", ["/a.py"], entries) is False

    def test_one_file_not_owned(self):
        entries = parse_code_owners("/src/ @alice\n/docs/ @bob\n")
        assert is_sole_owner("alice", ["/src/a.py", "/docs/x.md"], entries) is False

    def test_file_matched_by_no_entry_is_not_owned(self):
        entries = parse_code_owners("/src/ @alice\n")
        assert is_sole_owner("alice", ["/src/a.py", "/setup.py"], entries) is False

    @pytest.mark.parametrize("actor", ["alice", "nobody", ""])
    def test_no_changed_files_is_vacuously_owned(self, actor):
        entries = parse_code_owners("* @bob\n")
        assert is_sole_owner(actor, [], entries) is True

    def test_no_changed_files_with_no_entries(self):
        assert is_sole_owner("alice", [], ()) is True

    def test_later_declaration_takes_precedence_in_unowned_test(self):
        # /src/vendor/ is declared after /src/ so it is the first match for vendored files.
        entries = parse_code_owners("/src/ @alice\n/src/vendor/\n")
        assert is_sole_owner("alice", ["/src/vendor/lib.py"], entries) is False

    def test_unowned_entry_shadowed_by_later_owned_entry(self):
        # Only the first matching entry decides "unowned"; here that is /src/ @alice.
        entries = parse_code_owners("/src/vendor/\n/src/ @alice\n")
        assert is_sole_owner("alice", ["/src/vendor/lib.py"], entries) is True

    def test_actor_in_lower_precedence_matching_entry_still_owns(self):
        # First match lists @bob, but any matching entry listing the actor counts.
        entries = parse_code_owners("/src/ @alice\n/src/generated/ @bob\n")
        assert is_sole_owner("alice", ["/src/generated/api.py"], entries) is True
        assert is_sole_owner("bob", ["/src/generated/api.py"], entries) is True

    def test_team_listing_does_not_count_as_actor(self):
        entries = parse_code_owners("* @org/alice\n")
        assert is_sole_owner("alice", ["/a.py"], entries) is False

    def test_leading_slash_optional_on_files(self):
        entries = parse_code_owners("/src/ @alice\n")
        assert is_sole_owner("alice", ["src/a.py"], entries) is True
