"""Tests for the read rule and its search-predicate rendering."""

import pytest

from deckvault.exceptions import AuthenticationError, ForbiddenError
from deckvault.models import OrganizationRole, ProjectRole
from deckvault.services.role_service import ANONYMOUS, OrganizationGrant, ProjectGrant, UserRoles
from deckvault.services.visibility_gate import (
    can_read,
    ensure_can_read,
    quote,
    quote_list,
    visibility_fragments,
)

ORG_MEMBER = UserRoles(
    user_id="u-org",
    organization_roles=[OrganizationGrant("O1", OrganizationRole.MEMBER)],
)
PROJECT_MEMBER = UserRoles(
    user_id="u-proj",
    folder_roles=[ProjectGrant("P1", ProjectRole.MEMBER)],
)
OWNER = UserRoles(
    user_id="u-owner",
    organization_roles=[OrganizationGrant("O1", OrganizationRole.OWNER)],
)


class TestTruthTable:

    def test_anonymous(self):
        assert can_read("public", "O1", "P1", ANONYMOUS) is True
        assert can_read("internal", "O1", "P1", ANONYMOUS) is False
        assert can_read("restricted", "O1", "P1", ANONYMOUS) is False

    def test_organization_member_reads_internal(self):
        assert can_read("internal", "O1", "P1", ORG_MEMBER) is True

    def test_organization_role_is_scoped_to_its_organization(self):
        assert can_read("internal", "O2", "P9", ORG_MEMBER) is False

    def test_project_member_reads_restricted_on_own_project_only(self):
        assert can_read("restricted", "O1", "P1", PROJECT_MEMBER) is True
        assert can_read("restricted", "O1", "P2", PROJECT_MEMBER) is False

    def test_owner_without_project_grant_cannot_read_restricted(self):
        assert can_read("restricted", "O1", "P1", OWNER) is False

    @pytest.mark.parametrize("value", [None, "", "secret", "PUBLIC"])
    def test_unknown_visibility_reads_as_internal(self, value):
        assert can_read(value, "O1", "P1", ANONYMOUS) is False
        assert can_read(value, "O1", "P1", ORG_MEMBER) is True
        assert can_read(value, "O1", "P1", PROJECT_MEMBER) is False


class TestEnsureCanRead:

    def test_allowed_returns_quietly(self):
        ensure_can_read("public", "O1", "P1", ANONYMOUS)

    def test_anonymous_denied_is_unauthenticated(self):
        with pytest.raises(AuthenticationError):
            ensure_can_read("internal", "O1", "P1", ANONYMOUS)

    def test_known_caller_denied_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            ensure_can_read("restricted", "O1", "P1", ORG_MEMBER, resource="slide")


class TestFragments:

    def test_anonymous_gets_public_only(self):
        assert visibility_fragments(ANONYMOUS, "O1") == ['visibility = "public"']

    def test_organization_fragment_scoped_to_target_org(self):
        fragments = visibility_fragments(ORG_MEMBER, "O1")
        assert '(visibility = "internal" AND organization_id = "O1")' in fragments
        assert not any("restricted" in f for f in fragments)

    def test_no_internal_fragment_for_other_organization(self):
        fragments = visibility_fragments(ORG_MEMBER, "O2")
        assert fragments == ['visibility = "public"']

    def test_restricted_fragment_lists_project_ids(self):
        roles = UserRoles(
            user_id="u",
            folder_roles=[
                ProjectGrant("P1", ProjectRole.MEMBER),
                ProjectGrant("P2", ProjectRole.ADMIN),
            ],
        )
        fragments = visibility_fragments(roles, "O1")
        assert '(visibility = "restricted" AND project_id IN ["P1", "P2"])' in fragments


class TestQuoting:

    def test_quote_escapes_quotes_and_backslashes(self):
        assert quote('a"b\\c') == '"a\\"b\\\\c"'

    def test_quote_list_drops_duplicates(self):
        assert quote_list(["x", "y", "x"]) == '["x", "y"]'
