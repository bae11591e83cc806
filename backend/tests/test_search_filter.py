"""Tests for search filter composition and pagination mapping."""

import pytest

from deckvault.models import OrganizationRole, ProjectRole
from deckvault.services.role_service import ANONYMOUS, OrganizationGrant, ProjectGrant, UserRoles
from deckvault.services.search_filter import build_search_filter, page_for

BOTH_TIERS = UserRoles(
    user_id="u",
    organization_roles=[OrganizationGrant("O1", OrganizationRole.MEMBER)],
    folder_roles=[ProjectGrant("P1", ProjectRole.MEMBER)],
)


class TestBuildSearchFilter:

    def test_anonymous_has_public_fragment_only(self):
        result = build_search_filter("O1", ANONYMOUS)
        assert result == 'organization_id = "O1" AND visibility = "public"'
        assert "internal" not in result
        assert "restricted" not in result

    def test_all_three_fragments_for_both_tiers(self):
        result = build_search_filter("O1", BOTH_TIERS)
        assert 'visibility = "public"' in result
        assert '(visibility = "internal" AND organization_id = "O1")' in result
        assert '(visibility = "restricted" AND project_id IN ["P1"])' in result
        # The OR group is parenthesised as a whole.
        assert ' AND (visibility = "public" OR ' in result

    def test_project_scope(self):
        result = build_search_filter("O1", ANONYMOUS, project_id="P1")
        assert result.startswith('organization_id = "O1" AND project_id = "P1" AND ')

    def test_subtree_scope_is_sorted(self):
        result = build_search_filter("O1", ANONYMOUS, project_id="P1", sub_folder_ids={"f2", "f1"})
        assert 'parent_id IN ["f1", "f2"]' in result

    def test_deterministic(self):
        assert build_search_filter("O1", BOTH_TIERS) == build_search_filter("O1", BOTH_TIERS)


class TestPageFor:

    def test_third_page(self):
        assert page_for(offset=20, limit=10) == (3, 10)

    def test_first_page(self):
        assert page_for(offset=0, limit=20) == (1, 20)

    def test_default_limit(self):
        assert page_for() == (1, 20)
        assert page_for(offset=45) == (3, 20)

    def test_rejects_negative_offset(self):
        with pytest.raises(ValueError):
            page_for(offset=-1, limit=10)

    def test_rejects_negative_limit(self):
        with pytest.raises(ValueError):
            page_for(offset=0, limit=-5)

    def test_rejects_zero_limit(self):
        with pytest.raises(ValueError):
            page_for(offset=0, limit=0)
