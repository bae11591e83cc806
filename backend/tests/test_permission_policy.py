"""Tests for the mutation permission table."""

import pytest

from deckvault.exceptions import AuthenticationError, ForbiddenError
from deckvault.models import OrganizationRole, ProjectRole
from deckvault.services.permission_policy import (
    Mutation,
    authorize,
    is_allowed,
    meets_presentation_role,
)
from deckvault.services.role_service import ANONYMOUS, OrganizationGrant, ProjectGrant, UserRoles

O = OrganizationRole
P = ProjectRole


class TestIsAllowed:

    @pytest.mark.parametrize("mutation", list(Mutation))
    def test_no_roles_never_allowed(self, mutation):
        assert is_allowed(mutation, None, None) is False

    @pytest.mark.parametrize("mutation", list(Mutation))
    def test_owner_and_admin_allowed_everything(self, mutation):
        assert is_allowed(mutation, O.OWNER, None) is True
        assert is_allowed(mutation, O.ADMIN, None) is True

    def test_organization_member_may_only_create(self):
        allowed = {m for m in Mutation if is_allowed(m, O.MEMBER, None)}
        assert allowed == {Mutation.CREATE}

    @pytest.mark.parametrize("role", [P.CONTRIBUTOR, P.ADMIN])
    def test_project_contributor_and_admin(self, role):
        allowed = {m for m in Mutation if is_allowed(m, None, role)}
        assert allowed == {Mutation.CREATE, Mutation.UPDATE, Mutation.REORDER}

    def test_project_member_cannot_mutate(self):
        assert not any(is_allowed(m, None, P.MEMBER) for m in Mutation)

    def test_either_tier_suffices(self):
        assert is_allowed(Mutation.UPDATE, O.MEMBER, P.CONTRIBUTOR) is True


class TestAuthorize:

    def test_anonymous_is_unauthenticated(self):
        with pytest.raises(AuthenticationError):
            authorize(Mutation.CREATE, ANONYMOUS, "O1", "P1")

    def test_insufficient_role_is_forbidden(self):
        roles = UserRoles(user_id="u", folder_roles=[ProjectGrant("P1", P.ADMIN)])
        with pytest.raises(ForbiddenError):
            authorize(Mutation.DELETE_FOLDER, roles, "O1", "P1")

    def test_project_role_on_other_project_does_not_count(self):
        roles = UserRoles(user_id="u", folder_roles=[ProjectGrant("P2", P.ADMIN)])
        with pytest.raises(ForbiddenError):
            authorize(Mutation.UPDATE, roles, "O1", "P1")

    def test_highest_stored_role_is_used(self):
        roles = UserRoles(
            user_id="u",
            organization_roles=[
                OrganizationGrant("O1", O.MEMBER),
                OrganizationGrant("O1", O.ADMIN),
            ],
        )
        authorize(Mutation.DELETE_PROJECT, roles, "O1", None)


class TestPresentationThresholds:

    ROLES = UserRoles(
        user_id="u",
        organization_roles=[OrganizationGrant("O1", O.MEMBER)],
        folder_roles=[ProjectGrant("P1", P.CONTRIBUTOR)],
    )

    def test_public_open_to_anonymous(self):
        assert meets_presentation_role("public", ANONYMOUS, "O1", "P1") is True

    def test_organization_member_threshold(self):
        assert meets_presentation_role("organization-member", self.ROLES, "O1", "P1") is True
        assert meets_presentation_role("organization-member", ANONYMOUS, "O1", "P1") is False

    def test_project_thresholds_rank(self):
        assert meets_presentation_role("project-member", self.ROLES, "O1", "P1") is True
        assert meets_presentation_role("project-contributor", self.ROLES, "O1", "P1") is True
        assert meets_presentation_role("project-admin", self.ROLES, "O1", "P1") is False

    def test_unknown_threshold_is_strictest(self):
        assert meets_presentation_role("everyone", self.ROLES, "O1", "P1") is False
