"""Tests for presentation creation, reordering and action thresholds."""

import pytest

from deckvault.exceptions import AuthenticationError, DuplicateOrderError, ForbiddenError
from deckvault.models import Presentation
from deckvault.schemas.presentation import (
    PresentationCreate,
    PresentationSettings,
    PresentationUpdate,
    SlideOrderEntry,
)
from deckvault.services.presentation_service import PresentationAction, PresentationService
from factories import (
    grant_org_role,
    grant_project_role,
    make_folder,
    make_org,
    make_presentation,
    make_user,
)

SLIDES = [
    {"order": 1, "slide_id": "s1", "object_id": "o1"},
    {"order": 2, "slide_id": "s2", "object_id": "o2"},
]


@pytest.fixture()
def setup(db):
    org = make_org(db)
    project = make_folder(db, org, "launch")
    editor = make_user(db, "editor")
    grant_project_role(db, editor, project, "contributor")
    return {"org": org, "project": project, "editor": editor}


class TestCreate:

    def test_orders_are_assigned_from_one(self, db, setup):
        data = PresentationCreate(
            presentation_name="Kickoff",
            slides=[{"slide_id": "s9", "object_id": "o9"}, {"slide_id": "s3", "object_id": "o3"}],
        )
        presentation = PresentationService(db).create_presentation(setup["project"].id, data, "editor")
        assert presentation.version == 1
        assert [(s["order"], s["slide_id"]) for s in presentation.slides] == [(1, "s9"), (2, "s3")]
        assert presentation.settings == {
            "pptx_download_role": "public",
            "pdf_download_role": "public",
            "chat_role": "public",
        }

    def test_requires_create_permission(self, db, setup):
        viewer = make_user(db, "viewer")
        grant_project_role(db, viewer, setup["project"], "member")
        with pytest.raises(ForbiddenError):
            PresentationService(db).create_presentation(
                setup["project"].id, PresentationCreate(presentation_name="Kickoff"), "viewer"
            )


class TestReorder:

    def test_duplicate_order_rejected_before_write(self, db, setup):
        presentation = make_presentation(db, setup["project"], slides=SLIDES)
        entries = [
            SlideOrderEntry(order=1, slide_id="s1", object_id="o1"),
            SlideOrderEntry(order=1, slide_id="s2", object_id="o2"),
        ]
        with pytest.raises(DuplicateOrderError) as exc_info:
            PresentationService(db).reorder(presentation.id, entries, "editor")
        assert exc_info.value.status_code == 400

        db.expire_all()
        row = db.get(Presentation, presentation.id)
        assert row.version == 1
        assert row.slides == SLIDES

    def test_reorder_sorts_and_bumps_version(self, db, setup):
        presentation = make_presentation(db, setup["project"], slides=SLIDES)
        entries = [
            SlideOrderEntry(order=2, slide_id="s1", object_id="o1"),
            SlideOrderEntry(order=1, slide_id="s2", object_id="o2"),
        ]
        result = PresentationService(db).reorder(presentation.id, entries, "editor")
        assert result.version == 2
        assert [s["slide_id"] for s in result.slides] == ["s2", "s1"]

    def test_anonymous_cannot_reorder(self, db, setup):
        presentation = make_presentation(db, setup["project"], slides=SLIDES)
        entries = [SlideOrderEntry(order=1, slide_id="s1", object_id="o1")]
        with pytest.raises(AuthenticationError):
            PresentationService(db).reorder(presentation.id, entries, None)

    def test_organization_member_cannot_reorder(self, db, setup):
        member = make_user(db, "member")
        grant_org_role(db, member, setup["org"], "member")
        presentation = make_presentation(db, setup["project"], slides=SLIDES)
        entries = [SlideOrderEntry(order=1, slide_id="s1", object_id="o1")]
        with pytest.raises(ForbiddenError):
            PresentationService(db).reorder(presentation.id, entries, "member")


class TestReadAndActions:

    def test_reads_with_folder_visibility(self, db, setup):
        restricted = make_folder(db, setup["org"], "secret", visibility="restricted")
        presentation = make_presentation(db, restricted)
        with pytest.raises(AuthenticationError):
            PresentationService(db).get_presentation(presentation.id, None)
        with pytest.raises(ForbiddenError):
            PresentationService(db).get_presentation(presentation.id, "editor")

    def test_thresholds(self, db, setup):
        public = make_folder(db, setup["org"], "open", visibility="public")
        presentation = make_presentation(
            db,
            public,
            settings_={
                "pptx_download_role": "project-contributor",
                "pdf_download_role": "organization-member",
                "chat_role": "public",
            },
        )
        service = PresentationService(db)
        assert service.can_perform(PresentationAction.CHAT, presentation.id, None) is True
        assert service.can_perform(PresentationAction.PDF_DOWNLOAD, presentation.id, None) is False
        assert service.can_perform(PresentationAction.PPTX_DOWNLOAD, presentation.id, None) is False

        lead = make_user(db, "lead")
        grant_org_role(db, lead, setup["org"], "member")
        grant_project_role(db, lead, public, "admin")
        assert service.allowed_actions(presentation, "lead") == ["pptx_download", "pdf_download", "chat"]

    def test_unreadable_presentation_allows_nothing(self, db, setup):
        restricted = make_folder(db, setup["org"], "secret", visibility="restricted")
        presentation = make_presentation(db, restricted)
        assert PresentationService(db).can_perform(PresentationAction.CHAT, presentation.id, None) is False

    def test_update_settings(self, db, setup):
        presentation = make_presentation(db, setup["project"])
        updated = PresentationService(db).update_presentation(
            presentation.id,
            PresentationUpdate(settings=PresentationSettings(chat_role="project-member")),
            "editor",
        )
        assert updated.settings["chat_role"] == "project-member"
        assert updated.settings["pdf_download_role"] == "public"
