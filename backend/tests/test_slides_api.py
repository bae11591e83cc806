"""HTTP tests for slide reads, edits and the draft endpoints."""

import pytest

from factories import (
    auth_headers,
    grant_org_role,
    grant_project_role,
    make_folder,
    make_org,
    make_slide,
    make_user,
)


@pytest.fixture()
def setup(db):
    org = make_org(db)
    project = make_folder(db, org, "launch", visibility="public")
    editor = make_user(db, "editor")
    grant_project_role(db, editor, project, "contributor")
    member = make_user(db, "member")
    grant_org_role(db, member, org, "member")
    return {"org": org, "project": project}


class TestPublishEndpoint:

    def test_publish_success(self, client, db, setup):
        slide = make_slide(db, setup["project"], object_id="obj-v1", draft_object_id="obj-v2")
        resp = client.post(f"/api/slides/publish/{slide.id}", headers=auth_headers("editor"))
        assert resp.status_code == 200
        assert resp.json()["success"] is True

        body = client.get(f"/api/slides/{slide.id}", headers=auth_headers("member")).json()
        assert body["object_id"] == "obj-v2"
        assert body["draft_object_id"] is None
        assert body["has_draft"] is False

    def test_no_draft_is_400(self, client, db, setup):
        slide = make_slide(db, setup["project"])
        resp = client.post(f"/api/slides/publish/{slide.id}", headers=auth_headers("editor"))
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "NO_DRAFT"
        assert body["error"] == "No draft to publish"

    def test_anonymous_is_401(self, client, db, setup):
        slide = make_slide(db, setup["project"], draft_object_id="obj-v2")
        resp = client.post(f"/api/slides/publish/{slide.id}")
        assert resp.status_code == 401
        assert resp.json()["code"] == "UNAUTHENTICATED"

    def test_org_member_is_403(self, client, db, setup):
        slide = make_slide(db, setup["project"], draft_object_id="obj-v2")
        resp = client.post(f"/api/slides/discard/{slide.id}", headers=auth_headers("member"))
        assert resp.status_code == 403

    def test_unknown_slide_is_404(self, client, setup):
        resp = client.post("/api/slides/discard/nope", headers=auth_headers("editor"))
        assert resp.status_code == 404
        assert resp.json()["details"] == {"resource": "slide", "id": "nope"}

    def test_discard_success(self, client, db, setup):
        slide = make_slide(db, setup["project"], object_id="obj-v1", draft_object_id="obj-v2")
        resp = client.post(f"/api/slides/discard/{slide.id}", headers=auth_headers("editor"))
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Draft discarded"}


class TestSlideEndpoints:

    def test_public_slide_readable_anonymously(self, client, db, setup):
        slide = make_slide(db, setup["project"], visibility="public")
        resp = client.get(f"/api/slides/{slide.id}")
        assert resp.status_code == 200
        assert resp.json()["visibility"] == "public"

    def test_null_visibility_reads_as_internal(self, client, db, setup):
        slide = make_slide(db, setup["project"], visibility=None)
        assert client.get(f"/api/slides/{slide.id}").status_code == 401
        resp = client.get(f"/api/slides/{slide.id}", headers=auth_headers("member"))
        assert resp.status_code == 200
        assert resp.json()["visibility"] == "internal"

    def test_update_metadata(self, client, db, setup):
        slide = make_slide(db, setup["project"])
        resp = client.patch(
            f"/api/slides/{slide.id}",
            json={"file_name": "cover", "description": "Title slide", "tags": ["intro"]},
            headers=auth_headers("editor"),
        )
        assert resp.status_code == 200
        assert resp.json()["file_name"] == "cover"
        assert resp.json()["tags"] == ["intro"]

    def test_too_many_tags_is_400(self, client, db, setup):
        slide = make_slide(db, setup["project"])
        resp = client.patch(
            f"/api/slides/{slide.id}",
            json={"tags": ["a", "b", "c", "d", "e", "f"]},
            headers=auth_headers("editor"),
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"

    def test_stage_draft(self, client, db, setup):
        slide = make_slide(db, setup["project"], object_id="obj-v1")
        resp = client.post(
            f"/api/slides/{slide.id}/draft",
            json={"draft_object_id": "obj-v2"},
            headers=auth_headers("editor"),
        )
        assert resp.status_code == 200
        assert resp.json()["draft_object_id"] == "obj-v2"
        assert resp.json()["object_id"] == "obj-v1"
