"""Tests for search orchestration with a stand-in engine client."""

from unittest.mock import MagicMock

import pytest

from deckvault.exceptions import NotFoundError, SearchUnavailableError, ValidationError
from deckvault.services.search_client import SearchClient, SearchPage
from deckvault.services.search_service import SlideSearchService
from factories import grant_org_role, grant_project_role, make_folder, make_org, make_user


@pytest.fixture()
def tree(db):
    org = make_org(db)
    launch = make_folder(db, org, "launch", visibility="public")
    q3 = make_folder(db, org, "q3", parent=launch, visibility="public")
    assets = make_folder(db, org, "assets", parent=q3, visibility="public")
    vault = make_folder(db, org, "vault", visibility="restricted")
    return {"org": org, "launch": launch, "q3": q3, "assets": assets, "vault": vault}


def _engine(hits=None, total=0):
    client = MagicMock(spec=SearchClient)
    client.search.return_value = SearchPage(hits=hits or [], total=total)
    return client


def _filter_of(client) -> str:
    return client.search.call_args.args[1]


class TestScope:

    def test_organization_only(self, db, tree):
        engine = _engine()
        SlideSearchService(db, client=engine).search("acme", "roadmap", None)
        query, search_filter, page, per_page = engine.search.call_args.args
        assert query == "roadmap"
        assert search_filter == f'organization_id = "{tree["org"].id}" AND visibility = "public"'
        assert (page, per_page) == (1, 20)

    def test_project_scope(self, db, tree):
        engine = _engine()
        SlideSearchService(db, client=engine).search("acme", "", None, project_path="launch")
        assert f'project_id = "{tree["launch"].id}"' in _filter_of(engine)
        assert "parent_id IN" not in _filter_of(engine)

    def test_folder_scope_uses_subtree(self, db, tree):
        engine = _engine()
        SlideSearchService(db, client=engine).search(
            "acme", "", None, project_path="launch", folder_path="q3"
        )
        result = _filter_of(engine)
        assert f'project_id = "{tree["launch"].id}"' in result
        expected = sorted([tree["q3"].id, tree["assets"].id])
        assert f'parent_id IN ["{expected[0]}", "{expected[1]}"]' in result

    def test_unknown_scope_is_not_found(self, db, tree):
        with pytest.raises(NotFoundError):
            SlideSearchService(db, client=_engine()).search("acme", "", None, project_path="nope")

    def test_unreadable_scope_looks_missing(self, db, tree):
        service = SlideSearchService(db, client=_engine())
        with pytest.raises(NotFoundError) as hidden:
            service.search("acme", "", None, project_path="vault")
        with pytest.raises(NotFoundError) as missing:
            service.search("acme", "", None, project_path="nope")
        assert hidden.value.details["resource"] == missing.value.details["resource"] == "folder"
        assert hidden.value.message == "Folder not found: /vault"

    def test_project_grant_opens_restricted_scope(self, db, tree):
        user = make_user(db, "u1")
        grant_project_role(db, user, tree["vault"], "member")
        engine = _engine()
        SlideSearchService(db, client=engine).search("acme", "", "u1", project_path="vault")
        assert f'project_id = "{tree["vault"].id}"' in _filter_of(engine)

    def test_unknown_organization(self, db, tree):
        with pytest.raises(NotFoundError):
            SlideSearchService(db, client=_engine()).search("globex", "", None)


class TestRolesAndPaging:

    def test_caller_roles_widen_the_filter(self, db, tree):
        user = make_user(db, "u1")
        grant_org_role(db, user, tree["org"], "member")
        grant_project_role(db, user, tree["launch"], "member")
        engine = _engine()
        SlideSearchService(db, client=engine).search("acme", "", "u1")
        result = _filter_of(engine)
        assert '(visibility = "internal" AND ' in result
        assert f'(visibility = "restricted" AND project_id IN ["{tree["launch"].id}"])' in result

    def test_offset_and_limit(self, db, tree):
        engine = _engine(total=55)
        response = SlideSearchService(db, client=engine).search("acme", "", None, offset=20, limit=10)
        assert engine.search.call_args.args[2:] == (3, 10)
        assert response["page"] == 3
        assert response["total"] == 55

    def test_limit_cap(self, db, tree):
        with pytest.raises(ValidationError):
            SlideSearchService(db, client=_engine()).search("acme", "", None, limit=500)


class TestResults:

    def test_hits_get_parent_path(self, db, tree):
        engine = _engine(
            hits=[
                {"id": "s1", "parent_id": tree["q3"].id, "_formatted": {"slide_text": "<em>x</em>"}},
                {"id": "s2", "parent_id": "gone"},
            ],
            total=2,
        )
        response = SlideSearchService(db, client=engine).search("acme", "x", None)
        first, second = response["results"]
        assert first["parent_path"] == "/launch/q3"
        assert first["formatted"] == {"slide_text": "<em>x</em>"}
        assert "_formatted" not in first
        assert second["parent_path"] is None

    def test_engine_failure_propagates(self, db, tree):
        engine = _engine()
        engine.search.side_effect = SearchUnavailableError(reason="boom")
        with pytest.raises(SearchUnavailableError):
            SlideSearchService(db, client=engine).search("acme", "", None)

    def test_unconfigured_engine(self, db, tree):
        with pytest.raises(SearchUnavailableError):
            SlideSearchService(db).search("acme", "", None)
