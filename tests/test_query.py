"""Tests for pagination parameters and the list query contract."""

import math

import pytest

from devdeck.models.project import Project
from devdeck.models.role import Role
from devdeck.models.user import User
from devdeck.services.project_service import ProjectService
from devdeck.services.query import MAX_LIMIT, PageParams, TALENT_DEFAULT_LIMIT


class TestPageParams:
    """Absent or invalid values fall back to defaults"""

    def test_defaults(self):
        params = PageParams.from_raw()
        assert (params.page, params.limit) == (1, 10)
        assert params.offset == 0

    def test_talent_default_limit(self):
        assert PageParams.from_raw(default_limit=TALENT_DEFAULT_LIMIT).limit == 9

    @pytest.mark.parametrize("page,limit", [("abc", "xyz"), ("0", "0"), ("-2", "-5"), ("", "")])
    def test_invalid_values_use_defaults(self, page, limit):
        params = PageParams.from_raw(page, limit)
        assert (params.page, params.limit) == (1, 10)

    def test_offset(self):
        params = PageParams.from_raw("3", "5")
        assert params.offset == 10

    def test_limit_clamped(self):
        assert PageParams.from_raw(1, MAX_LIMIT * 10).limit == MAX_LIMIT

    def test_limit_clamped_to_given_maximum(self):
        assert PageParams.from_raw(1, 50, max_limit=5).limit == 5
        assert PageParams.from_raw(1, 3, max_limit=5).limit == 3


@pytest.fixture
def owner(db):
    user = User(name="Owner", email="owner@x.com", hashed_password="x", role=Role.dev)
    db.add(user)
    db.commit()
    return user


def add_projects(db, owner, titles):
    for title in titles:
        db.add(Project(title=title, description="d", owner_id=owner.id, images=[], tags=[]))
    db.commit()


class TestPaginate:
    def test_page_two_of_twelve(self, db, owner):
        add_projects(db, owner, [f"Project {i}" for i in range(12)])
        result = ProjectService(db).list_projects(PageParams(page=2, limit=5))
        assert len(result["data"]) == 5
        assert result["total"] == 12
        assert result["total_pages"] == 3
        assert (result["page"], result["limit"]) == (2, 5)

    def test_total_invariant_under_page(self, db, owner):
        add_projects(db, owner, [f"Item {i}" for i in range(7)])
        service = ProjectService(db)
        for limit in (1, 2, 3, 7, 10):
            totals = set()
            for page in range(1, 6):
                result = service.list_projects(PageParams(page=page, limit=limit))
                assert len(result["data"]) <= limit
                assert result["total_pages"] == math.ceil(result["total"] / limit)
                totals.add(result["total"])
            assert totals == {7}

    def test_newest_first(self, db, owner):
        add_projects(db, owner, ["first", "second", "third"])
        titles = [p.title for p in ProjectService(db).list_projects(PageParams())["data"]]
        assert titles == ["third", "second", "first"]

    def test_filter_is_contains_and_case_insensitive(self, db, owner):
        add_projects(db, owner, ["Weather App", "my weather bot", "Chess"])
        result = ProjectService(db).list_projects(PageParams(), search="WEATHER")
        assert result["total"] == 2
        result = ProjectService(db).list_projects(PageParams(), search="ather")
        assert result["total"] == 2, "Filter should match substrings, not prefixes"

    def test_empty_result(self, db, owner):
        result = ProjectService(db).list_projects(PageParams(), search="nothing matches")
        assert result == {"data": [], "total": 0, "page": 1, "limit": 10, "total_pages": 0}

    def test_owner_restriction(self, db, owner):
        other = User(name="Other", email="other@x.com", hashed_password="x", role=Role.dev)
        db.add(other)
        db.commit()
        add_projects(db, owner, ["mine 1", "mine 2"])
        add_projects(db, other, ["theirs"])
        result = ProjectService(db).list_projects(PageParams(), owner_id=owner.id)
        assert result["total"] == 2
        assert {p.owner_id for p in result["data"]} == {owner.id}

    @pytest.mark.parametrize(
        "term,expected",
        [("%", ["100% done"]), ("_", ["snake_case"]), ("0%", ["100% done"]), ("a%e", [])],
    )
    def test_wildcard_characters_match_literally(self, db, owner, term, expected):
        add_projects(db, owner, ["alpha", "100% done", "snake_case"])
        result = ProjectService(db).list_projects(PageParams(), search=term)
        assert sorted(p.title for p in result["data"]) == expected
