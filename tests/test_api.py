# tests/test_api.py

"""
Tests for the navigation, content view and dashboard endpoints.
"""

import asyncio
from unittest.mock import Mock, patch

from fastapi.testclient import TestClient

from core.stats import StatAggregator
from dependencies.auth import CurrentUser


def open_session(client: TestClient, **payload) -> str:
    response = client.post("/session", json=payload or None)
    assert response.status_code == 200, response.text
    return response.json()["session_id"]


# -----------------------------------------------------
# Navigation
# -----------------------------------------------------
def test_navigation_for_current_user(client: TestClient, login, superadmin_user):
    login(superadmin_user)

    response = client.get("/navigation")

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data] == [
        "dashboard", "villages", "users", "superadmin-payments", "reports",
    ]
    assert data[3]["badge"] == "3"
    assert data[3]["href"] == "/payments"


def test_navigation_unknown_role_is_400(client: TestClient, login):
    login(CurrentUser(id="x", email="x@example.com", role="janitor"))

    response = client.get("/navigation")

    assert response.status_code == 400
    assert "janitor" in response.json()["detail"]


def test_navigation_for_named_role(client: TestClient, login, household_user):
    login(household_user)

    response = client.get("/navigation/roles/security_officer")
    assert response.status_code == 200
    assert len(response.json()) == 9

    assert client.get("/navigation/roles/owner").status_code == 400


def test_navigation_groups_breadcrumbs_and_search(client: TestClient, login, household_user):
    login(household_user)

    groups = client.get("/navigation/groups").json()
    assert [group["id"] for group in groups] == ["main", "personal"]
    assert len(groups[1]["entries"]) == 7

    trail = client.get("/navigation/breadcrumbs", params={"path": "/fee-status"}).json()
    assert [item["id"] for item in trail] == ["home", "fee-status"]
    assert trail[1]["is_active"] is True
    assert client.get("/navigation/breadcrumbs").status_code == 422

    found = client.get("/navigation/search", params={"q": "sticker"}).json()
    assert [item["id"] for item in found] == ["household-sticker-requests"]

    stats = client.get("/navigation/stats").json()
    assert stats == {
        "role": "household_head",
        "total_items": 8,
        "total_groups": 2,
        "coming_soon_items": 6,
        "badged_items": 0,
    }


def test_list_roles(client: TestClient, login, household_user):
    login(household_user)

    response = client.get("/navigation/roles")

    assert response.status_code == 200
    assert response.json()[0] == {"role": "superadmin", "display_name": "Super Administrator", "level": 100}


def test_feature_lookup_falls_back(client: TestClient):
    known = client.get("/features/fee-status").json()
    unknown = client.get("/features/something-new").json()

    assert known["title"] == "Fee Status"
    assert known["is_coming_soon"] is True
    assert unknown["title"] == "Feature"
    assert unknown["is_coming_soon"] is False


def test_navigation_requires_auth(client: TestClient):
    response = client.get("/navigation")
    assert response.status_code in (401, 403)


# -----------------------------------------------------
# Content view session
# -----------------------------------------------------
def test_session_lifecycle(client: TestClient, login, household_user):
    login(household_user)

    response = client.post("/session")
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "household_head"
    assert body["role_display_name"] == "Household Head"
    assert body["view"] == {
        "active_view": "dashboard",
        "page_title": "Dashboard",
        "is_coming_soon": False,
        "href": "/dashboard",
    }

    headers = {"X-Session-Id": body["session_id"]}

    response = client.put("/session/view", json={"view_id": "fee-status"}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "active_view": "fee-status",
        "page_title": "Fee Status",
        "is_coming_soon": True,
        "href": "/fee-status",
    }

    assert client.get("/session/view", headers=headers).json()["active_view"] == "fee-status"

    assert client.delete("/session", headers=headers).status_code == 204
    assert client.get("/session/view", headers=headers).status_code == 409


def test_session_restores_view_from_href(client: TestClient, login, household_user):
    login(household_user)

    session_id = open_session(client, href="/sticker-requests")

    view = client.get("/session/view", headers={"X-Session-Id": session_id}).json()
    assert view["active_view"] == "household-sticker-requests"


def test_set_view_by_href_and_unknown_view(client: TestClient, login, superadmin_user):
    login(superadmin_user)
    headers = {"X-Session-Id": open_session(client)}

    by_href = client.put("/session/view", json={"href": "/villages"}, headers=headers).json()
    assert by_href["active_view"] == "villages"
    assert by_href["is_coming_soon"] is False

    unknown = client.put("/session/view", json={"view_id": "beta-feature"}, headers=headers).json()
    assert unknown == {
        "active_view": "beta-feature",
        "page_title": "Feature",
        "is_coming_soon": False,
        "href": None,
    }

    assert client.put("/session/view", json={"href": "/nowhere"}, headers=headers).status_code == 404
    assert client.put("/session/view", json={}, headers=headers).status_code == 422


def test_view_requires_session(client: TestClient, login, superadmin_user):
    login(superadmin_user)

    assert client.get("/session/view").status_code == 409
    assert client.get("/session/view", headers={"X-Session-Id": "nope"}).status_code == 409


def test_session_belongs_to_its_user(client: TestClient, login, superadmin_user, household_user):
    login(superadmin_user)
    session_id = open_session(client)

    login(household_user)
    response = client.get("/session/view", headers={"X-Session-Id": session_id})

    assert response.status_code == 403


def test_reload_replaces_previous_session(client: TestClient, login, household_user):
    login(household_user)
    first = open_session(client)
    second = open_session(client, href="/members")

    assert client.get("/session/view", headers={"X-Session-Id": first}).status_code == 409
    view = client.get("/session/view", headers={"X-Session-Id": second}).json()
    assert view["active_view"] == "members"
    assert client.get("/health/app").json()["active_sessions"] == 1


# -----------------------------------------------------
# Dashboard stats
# -----------------------------------------------------
def fake_stats(*args, **kwargs):
    async def total():
        return 12

    async def active():
        raise RuntimeError("lookup failed")

    async def inactive():
        await asyncio.sleep(0)
        return 3

    return StatAggregator({
        "total_villages": total,
        "active_villages": active,
        "inactive_villages": inactive,
    })


def test_dashboard_stats_are_independent(client: TestClient, login, superadmin_user):
    login(superadmin_user)
    headers = {"X-Session-Id": open_session(client)}

    with patch("routers.dashboard.get_supabase_client", return_value=Mock()), \
         patch("routers.dashboard.build_dashboard_stats", side_effect=fake_stats):

        first = client.get("/dashboard/stats", headers=headers)
        assert first.status_code == 200
        assert set(first.json()) == {"total_villages", "active_villages", "inactive_villages"}

        settled = client.post("/dashboard/stats/refetch?wait=true", headers=headers).json()

    assert settled["total_villages"] == {"data": 12, "loading": False, "error": None}
    assert settled["inactive_villages"] == {"data": 3, "loading": False, "error": None}
    assert settled["active_villages"]["data"] is None
    assert settled["active_villages"]["error"]["type"] == "RuntimeError"


def test_dashboard_retry_single_stat(client: TestClient, login, superadmin_user):
    login(superadmin_user)
    headers = {"X-Session-Id": open_session(client)}

    with patch("routers.dashboard.get_supabase_client", return_value=Mock()), \
         patch("routers.dashboard.build_dashboard_stats", side_effect=fake_stats):

        client.post("/dashboard/stats/refetch?wait=true", headers=headers)
        retried = client.post("/dashboard/stats/total_villages/retry?wait=true", headers=headers)
        missing = client.post("/dashboard/stats/unknown/retry", headers=headers)

    assert retried.status_code == 200
    assert retried.json()["total_villages"]["data"] == 12
    assert retried.json()["active_villages"]["error"] is not None
    assert missing.status_code == 404


def test_dashboard_without_supabase(client: TestClient, login, superadmin_user):
    login(superadmin_user)
    headers = {"X-Session-Id": open_session(client)}

    with patch("routers.dashboard.get_supabase_client", return_value=None):
        response = client.get("/dashboard/stats", headers=headers)

    assert response.status_code == 503


def test_health_app(client: TestClient):
    response = client.get("/health/app")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_session_routes_run_on_the_event_loop():
    from dependencies import session as session_dependencies
    from routers import session as session_routes

    for handler in (
        session_routes.open_session,
        session_routes.get_active_view,
        session_routes.set_active_view,
        session_routes.close_session,
        session_dependencies.get_session_context,
    ):
        assert asyncio.iscoroutinefunction(handler), handler.__name__
