# tests/test_content_view.py

"""
Tests for the content view router and session store.
"""

from datetime import timedelta

import pytest

from core import features
from core.content_view import ContentViewRouter
from core.errors import ContextNotInitializedError
from core.sessions import SessionStore
from models.enums import Role


def test_initial_view_is_dashboard():
    router = ContentViewRouter()

    assert router.active_view == "dashboard"
    assert router.page_title == "Dashboard"
    assert router.is_coming_soon is False


@pytest.mark.parametrize("view_id", ["dashboard", *sorted(features.FEATURE_CONFIG), "not-yet-registered"])
def test_set_active_view_is_immediately_visible(view_id):
    router = ContentViewRouter()

    router.set_active_view(view_id)

    assert router.active_view == view_id
    assert router.page_title == features.resolve_title(view_id)
    assert router.is_coming_soon is features.is_coming_soon(view_id)


def test_unknown_view_gets_fallback_title():
    router = ContentViewRouter()
    state = router.set_active_view("brand-new-view")

    assert state.page_title == "Feature"
    assert state.is_coming_soon is False


def test_subscribers_receive_consistent_snapshot():
    router = ContentViewRouter()
    seen = []
    router.subscribe(lambda state: seen.append((state.active_view, state.page_title, router.page_title)))

    router.set_active_view("fee-status")
    router.set_active_view("members")

    assert seen == [
        ("fee-status", "Fee Status", "Fee Status"),
        ("members", "Members", "Members"),
    ]


def test_setting_same_view_still_notifies():
    router = ContentViewRouter()
    calls = []
    router.subscribe(calls.append)

    router.set_active_view("dashboard")
    router.set_active_view("dashboard")

    assert len(calls) == 2


def test_unsubscribe_stops_notifications():
    router = ContentViewRouter()
    calls = []
    unsubscribe = router.subscribe(calls.append)

    router.set_active_view("rules")
    unsubscribe()
    router.set_active_view("announcements")

    assert [s.active_view for s in calls] == ["rules"]


def test_listener_transition_supersedes_current_notification():
    router = ContentViewRouter()
    late = []

    def redirect(state):
        if state.active_view == "villages":
            router.set_active_view("dashboard")

    router.subscribe(redirect)
    router.subscribe(lambda state: late.append(state.active_view))

    router.set_active_view("villages")

    assert router.active_view == "dashboard"
    assert late == ["dashboard"]


def test_closed_router_raises():
    router = ContentViewRouter()
    router.close()

    with pytest.raises(ContextNotInitializedError):
        router.active_view
    with pytest.raises(ContextNotInitializedError):
        router.set_active_view("members")


# -----------------------------------------------------
# Session store
# -----------------------------------------------------
def test_sessions_are_isolated():
    store = SessionStore()
    a = store.open(Role.superadmin, user_id="a")
    b = store.open("household_head", user_id="b")

    a.router.set_active_view("villages")

    assert store.get(a.session_id).router.active_view == "villages"
    assert store.get(b.session_id).router.active_view == "dashboard"
    assert b.role is Role.household_head


def test_open_with_initial_view():
    store = SessionStore()
    context = store.open(Role.admin_head, initial_view="rules")

    assert context.router.active_view == "rules"
    assert context.router.page_title == "Rules"


def test_get_unknown_session_raises():
    store = SessionStore()

    with pytest.raises(ContextNotInitializedError):
        store.get("missing")
    with pytest.raises(ContextNotInitializedError):
        store.get(None)


def test_close_tears_down_router():
    store = SessionStore()
    context = store.open(Role.security_officer)
    router = context.router

    store.close(context.session_id)

    assert store.size() == 0
    with pytest.raises(ContextNotInitializedError):
        store.get(context.session_id)
    with pytest.raises(ContextNotInitializedError):
        router.active_view


def test_reopen_after_logout_resets_to_dashboard():
    store = SessionStore()
    first = store.open(Role.admin_officer, user_id="u")
    first.router.set_active_view("manual-payments")
    store.close(first.session_id)

    second = store.open(Role.admin_officer, user_id="u")

    assert second.session_id != first.session_id
    assert second.router.active_view == "dashboard"


def test_reopen_replaces_earlier_session_of_same_user():
    store = SessionStore()

    contexts = [store.open(Role.superadmin, user_id="same-user") for _ in range(50)]

    assert store.size() == 1
    assert store.get(contexts[-1].session_id) is contexts[-1]
    with pytest.raises(ContextNotInitializedError):
        store.get(contexts[0].session_id)
    with pytest.raises(ContextNotInitializedError):
        contexts[0].router.active_view


def test_reopen_keeps_other_users_sessions():
    store = SessionStore()
    a = store.open(Role.superadmin, user_id="a")
    store.open(Role.household_head, user_id="b")
    store.open(Role.household_head, user_id="b")

    assert store.size() == 2
    assert store.get(a.session_id).role is Role.superadmin


def test_idle_session_expires_on_lookup():
    store = SessionStore(idle_timeout_seconds=60)
    context = store.open(Role.admin_head, user_id="u")
    context.last_seen -= timedelta(seconds=61)

    with pytest.raises(ContextNotInitializedError):
        store.get(context.session_id)

    assert store.size() == 0
    with pytest.raises(ContextNotInitializedError):
        context.router.active_view


def test_idle_sessions_are_evicted_on_open():
    store = SessionStore(idle_timeout_seconds=60)
    abandoned = store.open(Role.security_officer, user_id="tab-1")
    abandoned.last_seen -= timedelta(minutes=5)

    fresh = store.open(Role.security_officer, user_id="tab-2")

    assert store.size() == 1
    assert store.get(fresh.session_id) is fresh


def test_lookup_refreshes_last_seen():
    store = SessionStore(idle_timeout_seconds=60)
    context = store.open(Role.household_head, user_id="u")
    context.last_seen -= timedelta(seconds=30)
    before = context.last_seen

    store.get(context.session_id)

    assert context.last_seen > before
    assert not context.is_expired(60)
