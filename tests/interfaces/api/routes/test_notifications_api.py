import pytest

from app.application.use_cases.notifications import create_notification
from app.domain.entities import NotificationCandidate
from app.infrastructure.security import create_access_token


def _notify(db_session, bus, recipient, actor, title="New reply"):
    return create_notification(
        db_session,
        bus,
        NotificationCandidate(
            user_id=recipient.id,
            actor_user_id=actor.id,
            type="thread_reply",
            title=title,
            content="preview",
            related_type="thread",
            related_id=5,
        ),
    )


def test_endpoints_require_authentication(client):
    assert client.get("/notifications").status_code == 401
    assert client.get("/notifications/unread-count").status_code == 401
    assert client.post("/notifications/read-all").status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get(
        "/notifications", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_token_for_missing_user_is_rejected(client):
    token = create_access_token(user_id=999, username="ghost", role="user")

    response = client.get(
        "/notifications/unread-count", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


def test_list_notifications_returns_camel_case_page(client, auth_headers, db_session, bus, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    for index in range(3):
        _notify(db_session, bus, alice, bob, title=f"Reply {index}")

    response = client.get(
        "/notifications", params={"page": 1, "pageSize": 2}, headers=auth_headers(alice)
    )

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 1
    assert body["pageSize"] == 2
    assert body["total"] == 3
    assert body["totalPages"] == 2
    first = body["items"][0]
    assert first["title"] == "Reply 2"
    assert first["isRead"] is False
    assert first["readAt"] is None
    assert first["relatedType"] == "thread"
    assert first["actor"] == {"id": bob.id, "username": "bob", "avatar": None}


def test_page_size_above_limit_is_rejected(client, auth_headers, make_user):
    alice = make_user("alice")

    response = client.get(
        "/notifications", params={"pageSize": 101}, headers=auth_headers(alice)
    )

    assert response.status_code == 422


def test_read_flow_updates_unread_count(client, auth_headers, db_session, bus, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    first = _notify(db_session, bus, alice, bob)
    _notify(db_session, bus, alice, bob)
    headers = auth_headers(alice)

    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unreadCount": 2
    }

    read = client.post(f"/notifications/{first.id}/read", headers=headers)
    repeated = client.post(f"/notifications/{first.id}/read", headers=headers)
    assert read.status_code == 200
    assert read.json()["isRead"] is True
    assert repeated.json()["readAt"] == read.json()["readAt"]

    unread_only = client.get(
        "/notifications", params={"unreadOnly": "true"}, headers=headers
    ).json()
    assert unread_only["total"] == 1

    read_all = client.post("/notifications/read-all", headers=headers)
    assert read_all.json() == {"updated": 1, "unreadCount": 0}
    assert client.post("/notifications/read-all", headers=headers).json() == {
        "updated": 0,
        "unreadCount": 0,
    }


def test_reading_another_users_notification_is_not_found(client, auth_headers, db_session, bus, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    notification = _notify(db_session, bus, alice, bob)

    response = client.post(
        f"/notifications/{notification.id}/read", headers=auth_headers(bob)
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found"


def test_settings_round_trip(client, auth_headers, make_user):
    alice = make_user("alice")
    headers = auth_headers(alice)

    defaults = client.get("/notifications/settings", headers=headers)
    assert defaults.status_code == 200
    assert defaults.json()["dndStartHour"] == 23
    assert defaults.json()["followEnabled"] is True

    updated = client.put(
        "/notifications/settings",
        json={"followEnabled": False, "dndEnabled": True, "dndEndHour": 6},
        headers=headers,
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["followEnabled"] is False
    assert body["dndEnabled"] is True
    assert body["dndStartHour"] == 23
    assert body["dndEndHour"] == 6
    assert body["mentionEnabled"] is True
    assert body["updatedAt"] is not None


@pytest.mark.parametrize(
    "payload",
    [
        {"emailEnabled": True},
        {"followEnabled": "no"},
        {"dndEnabled": 1},
        {"dndStartHour": 24},
        {"dndEndHour": "7"},
    ],
)
def test_settings_update_rejects_invalid_payloads(client, auth_headers, make_user, payload):
    alice = make_user("alice")
    headers = auth_headers(alice)

    response = client.put("/notifications/settings", json=payload, headers=headers)

    assert response.status_code == 422
    assert client.get("/notifications/settings", headers=headers).json()["dndStartHour"] == 23


def test_system_notification_requires_admin(client, auth_headers, make_user):
    alice = make_user("alice")
    bob = make_user("bob")

    response = client.post(
        "/notifications/system",
        json={"userId": bob.id, "title": "Hello"},
        headers=auth_headers(alice),
    )

    assert response.status_code == 403


def test_admin_sends_system_notification(client, auth_headers, make_user):
    admin = make_user("admin", role="admin")
    alice = make_user("alice")

    response = client.post(
        "/notifications/system",
        json={"userId": alice.id, "title": "  Scheduled maintenance ", "content": "Tonight"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    notification_id = response.json()["notificationId"]
    assert notification_id is not None
    items = client.get("/notifications", headers=auth_headers(alice)).json()["items"]
    assert [(item["id"], item["type"], item["title"]) for item in items] == [
        (notification_id, "system", "Scheduled maintenance")
    ]
    assert items[0]["actor"] is None


def test_suppressed_system_notification_returns_no_id(client, auth_headers, make_user):
    admin = make_user("admin", role="admin")
    alice = make_user("alice")
    client.put(
        "/notifications/settings",
        json={"systemEnabled": False},
        headers=auth_headers(alice),
    )

    response = client.post(
        "/notifications/system",
        json={"userId": alice.id, "title": "Hello"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    assert response.json() == {"notificationId": None}


def test_system_notification_for_unknown_user_is_not_found(client, auth_headers, make_user):
    admin = make_user("admin", role="admin")

    response = client.post(
        "/notifications/system",
        json={"userId": 777, "title": "Hello"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 404
