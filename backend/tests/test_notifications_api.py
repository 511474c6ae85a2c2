from unittest.mock import AsyncMock

from notification_service.config.settings import Config
from tests.conftest import make_token


def bearer(user_id):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def send(client, user_id=42, type="message", title="Hi", content="body", data=None):
    return client.post(
        "/api/notifications/send",
        json={
            "user_id": user_id,
            "type": type,
            "title": title,
            "content": content,
            "data": data,
        },
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_history_requires_a_token(client):
    response = client.get("/api/notifications")
    assert response.status_code in (401, 403)


def test_token_signed_with_another_secret_is_rejected(client):
    token = make_token(42, secret="not-the-shared-secret-for-this-service")
    response = client.get(
        "/api/notifications", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


def test_expired_token_is_rejected(client):
    token = make_token(42, exp_offset=-60)
    response = client.get(
        "/api/notifications", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


def test_sub_claim_is_accepted(client):
    token = make_token(42, claim="sub")
    response = client.get(
        "/api/notifications/unread-count",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 200


def test_send_to_offline_user_lands_in_history(client, auth_headers):
    assert send(client).status_code == 200

    response = client.get("/api/notifications", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 1
    assert body["items"][0]["type"] == "message"
    assert body["items"][0]["is_read"] is False
    assert client.get(
        "/api/notifications/unread-count", headers=auth_headers
    ).json() == {"count": 1}


def test_send_rejects_invalid_input(client):
    assert send(client, type="promo").status_code == 400
    assert send(client, user_id=0).status_code == 400
    assert send(client, title="x" * 201).status_code == 400
    assert send(client, content="").status_code == 400


def test_send_reports_store_failure_as_bad_request(client, history):
    history.fail_writes = True
    assert send(client).status_code == 400


def test_page_size_is_capped(client, auth_headers):
    response = client.get("/api/notifications?size=101", headers=auth_headers)
    assert response.status_code == 400


def test_mark_as_read_is_owner_scoped(client, auth_headers, history):
    send(client, user_id=42)
    notification_id = history.rows_for(42)[0].id

    stranger = client.post(f"/api/notifications/{notification_id}/read", headers=bearer(7))
    assert stranger.status_code == 400
    assert history.records[notification_id].is_read is False

    owner = client.post(f"/api/notifications/{notification_id}/read", headers=auth_headers)
    assert owner.status_code == 200
    assert history.records[notification_id].is_read is True


def test_mark_all_as_read(client, auth_headers):
    send(client)
    send(client, type="system")

    response = client.post("/api/notifications/read-all", headers=auth_headers)

    assert response.json() == {"success": True, "updated": 2}
    assert client.get(
        "/api/notifications/unread-count", headers=auth_headers
    ).json() == {"count": 0}


def test_delete_maps_missing_and_foreign_notifications(client, auth_headers, history):
    send(client, user_id=42)
    notification_id = history.rows_for(42)[0].id

    assert client.delete("/api/notifications/999", headers=auth_headers).status_code == 404
    assert (
        client.delete(f"/api/notifications/{notification_id}", headers=bearer(7)).status_code
        == 403
    )
    assert (
        client.delete(f"/api/notifications/{notification_id}", headers=auth_headers).json()
        == {"success": True}
    )


def test_system_broadcast_persists_for_every_user(client, history):
    response = client.post(
        "/api/notifications/system",
        json={"user_ids": [1, 2, 3], "title": "Maintenance", "content": "Tonight"},
    )

    assert response.status_code == 200
    assert sorted(r.user_id.value for r in history.records.values()) == [1, 2, 3]


def test_system_broadcast_rejects_duplicates_and_empty(client):
    duplicate = client.post(
        "/api/notifications/system",
        json={"user_ids": [1, 1], "title": "T", "content": "C"},
    )
    empty = client.post(
        "/api/notifications/system",
        json={"user_ids": [], "title": "T", "content": "C"},
    )
    assert duplicate.status_code == 400
    assert empty.status_code == 400


def test_online_status_for_offline_users(client, auth_headers):
    single = client.get("/api/notifications/online-status/7", headers=auth_headers)
    batch = client.post(
        "/api/notifications/online-status",
        json={"user_ids": [7, 8]},
        headers=auth_headers,
    )

    assert single.json() == {"user_id": 7, "is_online": False}
    assert batch.json() == {"statuses": {"7": False, "8": False}}


def test_online_status_batch_is_bounded(client, auth_headers):
    too_many = list(range(1, Config.BROADCAST_MAX_USERS + 2))

    response = client.post(
        "/api/notifications/online-status",
        json={"user_ids": too_many},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "check online status" in response.json()["error"]


def test_test_notification_is_not_persisted(client, auth_headers, history):
    response = client.post(
        "/api/test/send-test-notification",
        json={"user_id": 42, "title": "Ping", "content": "Pong"},
        headers=auth_headers,
    )

    assert response.json() == {"success": True, "message": "Test notification sent"}
    assert history.records == {}


def test_test_broadcast(client, auth_headers, history):
    response = client.post(
        "/api/test/send-system-broadcast",
        json={"user_ids": [1, 2], "title": "T", "content": "C"},
        headers=auth_headers,
    )

    assert response.json()["success"] is True
    assert len(history.records) == 2


def test_test_broadcast_reports_storage_failure(client, auth_headers, history):
    history.fail_writes = True

    response = client.post(
        "/api/test/send-system-broadcast",
        json={"user_ids": [1, 2], "title": "T", "content": "C"},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to send broadcast"}


def test_test_notification_reports_dispatch_failure(
    client, auth_headers, registry, monkeypatch
):
    monkeypatch.setattr(
        registry, "is_online", AsyncMock(side_effect=RuntimeError("presence down"))
    )

    response = client.post(
        "/api/test/send-test-notification",
        json={"user_id": 42, "title": "Ping", "content": "Pong"},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to send notification"}


def test_metrics_endpoint(client):
    send(client)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "notification_dispatched_total" in response.text
