import asyncio

import pytest

from notification_service.application.realtime import RealtimeHub
from notification_service.application.services.dispatcher import (
    RECEIVE_NOTIFICATION,
    UNREAD_COUNT_UPDATED,
    NotificationDispatcher,
)
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId
from tests.fakes import FakeSocket, RecordingTransport, StalledSocket, make_record


@pytest.fixture()
def dispatcher(registry, history, transport):
    return NotificationDispatcher(registry, history, transport)


async def test_message_to_offline_user_is_stored_unread_and_not_pushed(
    dispatcher, history, transport
):
    notification_id = await dispatcher.send_realtime_notification(
        UserId(42), NotificationType.MESSAGE, "Hi", "body"
    )

    rows = history.rows_for(42)
    assert len(rows) == 1
    assert rows[0].id == notification_id
    assert rows[0].type == NotificationType.MESSAGE
    assert rows[0].is_read is False
    assert transport.calls == []


async def test_system_notification_to_online_user_is_stored_and_pushed(
    dispatcher, registry, history, transport
):
    await registry.add_connection(ConnectionId("abc"), UserId(7))

    await dispatcher.send_realtime_notification(
        UserId(7), NotificationType.SYSTEM, "Hi", "body", data={"k": 1}
    )

    assert len(history.rows_for(7)) == 1
    assert len(transport.calls) == 1
    groups, target, (payload,) = transport.calls[0]
    assert groups == ["User_7"]
    assert target == RECEIVE_NOTIFICATION
    assert payload["type"] == "system"
    assert payload["title"] == "Hi"
    assert payload["content"] == "body"
    assert payload["data"] == {"k": 1}
    assert "timestamp" in payload


async def test_friend_request_to_offline_user_is_dropped(dispatcher, history, transport):
    result = await dispatcher.send_realtime_notification(
        UserId(3), NotificationType.FRIEND_REQUEST, "Friend request", "from 9"
    )

    assert result is None
    assert history.records == {}
    assert transport.calls == []


async def test_friend_request_to_online_user_is_pushed_but_not_stored(
    dispatcher, registry, history, transport
):
    await registry.add_connection(ConnectionId("c1"), UserId(3))

    await dispatcher.send_realtime_notification(
        UserId(3), NotificationType.FRIEND_REQUEST, "Friend request", "from 9"
    )

    assert history.records == {}
    assert len(transport.calls_to(RECEIVE_NOTIFICATION)) == 1


async def test_history_write_failure_propagates(dispatcher, history, registry, transport):
    history.fail_writes = True
    await registry.add_connection(ConnectionId("c1"), UserId(3))

    with pytest.raises(RuntimeError):
        await dispatcher.send_realtime_notification(
            UserId(3), NotificationType.MESSAGE, "Hi", "body"
        )
    assert transport.calls == []


async def test_push_failure_is_swallowed(registry, history):
    failing = RecordingTransport(fail=True)
    dispatcher = NotificationDispatcher(registry, history, failing)
    await registry.add_connection(ConnectionId("c1"), UserId(3))

    notification_id = await dispatcher.send_realtime_notification(
        UserId(3), NotificationType.MESSAGE, "Hi", "body"
    )

    assert notification_id is not None
    assert len(failing.calls) == 1


async def test_broadcast_stores_every_user_and_pushes_once(
    dispatcher, registry, history, transport
):
    await registry.add_connection(ConnectionId("online"), UserId(2))

    await dispatcher.send_system_notification([UserId(1), UserId(2)], "T", "C")

    for user_id in (1, 2):
        rows = history.rows_for(user_id)
        assert len(rows) == 1
        assert rows[0].type == NotificationType.SYSTEM
        assert (rows[0].title, rows[0].content) == ("T", "C")

    pushes = transport.calls_to(RECEIVE_NOTIFICATION)
    assert len(pushes) == 1
    groups, _, (payload,) = pushes[0]
    assert groups == ["User_1", "User_2"]
    assert payload["type"] == "system"


async def test_broadcast_with_nobody_online_only_stores(dispatcher, history, transport):
    await dispatcher.send_system_notification([UserId(1), UserId(2)], "T", "C")

    assert len(history.records) == 2
    assert transport.calls == []


async def test_online_status_batch(dispatcher, registry):
    await registry.add_connection(ConnectionId("c1"), UserId(1))

    statuses = await dispatcher.get_users_online_status([UserId(1), UserId(2)])

    assert statuses == {1: True, 2: False}


async def test_mark_as_read_by_other_user_changes_nothing(dispatcher, history, transport):
    notification_id = await history.create(make_record(1, NotificationType.MESSAGE))

    updated = await dispatcher.mark_as_read(notification_id, UserId(2))

    assert updated is False
    assert history.records[notification_id].is_read is False
    assert transport.calls == []


async def test_mark_as_read_pushes_new_unread_count(dispatcher, history, transport):
    first = await history.create(make_record(1, NotificationType.MESSAGE))
    await history.create(make_record(1, NotificationType.SYSTEM))

    assert await dispatcher.mark_as_read(first, UserId(1)) is True

    assert history.records[first].is_read is True
    assert history.records[first].read_at is not None
    assert transport.calls == [(["User_1"], UNREAD_COUNT_UPDATED, (1,))]


async def test_mark_all_as_read_pushes_zero(dispatcher, history, transport):
    await history.create(make_record(1, NotificationType.MESSAGE))
    await history.create(make_record(1, NotificationType.MESSAGE))

    assert await dispatcher.mark_all_as_read(UserId(1)) == 2

    assert await history.get_unread_count(UserId(1)) == 0
    assert transport.calls == [(["User_1"], UNREAD_COUNT_UPDATED, (0,))]


async def test_broadcast_completes_when_one_client_stalls(registry, history):
    hub = RealtimeHub()
    hub.send_timeout = 0.05
    dispatcher = NotificationDispatcher(registry, history, hub)
    healthy = FakeSocket()
    for cid, user_id, socket in [("a", 1, StalledSocket()), ("b", 2, healthy)]:
        await registry.add_connection(ConnectionId(cid), UserId(user_id))
        await hub.connect(cid, socket)
        await hub.add_to_group(cid, UserId(user_id).group_name)

    await asyncio.wait_for(
        dispatcher.send_system_notification([UserId(1), UserId(2)], "T", "C"),
        timeout=1,
    )

    assert len(healthy.sent) == 1
    assert healthy.sent[0]["arguments"][0]["title"] == "T"
