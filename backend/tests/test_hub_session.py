from unittest.mock import AsyncMock

import pytest

from notification_service.application.realtime import (
    ChatHubSession,
    HubMethodError,
    HubSessionState,
)
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.exceptions import InvalidStateTransition
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId
from tests.fakes import FakeSocket, StaticUserDirectory


@pytest.fixture()
def make_session(registry, history, hub, user_directory):
    dispatcher = NotificationDispatcher(registry, history, hub)

    def factory(user_id=7, connection_id="conn-7", directory=None):
        return ChatHubSession(
            connection_id=ConnectionId(connection_id),
            user_id=UserId(user_id),
            hub=hub,
            registry=registry,
            dispatcher=dispatcher,
            user_directory=directory or user_directory,
        )

    return factory


async def test_connect_registers_presence_and_group(make_session, registry, hub):
    session = make_session()

    await session.on_connected(FakeSocket())

    assert session.state is HubSessionState.CONNECTED
    assert await registry.is_online(UserId(7)) is True
    assert await hub.group_members("User_7") == {"conn-7"}


async def test_disconnect_is_idempotent_and_clears_presence(make_session, registry, hub):
    session = make_session()
    await session.on_connected(FakeSocket())

    await session.on_disconnected(ConnectionResetError("gone"))
    await session.on_disconnected()

    assert session.state is HubSessionState.DISCONNECTED
    assert await registry.is_online(UserId(7)) is False
    assert await hub.group_members("User_7") == set()


async def test_disconnect_clears_presence_when_hub_cleanup_fails(
    make_session, registry, hub, monkeypatch
):
    session = make_session()
    await session.on_connected(FakeSocket())
    monkeypatch.setattr(
        hub, "remove_from_group", AsyncMock(side_effect=RuntimeError("hub down"))
    )
    monkeypatch.setattr(hub, "disconnect", AsyncMock(side_effect=RuntimeError("hub down")))

    await session.on_disconnected()

    assert session.state is HubSessionState.DISCONNECTED
    assert await registry.is_online(UserId(7)) is False
    assert await registry.get_connections(UserId(7)) == set()


async def test_cannot_reconnect_a_closed_session(make_session):
    session = make_session()
    await session.on_connected(FakeSocket())
    await session.on_disconnected()

    with pytest.raises(InvalidStateTransition):
        await session.on_connected(FakeSocket())


async def test_connect_twice_is_rejected(make_session):
    session = make_session()
    await session.on_connected(FakeSocket())

    with pytest.raises(InvalidStateTransition):
        await session.on_connected(FakeSocket())


async def test_invoke_before_connect_is_rejected(make_session):
    with pytest.raises(HubMethodError):
        await make_session().invoke("Ping", [])


async def test_ping_and_unknown_method(make_session):
    session = make_session()
    await session.on_connected(FakeSocket())

    assert await session.invoke("Ping", []) == "pong"
    with pytest.raises(HubMethodError):
        await session.invoke("DropDatabase", [])
    with pytest.raises(HubMethodError):
        await session.invoke("Ping", ["unexpected"])


async def test_private_message_reaches_online_receiver(make_session, history):
    sender = make_session(user_id=7, connection_id="sender")
    receiver_socket = FakeSocket()
    receiver = make_session(user_id=8, connection_id="receiver")
    await sender.on_connected(FakeSocket())
    await receiver.on_connected(receiver_socket)

    assert await sender.invoke("SendPrivateMessageNotification", [8, "hey"]) is True

    rows = history.rows_for(8)
    assert len(rows) == 1
    assert rows[0].type == NotificationType.MESSAGE
    assert rows[0].title == "New message"
    pushed = receiver_socket.sent[0]
    assert pushed["target"] == "ReceiveNotification"
    assert pushed["arguments"][0]["data"] == {"sender_id": 7, "message": "hey"}


async def test_private_message_to_inactive_user_is_skipped(make_session, history):
    session = make_session(directory=StaticUserDirectory(inactive=[8]))
    await session.on_connected(FakeSocket())

    assert await session.invoke("SendPrivateMessageNotification", [8, "hey"]) is False
    assert history.records == {}


async def test_join_and_leave_custom_group(make_session, hub):
    session = make_session()
    await session.on_connected(FakeSocket())

    await session.invoke("JoinGroup", ["room-1"])
    assert await hub.group_members("room-1") == {"conn-7"}

    await session.invoke("LeaveGroup", ["room-1"])
    assert await hub.group_members("room-1") == set()


async def test_user_groups_cannot_be_joined(make_session):
    session = make_session()
    await session.on_connected(FakeSocket())

    with pytest.raises(HubMethodError):
        await session.invoke("JoinGroup", ["User_8"])
