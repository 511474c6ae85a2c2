import asyncio

from notification_service.application.realtime import RealtimeHub, completion_message
from tests.fakes import FakeSocket, StalledSocket


async def test_group_push_reaches_every_member():
    hub = RealtimeHub()
    phone, laptop, other = FakeSocket(), FakeSocket(), FakeSocket()
    for cid, socket, group in [
        ("phone", phone, "User_1"),
        ("laptop", laptop, "User_1"),
        ("other", other, "User_2"),
    ]:
        await hub.connect(cid, socket)
        await hub.add_to_group(cid, group)

    await hub.send_to_group("User_1", "ReceiveNotification", {"title": "Hi"})

    expected = {
        "type": "invocation",
        "target": "ReceiveNotification",
        "arguments": [{"title": "Hi"}],
    }
    assert phone.sent == [expected]
    assert laptop.sent == [expected]
    assert other.sent == []


async def test_multicast_delivers_once_per_socket():
    hub = RealtimeHub()
    socket = FakeSocket()
    await hub.connect("c1", socket)
    await hub.add_to_group("c1", "User_1")
    await hub.add_to_group("c1", "announcements")

    await hub.send_to_groups(["User_1", "announcements", "User_9"], "ReceiveNotification", 1)

    assert len(socket.sent) == 1


async def test_failing_socket_does_not_block_others():
    hub = RealtimeHub()
    broken, healthy = FakeSocket(fail=True), FakeSocket()
    await hub.connect("broken", broken)
    await hub.connect("healthy", healthy)
    await hub.add_to_group("broken", "User_1")
    await hub.add_to_group("healthy", "User_1")

    await hub.send_to_group("User_1", "UnreadCountUpdated", 3)

    assert healthy.sent[0]["arguments"] == [3]


async def test_stalled_socket_is_skipped_after_timeout():
    hub = RealtimeHub()
    hub.send_timeout = 0.05
    healthy = FakeSocket()
    await hub.connect("stalled", StalledSocket())
    await hub.connect("healthy", healthy)
    await hub.add_to_group("stalled", "User_1")
    await hub.add_to_group("healthy", "User_2")

    await asyncio.wait_for(
        hub.send_to_groups(["User_1", "User_2"], "ReceiveNotification", {"title": "T"}),
        timeout=1,
    )

    assert len(healthy.sent) == 1


async def test_disconnect_leaves_all_groups():
    hub = RealtimeHub()
    await hub.connect("c1", FakeSocket())
    await hub.add_to_group("c1", "User_1")
    await hub.add_to_group("c1", "room")

    await hub.disconnect("c1")

    assert await hub.group_members("User_1") == set()
    assert await hub.group_members("room") == set()


async def test_send_to_unknown_group_is_a_no_op():
    hub = RealtimeHub()
    await hub.send_to_group("User_404", "ReceiveNotification", {})


def test_completion_message_shapes():
    assert completion_message("1", result="pong") == {
        "type": "completion",
        "invocationId": "1",
        "result": "pong",
    }
    assert completion_message("2", error="boom") == {
        "type": "completion",
        "invocationId": "2",
        "error": "boom",
    }
