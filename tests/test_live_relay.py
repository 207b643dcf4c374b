"""Tests for the live stream relay."""

import json

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketState

from hawkeye.config import Config
from hawkeye.routes.relay import frame_text
from hawkeye.services import live_relay as live_relay_module
from hawkeye.services.live_relay import LiveRelay


class FakeSocket:
    """Minimal stand-in for a server-side WebSocket."""

    def __init__(self, fail_sends: bool = False):
        self.client_state = WebSocketState.CONNECTING
        self.sent: list[dict] = []
        self.fail_sends = fail_sends

    async def accept(self):
        self.client_state = WebSocketState.CONNECTED

    async def send_json(self, data):
        if self.fail_sends:
            raise RuntimeError("socket closed")
        self.sent.append(data)

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]


async def connected(relay: LiveRelay, **kwargs) -> FakeSocket:
    socket = FakeSocket(**kwargs)
    await relay.connect(socket)
    return socket


class TestConnect:
    @pytest.mark.asyncio
    async def test_newcomer_gets_count_then_welcome(self):
        relay = LiveRelay()
        socket = await connected(relay)

        assert socket.types() == ["viewers", "info"]
        assert socket.sent[0]["count"] == 1
        assert socket.sent[1]["message"] == Config.RELAY_WELCOME_MESSAGE
        assert "timestamp" in socket.sent[1]

    @pytest.mark.asyncio
    async def test_existing_viewers_get_count_but_not_welcome(self):
        relay = LiveRelay()
        first = await connected(relay)
        await connected(relay)

        assert first.types() == ["viewers", "info", "viewers"]
        assert first.sent[-1]["count"] == 2
        assert relay.viewer_count == 2


class TestMessages:
    @pytest.mark.asyncio
    async def test_message_echoed_to_everyone_including_sender(self):
        relay = LiveRelay()
        sender = await connected(relay)
        other = await connected(relay)

        await relay.handle_message(sender, json.dumps({"sender": "Ana", "content": "hello"}))

        for socket in (sender, other):
            message = socket.sent[-1]
            assert message["type"] == "message"
            assert message["sender"] == "Ana"
            assert message["content"] == "hello"

    @pytest.mark.asyncio
    async def test_defaults_for_missing_fields(self):
        relay = LiveRelay()
        socket = await connected(relay)

        await relay.handle_message(socket, json.dumps({"content": "hi", "type": "reaction"}))

        assert socket.sent[-1]["sender"] == "Anonymous"
        assert socket.sent[-1]["type"] == "reaction"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", "42"])
    async def test_invalid_payload_dropped(self, raw):
        relay = LiveRelay()
        socket = await connected(relay)
        before = len(socket.sent)

        await relay.handle_message(socket, raw)

        assert len(socket.sent) == before
        assert relay.viewer_count == 1


class TestDisconnectAndBroadcast:
    @pytest.mark.asyncio
    async def test_disconnect_announces_new_count(self):
        relay = LiveRelay()
        staying = await connected(relay)
        leaving = await connected(relay)

        await relay.disconnect(leaving)

        assert relay.viewer_count == 1
        assert staying.sent[-1]["type"] == "viewers"
        assert staying.sent[-1]["count"] == 1

    @pytest.mark.asyncio
    async def test_disconnect_unknown_socket_is_harmless(self):
        relay = LiveRelay()
        await relay.disconnect(FakeSocket())
        assert relay.viewer_count == 0

    @pytest.mark.asyncio
    async def test_failed_send_drops_connection(self):
        relay = LiveRelay()
        healthy = await connected(relay)
        broken = await connected(relay)
        broken.fail_sends = True

        delivered = await relay.broadcast({"type": "message", "content": "x"})

        assert delivered == 1
        assert relay.viewer_count == 1
        assert healthy.sent[-1]["content"] == "x"

    @pytest.mark.asyncio
    async def test_closed_connection_skipped(self):
        relay = LiveRelay()
        open_socket = await connected(relay)
        closed = await connected(relay)
        closed.client_state = WebSocketState.DISCONNECTED
        sent_before = len(closed.sent)

        delivered = await relay.broadcast({"type": "message", "content": "y"})

        assert delivered == 1
        assert len(closed.sent) == sent_before
        assert open_socket.sent[-1]["content"] == "y"


class TestWebSocketEndpoint:
    def test_chat_round_trip(self, monkeypatch):
        monkeypatch.setattr(live_relay_module, "_relay", None)
        from main import app

        with TestClient(app) as client:
            with client.websocket_connect(Config.RELAY_PATH) as first:
                assert first.receive_json()["count"] == 1
                assert first.receive_json()["type"] == "info"

                with client.websocket_connect(Config.RELAY_PATH) as second:
                    assert second.receive_json()["count"] == 2
                    assert second.receive_json()["type"] == "info"
                    assert first.receive_json()["count"] == 2

                    second.send_text(json.dumps({"sender": "Ana", "content": "hello"}))

                    echoed = second.receive_json()
                    assert echoed["type"] == "message"
                    assert echoed["sender"] == "Ana"
                    assert first.receive_json()["content"] == "hello"

                left = first.receive_json()
                assert left["type"] == "viewers"
                assert left["count"] == 1

    def test_binary_frames_relayed(self, monkeypatch):
        monkeypatch.setattr(live_relay_module, "_relay", None)
        from main import app

        with TestClient(app) as client:
            with client.websocket_connect(Config.RELAY_PATH) as socket:
                socket.receive_json()
                socket.receive_json()

                socket.send_bytes(json.dumps({"sender": "Bo", "content": "hi"}).encode("utf-8"))
                echoed = socket.receive_json()
                assert echoed["content"] == "hi"
                assert echoed["sender"] == "Bo"

                # Undecodable bytes become replacement characters and then fail JSON parsing
                socket.send_bytes(b"\xff\xfe")
                socket.send_text(json.dumps({"content": "still here"}))
                assert socket.receive_json()["content"] == "still here"


class TestFrameText:
    def test_text_frame(self):
        assert frame_text({"type": "websocket.receive", "text": "{}"}) == "{}"

    def test_bytes_frame_decoded(self):
        assert frame_text({"type": "websocket.receive", "bytes": "héllo".encode("utf-8")}) == "héllo"

    def test_invalid_utf8_replaced(self):
        assert frame_text({"type": "websocket.receive", "bytes": b"ok\xff"}) == "ok\ufffd"

    def test_empty_frame(self):
        assert frame_text({"type": "websocket.receive"}) is None
