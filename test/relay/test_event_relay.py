import unittest
from unittest.mock import Mock, patch

from fastapi.testclient import TestClient

from groupme_relay.model.callback import Callback
from groupme_relay.relay.callback_server import create_callback_app
from groupme_relay.relay.event_relay import EventRelay, RelayEvent

RELAY_URL = "https://smee.io/xJU7MWXmHW10X1s"
PORT = 5000


class EventRelayCallbackTest(unittest.TestCase):

    relay: EventRelay
    client: TestClient
    events: list

    def setUp(self):
        self.relay = EventRelay(RELAY_URL, PORT)
        self.client = TestClient(create_callback_app(self.relay.handle_callback))
        self.events = []
        for event in RelayEvent:
            self.relay.on(event, lambda *args, name = event.value: self.events.append((name, args)))

    def __raw_callback(self, sender_type: str) -> dict:
        return {
            "attachments": [{"type": "image", "url": "https://i.groupme.com/1"}],
            "group_id": "1234567890",
            "id": "1234567890",
            "name": "John",
            "sender_id": "12345",
            "sender_type": sender_type,
            "system": sender_type == "system",
            "text": "Hello world",
        }

    def test_user_callback_emits_raw_then_typed_events(self):
        body = self.__raw_callback("user")

        response = self.client.post("/", json = body)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"")
        self.assertEqual([name for name, _ in self.events], ["raw_callback", "callback", "user_msg"])
        self.assertEqual(self.events[0][1], (body,))
        callback = self.events[1][1][0]
        self.assertIsInstance(callback, Callback)
        self.assertEqual(callback.text, "Hello world")
        self.assertEqual(callback.attachments[0].type, "image")
        self.assertIs(self.events[2][1][0], callback)

    def test_each_sender_type_has_its_own_event(self):
        for sender_type, event in [("user", "user_msg"), ("system", "system_msg"), ("bot", "bot_msg")]:
            with self.subTest(sender_type = sender_type):
                self.events.clear()

                self.client.post("/", json = self.__raw_callback(sender_type))

                self.assertEqual([name for name, _ in self.events], ["raw_callback", "callback", event])

    def test_unknown_sender_type_emits_no_specific_event(self):
        self.client.post("/", json = self.__raw_callback("service"))

        self.assertEqual([name for name, _ in self.events], ["raw_callback", "callback"])

    @patch("groupme_relay.relay.event_relay.log")
    def test_unparseable_callback_only_emits_raw(self, mock_log):
        body = {"sender_type": "user", "text": "no attachments"}

        response = self.client.post("/", json = body)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.events, [("raw_callback", (body,))])
        mock_log.w.assert_called_once()

    @patch("groupme_relay.relay.event_relay.log")
    def test_failing_handler_does_not_stop_later_events(self, mock_log):
        self.relay.on(RelayEvent.raw_callback, Mock(side_effect = RuntimeError("boom")))

        response = self.client.post("/", json = self.__raw_callback("bot"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([name for name, _ in self.events], ["raw_callback", "callback", "bot_msg"])
        mock_log.e.assert_called_once()

    def test_emitted_callbacks_are_independent_of_later_deliveries(self):
        self.client.post("/", json = self.__raw_callback("user"))
        first = self.events[1][1][0]
        second_body = self.__raw_callback("user")
        second_body["text"] = "Second"

        self.client.post("/", json = second_body)

        self.assertEqual(first.text, "Hello world")
        self.assertEqual(self.events[4][1][0].text, "Second")


@patch("groupme_relay.relay.event_relay.threading")
@patch("groupme_relay.relay.event_relay.CallbackServer")
@patch("groupme_relay.relay.event_relay.SmeeTunnel")
@patch(
    "groupme_relay.relay.event_relay.config",
    Mock(
        tunnel_target_host = "localhost",
        listener_host = "0.0.0.0",
        verbose = False,
        web_timeout_s = 1,
        log_callback_update = False,
    ),
)
class EventRelayLifecycleTest(unittest.TestCase):

    relay: EventRelay

    def setUp(self):
        self.relay = EventRelay(RELAY_URL, PORT)

    def test_properties(self, mock_tunnel, mock_server, mock_threading):
        self.assertEqual(self.relay.relay_url, RELAY_URL)
        self.assertEqual(self.relay.port, PORT)
        self.assertFalse(self.relay.is_listening)

    def test_start_opens_tunnel_and_listener(self, mock_tunnel, mock_server, mock_threading):
        mock_threading.Thread.return_value.is_alive.return_value = True

        self.relay.start()

        mock_tunnel.assert_called_once_with(source = RELAY_URL, target = "http://localhost:5000", verbose = False)
        mock_tunnel.return_value.start.assert_called_once()
        server_config = mock_server.call_args.args[0]
        self.assertEqual(server_config.host, "0.0.0.0")
        self.assertEqual(server_config.port, PORT)
        self.assertTrue(mock_threading.Thread.call_args.kwargs["daemon"])
        mock_threading.Thread.return_value.start.assert_called_once()
        self.assertTrue(self.relay.is_listening)

    @patch("groupme_relay.relay.event_relay.log")
    def test_start_twice_is_ignored(self, mock_log, mock_tunnel, mock_server, mock_threading):
        mock_threading.Thread.return_value.is_alive.return_value = True

        self.relay.start()
        self.relay.start()

        mock_tunnel.assert_called_once()
        mock_server.assert_called_once()
        mock_log.w.assert_called_once()

    def test_ready_is_emitted_once_the_listener_is_bound(self, mock_tunnel, mock_server, mock_threading):
        handler = Mock()
        self.relay.on(RelayEvent.ready, handler)

        self.relay.start()
        handler.assert_not_called()
        mock_server.call_args.kwargs["on_ready"]()

        handler.assert_called_once_with()

    def test_stop_releases_tunnel_and_listener(self, mock_tunnel, mock_server, mock_threading):
        server_thread = mock_threading.Thread.return_value
        server_thread.is_alive.return_value = True
        self.relay.start()

        self.relay.stop()

        self.assertTrue(mock_server.return_value.should_exit)
        mock_tunnel.return_value.close.assert_called_once()
        server_thread.join.assert_called_once()
        self.assertFalse(self.relay.is_listening)

    def test_stop_without_start(self, mock_tunnel, mock_server, mock_threading):
        self.relay.stop()

        mock_tunnel.return_value.close.assert_not_called()

    @patch("groupme_relay.relay.event_relay.log")
    def test_serve_logs_a_port_that_cannot_be_bound(self, mock_log, mock_tunnel, mock_server, mock_threading):
        server = Mock()
        server.run.side_effect = SystemExit(1)

        # noinspection PyUnresolvedReferences
        self.relay._EventRelay__serve(server)

        mock_log.e.assert_called_once()
