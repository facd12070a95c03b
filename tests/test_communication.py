import pytest

from embeddedio.communication import CommunicationService


class MockCommunicationService(CommunicationService):
    def __init__(self):
        super().__init__()
        self.sent = []

    def send(self, data):
        self.sent.append(bytes(data))


class CountingHandler:
    def __init__(self):
        self.count = 0
        self.returns = 0

    def __call__(self, send, data):
        self.count += 1
        if self.returns:
            value = self.returns
            self.returns -= 1
            return value
        return 0


@pytest.fixture
def setup():
    service = MockCommunicationService()
    handler1 = CountingHandler()
    handler2 = CountingHandler()
    service.register_receive_callback(handler1)
    service.register_receive_callback(handler2)
    return service, handler1, handler2


def test_register_and_unregister_receive_callback(setup):
    service, handler1, handler2 = setup
    calls = []

    def consume_all(send, data):
        calls.append(data)
        return len(data)

    callback_id = CommunicationService.register_receive_callback(service, consume_all)
    assert callback_id == 2
    CommunicationService.unregister_receive_callback(service, callback_id)
    assert CommunicationService.receive(service, b"\x00\x00") == 0
    assert calls == []


def test_when_first_handler_handles_all_then_second_not_called(setup):
    service, handler1, handler2 = setup
    handler1.returns = 1
    assert CommunicationService.receive(service, bytes(1)) == 1
    assert handler1.count == 1
    assert handler2.count == 0


def test_when_first_handler_does_not_handle_all_then_second_called(setup):
    service, handler1, handler2 = setup
    handler1.returns = 1
    handler2.returns = 2
    assert CommunicationService.receive(service, bytes(4)) == 4
    assert handler1.count == 3
    assert handler2.count == 2


def test_nothing_handled_returns_zero(setup):
    service, handler1, handler2 = setup
    assert CommunicationService.receive(service, b"abc") == 0
    assert handler1.count == 1
    assert handler2.count == 1


def test_empty_data_calls_nothing(setup):
    service, handler1, handler2 = setup
    assert CommunicationService.receive(service, b"") == 0
    assert handler1.count == 0
    assert handler2.count == 0


def test_callback_receives_remaining_data_and_can_send():
    service = MockCommunicationService()
    seen = []

    def echo_one(send, data):
        seen.append(data)
        send(data[:1])
        return 1

    CommunicationService.register_receive_callback(service, echo_one)
    assert CommunicationService.receive(service, b"xyz") == 3
    assert seen == [b"xyz", b"yz", b"z"]
    assert service.sent == [b"x", b"y", b"z"]


def test_overconsuming_callback_raises():
    service = MockCommunicationService()
    CommunicationService.register_receive_callback(
        service, lambda send, data: len(data) + 1
    )
    with pytest.raises(ValueError):
        CommunicationService.receive(service, b"ab")