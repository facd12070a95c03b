import pytest

from embeddedio.can import CANIdentifier, CANService

DATA = bytes([0, 1, 2, 3, 4, 5, 6, 7])


class MockCANService(CANService):
    def __init__(self):
        super().__init__()
        self.sent = []

    def send(self, identifier, data):
        self.sent.append((identifier, bytes(data)))


@pytest.fixture
def setup():
    service = MockCANService()
    counts = [0, 0, 0, 0]

    def counter(index):
        def callback(*args):
            counts[index] += 1

        return callback

    service.register_receive_callback(CANIdentifier(0x1, 0), counter(0))
    service.register_receive_callback(CANIdentifier(0x2, 0), counter(1))
    service.register_receive_callback(CANIdentifier(0x2, 0), counter(2))
    service.register_mask_callback(
        CANIdentifier(0x1, 0), CANIdentifier(0x7F1, 0x7), counter(3)
    )
    return service, counts


def test_register_and_unregister_receive_callback(setup):
    service, counts = setup
    calls = []
    id1 = service.register_receive_callback(CANIdentifier(0, 1), lambda s, d: calls.append(1))
    service.register_receive_callback(CANIdentifier(0, 2), lambda s, d: calls.append(2))
    id3 = service.register_mask_callback(
        CANIdentifier(0, 1), CANIdentifier(0, 1), lambda s, i, d: calls.append(3)
    )
    service.register_mask_callback(
        CANIdentifier(0, 2), CANIdentifier(0, 2), lambda s, i, d: calls.append(4)
    )
    assert id1 == 4 and id3 == 6

    service.unregister_receive_callback(id1)
    service.unregister_identifier(CANIdentifier(0, 2))
    service.unregister_receive_callback(id3)
    service.unregister_mask(CANIdentifier(0, 2), CANIdentifier(0, 2))

    service.receive(CANIdentifier(0, 1), DATA)
    service.receive(CANIdentifier(0, 2), DATA)
    assert calls == []


def test_when_first_identifier_received_only_first_and_masked_called(setup):
    service, counts = setup
    service.receive(CANIdentifier(0x1, 0), DATA)
    assert counts == [1, 0, 0, 1]


def test_when_third_identifier_received_only_masked_called(setup):
    service, counts = setup
    service.receive(CANIdentifier(0x3, 0), DATA)
    assert counts == [0, 0, 0, 1]


def test_when_second_identifier_received_only_second_identifiers_called(setup):
    service, counts = setup
    service.receive(CANIdentifier(0x2, 0), DATA)
    assert counts == [0, 1, 1, 0]


def test_callbacks_receive_data_and_can_send():
    service = MockCANService()
    received = []

    def reply(send, identifier, data):
        received.append((identifier, data))
        send(CANIdentifier(0x10, 1), data[:2])

    service.register_mask_callback(CANIdentifier(0, 0), CANIdentifier(0, 0), reply)
    service.receive(CANIdentifier(0x5, 2), DATA)
    assert received == [(CANIdentifier(0x5, 2), DATA)]
    assert service.sent == [(CANIdentifier(0x10, 1), b"\x00\x01")]


def test_identifier_ordering_and_mask():
    assert CANIdentifier(0x5, 0) < CANIdentifier(0x1, 1)
    assert CANIdentifier(0x1, 1) < CANIdentifier(0x2, 1)
    assert CANIdentifier(0x2, 1) > CANIdentifier(0x1, 1)
    assert (CANIdentifier(0x7F1, 0x7) & CANIdentifier(0x3, 0x5)) == CANIdentifier(0x1, 0x5)


def test_identifier_out_of_range():
    with pytest.raises(ValueError):
        CANIdentifier(1 << 29, 0)
    with pytest.raises(ValueError):
        CANIdentifier(0, 8)


def test_oversized_frame_rejected(setup):
    service, counts = setup
    with pytest.raises(ValueError):
        service.receive(CANIdentifier(0x1, 0), bytes(9))
    assert counts == [0, 0, 0, 0]