import json
from concurrent.futures import Future

import pytest

from sentry_sender.encoding import encode_event
from sentry_sender.errors import EncodingError
from sentry_sender.models import Event, SendResult, SendStatus


@pytest.mark.unit
class TestEvent:
    """
    Tests for the Event model.
    """

    def test_defaults(self) -> None:
        event = Event()

        assert len(event.event_id) == 32
        assert event.level == "error"
        assert event.platform == "python"
        assert event.extra == {}
        assert event.fingerprint == ["{{ default }}"]

    def test_extra_fields_allowed(self) -> None:
        event = Event(request={"url": "https://example.com"})

        assert json.loads(encode_event(event))["request"] == {"url": "https://example.com"}

    def test_from_exception(self) -> None:
        def fail():
            raise ValueError("bad value")

        try:
            fail()
        except ValueError as e:
            event = Event.from_exception(e, level="fatal")

        exception = event.exception[0]
        assert exception["type"] == "ValueError"
        assert exception["value"] == "bad value"
        assert exception["module"] == "builtins"
        assert exception["stacktrace"]["frames"][-1]["function"] == "fail"
        assert event.message == "(ValueError) bad value"
        assert event.culprit.endswith(" in fail")
        assert event.level == "fatal"

    def test_from_exception_without_traceback(self) -> None:
        event = Event.from_exception(RuntimeError("never raised"))

        assert event.exception[0]["stacktrace"]["frames"] == []
        assert event.culprit is None


@pytest.mark.unit
class TestEncodeEvent:
    """
    Tests for event serialization.
    """

    def test_model_omits_unset_optionals(self) -> None:
        body = json.loads(encode_event(Event(message="hi")))

        assert body["message"] == "hi"
        assert "exception" not in body
        assert "release" not in body

    def test_mapping(self) -> None:
        assert json.loads(encode_event({"message": "hi"})) == {"message": "hi"}

    @pytest.mark.parametrize(
        "event",
        [
            Event(extra={"handle": object()}),
            {"handle": object()},
            None,
            "a string",
            ["a", "list"],
        ],
    )
    def test_unencodable(self, event) -> None:
        with pytest.raises(EncodingError):
            encode_event(event)


@pytest.mark.unit
class TestSendResult:
    """
    Tests for SendResult.
    """

    def test_constructors(self) -> None:
        assert SendResult.ok("id").status is SendStatus.OK
        assert SendResult.ok("id").event_id == "id"
        assert SendResult.ok("").succeeded
        assert not SendResult.error().succeeded
        assert SendResult.unsampled().status is SendStatus.UNSAMPLED

    def test_wait_on_resolved_result(self) -> None:
        result = SendResult.error()
        assert result.wait() is result

    def test_wait_on_pending_result(self) -> None:
        future = Future()
        pending = SendResult.pending(future)
        future.set_result(SendResult.ok("late"))

        assert pending.status is SendStatus.PENDING
        assert pending.wait(timeout=1) == SendResult.ok("late")
