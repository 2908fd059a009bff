import threading

import pytest

from coach.errors import InvalidModeError
from coach.models import BusinessContext, Message, Mode
from coach_ui.controller import (FALLBACK_REPLY, BusinessContextError,
                                 ConversationController, Stage)

CTX = BusinessContext(industry="SaaS", target_audience="founders", product="CRM tool")


class RecordingClient:
    def __init__(self, reply="Here is a plan.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, mode, messages, context):
        self.calls.append((mode, list(messages), context))
        if self.error is not None:
            raise self.error
        return self.reply


def chatting(client=None, mode=Mode.OFFERS):
    c = ConversationController(client or RecordingClient())
    c.select_mode(mode)
    c.submit_business_context(CTX)
    return c


def test_initial_state():
    c = ConversationController(RecordingClient())
    assert c.stage is Stage.IDLE
    assert c.mode is None and c.context is None
    assert c.transcript == [] and c.pending is False


def test_select_mode_moves_to_context_collection():
    c = ConversationController(RecordingClient())
    c.select_mode("pain-points")
    assert c.stage is Stage.COLLECTING_CONTEXT
    assert c.mode is Mode.PAIN_POINTS
    assert c.transcript == []


def test_select_unknown_mode():
    c = ConversationController(RecordingClient())
    with pytest.raises(InvalidModeError):
        c.select_mode("cold-email")
    assert c.stage is Stage.IDLE


def test_greeting_is_local():
    client = RecordingClient()
    c = chatting(client)
    assert c.stage is Stage.CHATTING
    assert len(c.transcript) == 1
    greeting = c.transcript[0]
    assert greeting.role == "assistant"
    assert "irresistible offer for your CRM tool." in greeting.content
    assert client.calls == []


@pytest.mark.parametrize(
    "ctx",
    [
        BusinessContext(industry="", target_audience="founders", product="CRM tool"),
        BusinessContext(industry="SaaS", target_audience="", product="CRM tool"),
        BusinessContext(industry="SaaS", target_audience="founders", product=""),
    ],
)
def test_incomplete_context_is_rejected(ctx):
    client = RecordingClient()
    c = ConversationController(client)
    c.select_mode("offers")
    with pytest.raises(BusinessContextError):
        c.submit_business_context(ctx)
    assert c.transcript == []
    assert c.stage is Stage.COLLECTING_CONTEXT
    assert c.context is None
    assert client.calls == []


def test_whitespace_only_context_is_accepted_verbatim():
    client = RecordingClient()
    c = ConversationController(client)
    c.select_mode("offers")
    ctx = BusinessContext(industry=" ", target_audience="founders", product="  CRM  ")
    c.submit_business_context(ctx)
    assert c.stage is Stage.CHATTING
    assert c.context == ctx
    assert "irresistible offer for your   CRM  ." in c.transcript[0].content

    c.send_message("hi")
    assert client.calls[0][2].industry == " "


def test_context_before_mode_is_rejected():
    c = ConversationController(RecordingClient())
    with pytest.raises(BusinessContextError):
        c.submit_business_context(CTX)
    assert c.stage is Stage.IDLE


def test_successful_exchange_appends_two_messages():
    client = RecordingClient(reply="Try a 30-day guarantee.")
    c = chatting(client)
    before = list(c.transcript)

    reply = c.send_message("How do I reduce risk for buyers?")

    assert reply == Message(role="assistant", content="Try a 30-day guarantee.")
    assert c.transcript[: len(before)] == before
    assert c.transcript[len(before):] == [
        Message(role="user", content="How do I reduce risk for buyers?"),
        reply,
    ]
    assert c.pending is False

    mode, sent, context = client.calls[0]
    assert mode is Mode.OFFERS
    assert context == CTX
    # full transcript, greeting first and the new user message last
    assert sent == before + [Message(role="user", content="How do I reduce risk for buyers?")]


def test_failed_exchange_appends_fallback():
    c = chatting(RecordingClient(error=RuntimeError("boom")))
    before = len(c.transcript)
    reply = c.send_message("hello")
    assert len(c.transcript) == before + 2
    assert reply.content == FALLBACK_REPLY
    assert c.transcript[-1].content == FALLBACK_REPLY
    assert c.pending is False

    # session still usable afterwards
    c.client.error = None
    c.send_message("again")
    assert c.transcript[-1].content == "Here is a plan."


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_whitespace_message_is_noop(text):
    client = RecordingClient()
    c = chatting(client)
    before = list(c.transcript)
    assert c.send_message(text) is None
    assert c.transcript == before
    assert client.calls == []


def test_send_outside_chat_is_noop():
    client = RecordingClient()
    c = ConversationController(client)
    assert c.send_message("hi") is None
    c.select_mode("offers")
    assert c.send_message("hi") is None
    assert c.transcript == []
    assert client.calls == []


def test_second_send_while_pending_is_rejected():
    class ReentrantClient(RecordingClient):
        def complete(self, mode, messages, context):
            self.inner = controller.send_message("second")
            self.inner_len = len(controller.transcript)
            return super().complete(mode, messages, context)

    client = ReentrantClient()
    controller = chatting(client)
    controller.send_message("first")

    assert client.inner is None
    # greeting + first user message only, while the first call was in flight
    assert client.inner_len == 2
    assert [m.content for m in controller.transcript[1:]] == ["first", "Here is a plan."]
    assert len(client.calls) == 1


def test_reset_clears_everything():
    c = chatting()
    c.send_message("hi")
    c.reset()
    assert c.stage is Stage.IDLE
    assert c.mode is None and c.context is None
    assert c.transcript == [] and c.pending is False


def test_changing_mode_starts_fresh():
    c = chatting(mode="content-plan")
    c.send_message("hi")
    c.select_mode("offers")
    assert c.transcript == []
    assert c.context is None
    assert c.stage is Stage.COLLECTING_CONTEXT


class BlockingClient:
    """Holds each call open until the test releases it."""

    def __init__(self):
        self.started = []
        self.release = []

    def complete(self, mode, messages, context):
        started, release = threading.Event(), threading.Event()
        self.started.append(started)
        self.release.append(release)
        started.set()
        assert release.wait(5)
        return f"reply to {messages[-1].content}"


def test_stale_call_does_not_clear_new_session_pending():
    client = BlockingClient()
    c = chatting(client)

    first = threading.Thread(target=c.send_message, args=("old question",))
    first.start()
    assert _wait_for_call(client, 0)

    c.select_mode("pain-points")
    c.submit_business_context(CTX)
    second = threading.Thread(target=c.send_message, args=("new question",))
    second.start()
    assert _wait_for_call(client, 1)

    client.release[0].set()
    first.join(5)
    # the new session's request is still in flight
    assert c.pending is True
    assert c.send_message("too soon") is None
    assert [m.content for m in c.transcript[1:]] == ["new question"]

    client.release[1].set()
    second.join(5)
    assert c.pending is False
    assert [m.content for m in c.transcript[1:]] == ["new question", "reply to new question"]


def _wait_for_call(client, index, timeout=5):
    for _ in range(int(timeout * 100)):
        if len(client.started) > index:
            return client.started[index].wait(timeout)
        threading.Event().wait(0.01)
    return False
