from __future__ import annotations

import json

import pytest
import requests

from src.staff_portal.staff_portal.core.constants import CLASS_LABELS, TIME_SLOTS
from src.staff_portal.staff_portal.core.exceptions import NoPresentTeachersError, TimetableGenerationError
from src.staff_portal.staff_portal.timetable.generator import ChatCompletionTimetableGenerator, extract_json_object
from src.staff_portal.staff_portal.timetable.model import PresentTeacher, TimetableInput
from src.staff_portal.staff_portal.timetable.prompt import render_prompt


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def _chat_reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def request_in() -> TimetableInput:
    return TimetableInput(
        present_teachers=[
            PresentTeacher(id="TEACH-000001", full_name="Asha Rao", subject="Mathematics", classes=["Class 9", "Class 10"])
        ],
        all_classes=list(CLASS_LABELS),
    )


@pytest.fixture
def chat_generator() -> ChatCompletionTimetableGenerator:
    return ChatCompletionTimetableGenerator(
        api_url="http://ai.invalid/v1/chat/completions", api_key="k", model="m", timeout=3
    )


def test_generate_posts_prompt_once_and_validates_reply(monkeypatch, chat_generator, request_in, timetable_payload):
    calls = []
    reply = "Here you go:\n```json\n" + json.dumps(timetable_payload()) + "\n```"

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse(_chat_reply(reply))

    monkeypatch.setattr(requests, "post", fake_post)

    timetable = chat_generator.generate(request_in)

    assert timetable.classes == list(CLASS_LABELS)
    assert len(calls) == 1
    url, kwargs = calls[0]
    assert url == "http://ai.invalid/v1/chat/completions"
    assert kwargs["timeout"] == 3.0
    assert kwargs["headers"]["Authorization"] == "Bearer k"
    assert kwargs["json"]["model"] == "m"
    assert '"fullName": "Asha Rao"' in kwargs["json"]["messages"][-1]["content"]


def test_http_error_is_not_retried(monkeypatch, chat_generator, request_in):
    calls = []

    def fake_post(url, **kwargs):
        calls.append(url)
        return FakeResponse({}, status_code=503)

    monkeypatch.setattr(requests, "post", fake_post)

    with pytest.raises(TimetableGenerationError) as e:
        chat_generator.generate(request_in)
    assert str(e.value) == "Could not generate the timetable."
    assert len(calls) == 1


def test_connection_error(monkeypatch, chat_generator, request_in):
    def fake_post(url, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(requests, "post", fake_post)

    with pytest.raises(TimetableGenerationError):
        chat_generator.generate(request_in)


@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        {"unexpected": True},
        ValueError("not json"),
        _chat_reply("Sorry, I cannot help with that."),
        _chat_reply(json.dumps({"Class 1": {TIME_SLOTS[0]: {"teacher": "A", "subject": "B"}}})),
    ],
)
def test_malformed_replies(monkeypatch, chat_generator, request_in, payload):
    monkeypatch.setattr(requests, "post", lambda url, **kwargs: FakeResponse(payload))

    with pytest.raises(TimetableGenerationError):
        chat_generator.generate(request_in)


def test_missing_api_key(request_in):
    gen = ChatCompletionTimetableGenerator(api_url="http://ai.invalid", api_key="", model="m")
    with pytest.raises(TimetableGenerationError):
        gen.generate(request_in)


def test_no_teachers_is_a_precondition(chat_generator):
    with pytest.raises(NoPresentTeachersError):
        chat_generator.generate(TimetableInput(present_teachers=[], all_classes=list(CLASS_LABELS)))


def test_prompt_embeds_rules_and_input(request_in):
    prompt = render_prompt(request_in)

    for slot in TIME_SLOTS:
        assert slot in prompt
    assert "LUNCH" in prompt
    assert json.dumps(request_in.to_payload()["allClasses"], indent=2) in prompt


def test_extract_json_object_variants():
    assert extract_json_object('{"a": 1}') == {"a": 1}
    assert extract_json_object('```\n{"a": 2}\n```') == {"a": 2}
    assert extract_json_object('noise {"a": 3} trailing') == {"a": 3}
    with pytest.raises(TimetableGenerationError):
        extract_json_object("")
    with pytest.raises(TimetableGenerationError):
        extract_json_object("[1, 2]")
