from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

import requests

from ..core.constants import DEFAULT_AI_TIMEOUT_SECONDS
from ..core.exceptions import NoPresentTeachersError, TimetableGenerationError, TimetableSchemaError
from .model import Timetable, TimetableInput, validate_timetable
from .prompt import SYSTEM_PROMPT, render_prompt

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class TimetableGenerator(Protocol):
    """Produces a candidate timetable for the given teachers and classes."""

    def generate(self, request: TimetableInput) -> Timetable:
        raise NotImplementedError


def extract_json_object(text: str) -> dict:
    """Pull the first JSON object out of a model reply (code fences tolerated)."""

    if not text or not text.strip():
        raise TimetableGenerationError("The AI model returned an empty reply.")

    candidates = [m.group(1) for m in _FENCE.finditer(text)] + [text]
    for candidate in candidates:
        candidate = candidate.strip()
        start, end = candidate.find("{"), candidate.rfind("}")
        if start == -1 or end <= start:
            continue
        try:
            value = json.loads(candidate[start : end + 1])
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value

    raise TimetableGenerationError("The AI model reply did not contain a JSON timetable.")


class ChatCompletionTimetableGenerator(TimetableGenerator):
    """Generation delegate backed by an OpenAI-compatible chat-completions API.

    One request per call. There is no retry: a failed or malformed reply raises
    TimetableGenerationError and the caller may try again by hand.
    """

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str | None,
        model: str,
        timeout: float = DEFAULT_AI_TIMEOUT_SECONDS,
        temperature: float = 0.2,
    ):
        self._api_url = api_url
        self._api_key = api_key
        self._model = model
        self._timeout = float(timeout)
        self._temperature = float(temperature)

    def _request_body(self, request: TimetableInput) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": render_prompt(request)},
            ],
            "temperature": self._temperature,
        }

    def generate(self, request: TimetableInput) -> Timetable:
        if not request.present_teachers:
            raise NoPresentTeachersError("Cannot generate a timetable without any present teachers.")
        if not self._api_key:
            raise TimetableGenerationError("AI_API_KEY is not configured.")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            resp = requests.post(
                self._api_url,
                headers=headers,
                json=self._request_body(request),
                timeout=self._timeout,
            )
            resp.raise_for_status()
            content = resp.json()["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            logger.warning("timetable generation request failed: %s", e)
            raise TimetableGenerationError("Could not generate the timetable.") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("unexpected chat-completion response shape: %s", e)
            raise TimetableGenerationError("The AI model failed to generate a timetable.") from e

        raw = extract_json_object(content)
        try:
            return validate_timetable(raw, request.all_classes)
        except TimetableSchemaError as e:
            logger.warning("generated timetable rejected: %s", e)
            raise TimetableGenerationError(f"The AI model returned a malformed timetable ({e}).") from e
