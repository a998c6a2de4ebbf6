"""Builders for OpenAI-compatible chat completion payloads."""

import json
from typing import Any


def chat_completion(*contents: str) -> dict[str, Any]:
    """A successful completion with one choice per content string."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "test-model",
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for i, content in enumerate(contents)
        ],
    }


def cards_json(*pairs: tuple[str, str]) -> str:
    """Serialize question/answer pairs the way the model is asked to."""
    return json.dumps({"questions_answers": [{"q": q, "a": a} for q, a in pairs]})


def error_body(message: str, code: str | None = None) -> dict[str, Any]:
    return {"error": {"message": message, "type": "invalid_request_error", "code": code}}
