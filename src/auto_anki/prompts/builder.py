"""Assemble the few-shot message sequence for a generation request.

Message order is fixed: system instructions, sample user note, sample
assistant output, then the real user message.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from itertools import cycle, islice

from auto_anki.domain.entities.media import MediaItem
from auto_anki.domain.entities.message import (
    AssistantMessage,
    ContentSegment,
    MediaSegment,
    PromptMessage,
    SystemMessage,
    TextSegment,
    UserMessage,
)
from auto_anki.utils.logging import get_logger

from .flashcard_prompts import (
    FILE_PREAMBLE,
    FILE_SYSTEM_PROMPT,
    MEDIA_SYSTEM_PROMPT,
    OUTPUT_FORMAT_GUIDELINE,
    QUESTIONS_ANSWERS_KEY,
    SAMPLE_NOTE,
    SAMPLE_OUTPUT,
    TEXT_SYSTEM_PROMPT,
)

logger = get_logger(__name__)


def generate_repeated_sample_output(num: int) -> list[dict[str, str]]:
    """Return exactly ``num`` sample cards.

    The canonical list is truncated when longer than ``num`` and
    cyclically repeated when shorter, so the demonstration always shows
    the requested count.
    """
    if num < 1:
        msg = f"Question count must be at least 1, got {num}"
        raise ValueError(msg)
    return [dict(card) for card in islice(cycle(SAMPLE_OUTPUT), num)]


def _system_prompt(template: str, num: int) -> SystemMessage:
    return SystemMessage(
        content=template.format(num=num, output_format=OUTPUT_FORMAT_GUIDELINE)
    )


def _example_pair(num: int) -> list[PromptMessage]:
    sample = {QUESTIONS_ANSWERS_KEY: generate_repeated_sample_output(num)}
    return [
        UserMessage(content=SAMPLE_NOTE),
        AssistantMessage(content=json.dumps(sample, ensure_ascii=False)),
    ]


def build_note_messages(
    notes: str, num: int, media: Sequence[MediaItem] = ()
) -> list[PromptMessage]:
    """Build messages for note (or selection) text.

    Args:
        notes: Note text, with media embeds already stripped
        num: Number of questions requested
        media: Resolved attachments, in document order

    Returns:
        Four messages; the last user message is a segment tuple
        (text first, then one media segment per item) when media is
        present, plain text otherwise.
    """
    template = MEDIA_SYSTEM_PROMPT if media else TEXT_SYSTEM_PROMPT
    text = f"\n{notes.strip()}\n"

    user: UserMessage
    if media:
        segments: list[ContentSegment] = [TextSegment(text=text)]
        segments.extend(MediaSegment.from_item(item) for item in media)
        user = UserMessage(content=tuple(segments))
    else:
        user = UserMessage(content=text)

    logger.debug(
        "prompt_built",
        mode="note",
        num_questions=num,
        media_count=len(media),
        text_length=len(text),
    )
    return [_system_prompt(template, num), *_example_pair(num), user]


def build_file_messages(item: MediaItem, num: int) -> list[PromptMessage]:
    """Build messages for standalone-file generation.

    The user message holds a text preamble naming the file followed by
    the file itself.
    """
    name = item.alt_text or item.source_path
    user = UserMessage(
        content=(
            TextSegment(text=FILE_PREAMBLE.format(name=name)),
            MediaSegment.from_item(item),
        )
    )
    logger.debug(
        "prompt_built",
        mode="file",
        num_questions=num,
        path=item.source_path,
        mime_type=item.mime_type.value,
    )
    return [_system_prompt(FILE_SYSTEM_PROMPT, num), *_example_pair(num), user]
