"""Parse completion choices into question/answer lists.

Each choice is parsed on its own. A choice that cannot be recovered is
dropped with a diagnostic; it never affects its siblings.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pydantic import ValidationError

from auto_anki.domain.entities.card import CardPair, ChoiceResult, QuestionsAnswersPayload
from auto_anki.exceptions import ResponseParseError
from auto_anki.prompts.flashcard_prompts import QUESTIONS_ANSWERS_KEY
from auto_anki.utils.logging import get_logger

logger = get_logger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```[\w+-]*[^\S\n]*\n?([\s\S]*?)\n?\s*```")


@dataclass(frozen=True)
class ParseSuccess:
    cards: list[CardPair]

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> list[CardPair]:
        return self.cards


@dataclass(frozen=True)
class ParseFailure:
    reason: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> list[CardPair]:
        raise ResponseParseError(self.reason)


ParseResult = ParseSuccess | ParseFailure
Parser = Callable[[str], ParseResult]


def first_success(*parsers: Parser) -> Parser:
    """Combine parsers so the first successful one wins.

    When every parser fails, the failure reasons are joined in order.
    """

    def _parse(content: str) -> ParseResult:
        reasons: list[str] = []
        for parser in parsers:
            result = parser(content)
            if isinstance(result, ParseSuccess):
                return result
            reasons.append(result.reason)
        return ParseFailure("; ".join(reasons))

    return _parse


def parse_json_object(content: str) -> ParseResult:
    """Parse text as a JSON object holding the question/answer list."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return ParseFailure(f"invalid JSON: {e.msg}")
    if not isinstance(data, dict) or QUESTIONS_ANSWERS_KEY not in data:
        return ParseFailure(f"{QUESTIONS_ANSWERS_KEY} not found in response")
    try:
        payload = QuestionsAnswersPayload.model_validate(data)
    except ValidationError as e:
        return ParseFailure(f"malformed {QUESTIONS_ANSWERS_KEY}: {e.error_count()} errors")
    return ParseSuccess(list(payload.questions_answers))


def parse_fenced_block(content: str) -> ParseResult:
    """Parse the first fenced code block, with or without a language tag."""
    match = FENCED_BLOCK_PATTERN.search(content)
    if match is None:
        return ParseFailure("no fenced code block")
    return parse_json_object(match.group(1))


parse_choice: Parser = first_success(parse_json_object, parse_fenced_block)


def reconcile_choices(contents: Iterable[str]) -> list[ChoiceResult]:
    """Parse every choice and keep the ones that yielded cards.

    Args:
        contents: Raw text of each completion choice, in response order

    Returns:
        One card list per parsable choice; may be shorter than the input.
    """
    choices = list(contents)
    logger.info("choices_generated", count=len(choices))

    results: list[ChoiceResult] = []
    for index, content in enumerate(choices):
        logger.debug("choice_content", choice=index, content=content)
        result = parse_choice(content)
        if isinstance(result, ParseFailure):
            logger.warning(
                "choice_parse_failed",
                choice=index,
                reason=result.reason,
                raw_content=content,
            )
            continue

        cards = result.unwrap()
        logger.info(
            "choice_parsed",
            choice=index,
            card_count=len(cards),
            blank_cards=sum(1 for card in cards if card.is_blank),
        )
        results.append(cards)
    return results
