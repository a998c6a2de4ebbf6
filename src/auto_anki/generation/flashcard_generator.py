"""Flashcard generation entrypoints.

Both entrypoints take their configuration as frozen snapshots, return a
list of card lists (one per parsable choice) and report every problem
through the log rather than by raising.
"""

from __future__ import annotations

from collections.abc import Sequence

from auto_anki.config_models import GenerationOptions, MultimodalSettings, ProviderSettings
from auto_anki.domain.entities.card import ChoiceResult
from auto_anki.domain.entities.media import MediaItem
from auto_anki.domain.entities.message import PromptMessage
from auto_anki.domain.interfaces.content_store import IContentStore, StoredFile
from auto_anki.exceptions import ConfigurationError, ProviderError
from auto_anki.obsidian.media_resolver import (
    process_media,
    process_standalone_file,
    strip_media_markdown,
)
from auto_anki.prompts.builder import build_file_messages, build_note_messages
from auto_anki.providers.base import BaseLLMProvider
from auto_anki.providers.capabilities import select_model
from auto_anki.providers.error_handler import log_provider_error
from auto_anki.providers.factory import ProviderFactory
from auto_anki.utils.logging import get_logger

from .reconciler import reconcile_choices

logger = get_logger(__name__)


def _validate_counts(question_count: int, sample_count: int) -> None:
    if question_count < 1:
        msg = f"question_count must be at least 1, got {question_count}"
        raise ValueError(msg)
    if sample_count < 1:
        msg = f"sample_count must be at least 1, got {sample_count}"
        raise ValueError(msg)


def _create_provider(provider_settings: ProviderSettings) -> BaseLLMProvider | None:
    try:
        return ProviderFactory.create_provider(provider_settings)
    except ConfigurationError as e:
        logger.error("ai_config_invalid", **e.to_dict())
        return None


def check_ai(provider_settings: ProviderSettings) -> bool:
    """Check that the selected provider has what it needs to be called.

    OpenAI needs an API key and Ollama needs a base URL. No network
    request is made.
    """
    return _create_provider(provider_settings) is not None


async def _generate(
    provider: BaseLLMProvider,
    messages: Sequence[PromptMessage],
    model: str,
    question_count: int,
    sample_count: int,
    options: GenerationOptions,
) -> list[ChoiceResult]:
    try:
        contents = await provider.complete(
            messages,
            model=model,
            n=sample_count,
            options=options,
            max_tokens=options.max_tokens_per_question * question_count,
        )
    except ProviderError as e:
        log_provider_error(e)
        return []

    results = reconcile_choices(contents)
    logger.info(
        "flashcards_generated",
        choices=len(results),
        requested_choices=sample_count,
        cards=sum(len(cards) for cards in results),
    )
    return results


async def convert_notes_to_flashcards(
    provider_settings: ProviderSettings,
    notes: str,
    question_count: int,
    sample_count: int,
    options: GenerationOptions,
    multimodal: MultimodalSettings | None = None,
    store: IContentStore | None = None,
) -> list[ChoiceResult]:
    """Generate flashcards from note text.

    When multimodal processing is enabled and a content store is given,
    embedded media is resolved and attached, and the embeds are replaced
    in the text by their alt text.

    Args:
        provider_settings: Provider connection settings
        notes: Note (or selection) markdown
        question_count: Questions requested per choice
        sample_count: Independent completions to request
        options: Sampling parameters
        multimodal: Media settings; None disables media
        store: Content store the media is read from

    Returns:
        One card list per parsable choice, or an empty list when the
        request could not be made.

    Raises:
        ValueError: If a count is below 1
    """
    _validate_counts(question_count, sample_count)
    provider = _create_provider(provider_settings)
    if provider is None:
        return []

    media: list[MediaItem] = []
    text = notes
    if multimodal is not None and multimodal.enabled and store is not None:
        media = await process_media(store, notes, multimodal)
        if media:
            text = strip_media_markdown(notes)

    model = select_model(provider_settings, multimodal, has_media=bool(media))
    logger.info(
        "generation_started",
        mode="note",
        provider=provider_settings.provider.value,
        model=model,
        question_count=question_count,
        sample_count=sample_count,
        media_count=len(media),
    )
    messages = build_note_messages(text, question_count, media)
    return await _generate(provider, messages, model, question_count, sample_count, options)


async def convert_file_to_flashcards(
    provider_settings: ProviderSettings,
    file: StoredFile,
    question_count: int,
    sample_count: int,
    options: GenerationOptions,
    multimodal: MultimodalSettings,
    store: IContentStore,
) -> list[ChoiceResult]:
    """Generate flashcards from a single image or PDF.

    Returns an empty list when the file is rejected (multimodal disabled,
    unsupported format, too large, unreadable) or the request fails.
    """
    _validate_counts(question_count, sample_count)
    provider = _create_provider(provider_settings)
    if provider is None:
        return []

    item = await process_standalone_file(store, file, multimodal)
    if item is None:
        return []

    model = select_model(provider_settings, multimodal, has_media=True)
    logger.info(
        "generation_started",
        mode="file",
        provider=provider_settings.provider.value,
        model=model,
        path=file.path,
        question_count=question_count,
        sample_count=sample_count,
    )
    messages = build_file_messages(item, question_count)
    return await _generate(provider, messages, model, question_count, sample_count, options)
