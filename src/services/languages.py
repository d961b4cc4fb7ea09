from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.errors import EmptyLanguageSetError, UnknownLanguageError
from ..models.language_selection import LanguageSelection

"""Source/target language selection over the picture list columns.

Defaults follow the picture list layout: the first language column is the
source and every other column is a target.
"""

logger = logging.getLogger(__name__)


def select_languages(
    languages: Sequence[str],
    source: str | None = None,
    targets: Sequence[str] | None = None,
) -> LanguageSelection:
    """Validate and build a LanguageSelection.

    Raises:
        EmptyLanguageSetError: fewer than two languages, or no targets left
        UnknownLanguageError: source or a target is not one of ``languages``
    """
    available = list(languages)
    if len(available) < 2:
        raise EmptyLanguageSetError(
            f"no target languages found: picture list needs at least two language columns, got {available}"
        )

    chosen_source = available[0] if source is None else source
    if chosen_source not in available:
        raise UnknownLanguageError(chosen_source, available)

    requested = [lang for lang in available if lang != chosen_source] if targets is None else list(targets)
    chosen_targets: list[str] = []
    for lang in requested:
        if lang not in available:
            raise UnknownLanguageError(lang, available)
        if lang == chosen_source:
            logger.warning("source language '%s' ignored as target", lang)
            continue
        if lang in chosen_targets:
            continue
        chosen_targets.append(lang)

    if not chosen_targets:
        raise EmptyLanguageSetError("no target languages selected")
    return LanguageSelection(source=chosen_source, targets=tuple(chosen_targets))
