from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..documents.base import DocumentAccess
from ..documents.factory import get_document_access
from ..excel.reader import PictureList, read_picture_list
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import LocalizeConfig
from ..models.errors import DocumentIOError, RunAbortedError
from ..models.language_selection import LanguageSelection
from ..models.row import Row
from ..models.variant_result import LocalizationResult, VariantResult, VariantStatus
from .languages import select_languages
from .matcher import match_template
from .progress import ProgressTracker
from .variant_generator import generate_variant

"""Service orchestration for one localization run.

1. Pick the DocumentAccess for the template (unsupported kinds fail before any work)
2. Validate the language selection (before any document is touched)
3. Build the LayerMap once against the template (opened read-only)
4. Report unmatched rows and ask the caller whether to continue
5. Generate one variant per target language, sequentially
6. Aggregate results and flush the error log
"""

__all__ = [
    "ConfirmCallback",
    "localize",
    "run_localization",
]

logger = logging.getLogger(__name__)

# 未一致行を受け取り、続行するなら True を返す
ConfirmCallback = Callable[[list[Row]], bool]


def _record_unmatched(
    error_log: ErrorLogBuffer, picture_list_name: str, source: str, rows: Sequence[Row]
) -> None:
    for row in rows:
        text = row.text(source)
        logger.warning("no text element matches row %d: %r", row.spreadsheet_row, text)
        error_log.append(
            ErrorRecord.create(
                file=picture_list_name,
                language=source,
                row=row.spreadsheet_row,
                error_type="NO_MATCH",
                message=f"no text element matches {text!r}",
            )
        )


def _skipped(language: str) -> VariantResult:
    return VariantResult(
        language=language,
        output_path=None,
        status=VariantStatus.SKIPPED,
        error="skipped after earlier failure",
    )


def localize(
    template: Path,
    picture_list: PictureList,
    config: LocalizeConfig,
    *,
    access: DocumentAccess | None = None,
    confirm: ConfirmCallback | None = None,
    error_log: ErrorLogBuffer | None = None,
    picture_list_name: str = "",
) -> LocalizationResult:
    """Localize ``template`` into every selected target language.

    Args:
        template: template document path
        picture_list: parsed picture list
        config: run configuration (languages, output directory, failure policy)
        access: DocumentAccess override (default: chosen by template extension)
        confirm: called with the unmatched rows; returning False aborts the run
        error_log: buffer for structured error records (flushed before returning)

    Raises:
        UnsupportedSourceError: template kind not supported
        EmptyLanguageSetError / UnknownLanguageError: invalid language selection
        DocumentIOError: the template itself cannot be opened
        RunAbortedError: ``confirm`` declined after unmatched rows
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    access = access if access is not None else get_document_access(template)

    selection: LanguageSelection = select_languages(
        picture_list.columns, config.source_language, config.target_languages
    )
    if not template.exists():
        raise DocumentIOError("open", template, FileNotFoundError("template not found"))

    rows = picture_list.rows
    if not rows:
        logger.warning("picture list sheet '%s' has no data rows", picture_list.sheet_name)

    layer_map, unmatched, element_count = match_template(template, rows, selection.source, access)
    logger.info(
        "template %s: %d text elements, %d/%d rows matched",
        template.name,
        element_count,
        layer_map.matched_count,
        len(rows),
    )

    try:
        unmatched_rows = [rows[i] for i in layer_map.unmatched_indices()]
        _record_unmatched(error_log, picture_list_name, selection.source, unmatched_rows)
        if unmatched_rows and confirm is not None and not confirm(unmatched_rows):
            raise RunAbortedError(f"aborted with {len(unmatched_rows)} unmatched rows")

        output_directory = Path(config.output_directory) if config.output_directory else None
        variants: list[VariantResult] = []
        aborted = False
        with ProgressTracker(len(selection.targets)) as progress:
            for language in selection.targets:
                if aborted:
                    variants.append(_skipped(language))
                    continue
                progress.start_variant(language)
                result = generate_variant(
                    template,
                    language,
                    rows,
                    layer_map,
                    access,
                    output_directory=output_directory,
                    skip_empty_targets=config.skip_empty_targets,
                )
                variants.append(result)
                progress.finish_variant(success=result.ok)

                if result.ok:
                    logger.info("%s: %d edits -> %s", language, result.edits, result.output_path)
                    continue
                logger.error("%s", result.error)
                error_log.append(
                    ErrorRecord.create(
                        file=result.output_path.name if result.output_path else template.name,
                        language=language,
                        row=-1,
                        error_type="VARIANT_IO_ERROR",
                        message=result.error or "",
                    )
                )
                if config.abort_on_error:
                    aborted = True
    finally:
        try:
            path = error_log.flush()
            if path is not None:
                logger.info("error log written: %s", path)
        except OSError as e:
            logger.warning("failed to write error log: %s", e)

    end_time = datetime.now(UTC)
    return LocalizationResult(
        template=template,
        source_language=selection.source,
        row_count=len(rows),
        layer_map=layer_map,
        unmatched=unmatched,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        variants=variants,
    )


def run_localization(
    template: Path,
    picture_list_path: Path,
    config: LocalizeConfig,
    *,
    confirm: ConfirmCallback | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> LocalizationResult:
    """Read the picture list and localize ``template``.

    The template kind is checked first so an unsupported document fails before
    the picture list is even opened.
    """
    access = get_document_access(template)
    picture_list = read_picture_list(
        picture_list_path, sheet=config.sheet, row_number_column=config.row_number_column
    )
    logger.info(
        "picture list %s sheet '%s': %d rows, languages=%s",
        picture_list_path.name,
        picture_list.sheet_name,
        len(picture_list.rows),
        picture_list.columns,
    )
    return localize(
        template,
        picture_list,
        config,
        access=access,
        confirm=confirm,
        error_log=error_log,
        picture_list_name=picture_list_path.name,
    )
