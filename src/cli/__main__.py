from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import ConfigError, apply_env_overrides, load_config
from src.documents.factory import get_document_access
from src.excel.reader import PictureListError, list_sheet_names, read_picture_list
from src.logging.init import log_summary, set_debug, setup_logging
from src.models.config_models import ON_ERROR_ABORT, ON_ERROR_CONTINUE, LocalizeConfig
from src.models.errors import (
    DocumentIOError,
    EmptyLanguageSetError,
    RunAbortedError,
    UnknownLanguageError,
    UnsupportedSourceError,
)
from src.models.row import Row
from src.services.orchestrator import ConfirmCallback, run_localization
from src.services.summary import render_summary_line

"""CLI entrypoint.

    python -m src.cli TEMPLATE PICTURE_LIST [options]

Settings resolve in this order (later wins): built-in defaults, YAML config,
environment (.env loaded first), command-line flags.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2
EXIT_ABORTED = 3

# 未一致行の確認プロンプトで表示する最大件数
MAX_LISTED_UNMATCHED = 20


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate localized copies of a template from a picture list")
    p.add_argument("template", type=Path, help="Template document (.docx, .pptx, .svg)")
    p.add_argument("picture_list", type=Path, help="Picture list (.xlsx, .xlsm, .csv)")
    p.add_argument("--config", type=Path, default=None, help="YAML config (default: config/localize.yml if present)")
    p.add_argument("--sheet", default=None, help="Worksheet name (default: first sheet)")
    p.add_argument("--source", default=None, help="Source language column (default: first language column)")
    p.add_argument(
        "--target",
        action="append",
        default=None,
        metavar="LANG",
        help="Target language column, repeatable (default: all other languages)",
    )
    p.add_argument("--output-dir", default=None, help="Directory for generated variants (default: template's directory)")
    p.add_argument(
        "--on-error",
        choices=[ON_ERROR_CONTINUE, ON_ERROR_ABORT],
        default=None,
        help="Continue with remaining languages or abort the batch when a variant fails",
    )
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation about unmatched rows")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print sheets, languages, first rows and template text elements then exit",
    )
    return p.parse_args(argv)


def _make_confirm(source: str | None, input_func: Callable[[str], str]) -> ConfirmCallback:
    def confirm(rows: list[Row]) -> bool:
        print(f"{len(rows)} picture list row(s) have no matching text element:")
        for row in rows[:MAX_LISTED_UNMATCHED]:
            language = source or row.languages[0]
            print(f"  row {row.spreadsheet_row}: {row.text(language)!r}")
        if len(rows) > MAX_LISTED_UNMATCHED:
            print(f"  ... and {len(rows) - MAX_LISTED_UNMATCHED} more")
        try:
            answer = input_func("Continue anyway? [y/N] ")
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer.strip().lower() in ("y", "yes")

    return confirm


def _inspect_data(template: Path, picture_list: Path, cfg: LocalizeConfig) -> int:
    try:
        sheets = list_sheet_names(picture_list)
        print(f"PICTURE LIST: {picture_list.name} sheets={sheets}")
        data = read_picture_list(picture_list, sheet=cfg.sheet, row_number_column=cfg.row_number_column)
    except (UnsupportedSourceError, PictureListError) as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"  SHEET: {data.sheet_name} languages={data.columns} rows={len(data.rows)}")
    for row in data.rows[:3]:
        print(f"    row {row.spreadsheet_row}: {row.values}")

    try:
        access = get_document_access(template)
        document = access.open(template)
    except (UnsupportedSourceError, DocumentIOError) as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    try:
        elements = access.list_text_elements(document)
        print(f"TEMPLATE: {template.name} kind={access.kind} text_elements={len(elements)}")
        for i, element in enumerate(elements):
            print(f"  [{i}] {access.get_text(element)!r}")
    finally:
        access.close(document)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None, input_func: Callable[[str], str] = input) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで [] を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = apply_env_overrides(load_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    cfg = cfg.with_overrides(
        sheet=args.sheet,
        source_language=args.source,
        target_languages=args.target,
        output_directory=args.output_dir,
        on_error=args.on_error,
    )

    if args.inspect_data:
        return _inspect_data(args.template, args.picture_list, cfg)

    logger.info(f"Localizing {args.template} using {args.picture_list}")
    confirm = None if args.yes else _make_confirm(cfg.source_language, input_func)
    try:
        result = run_localization(args.template, args.picture_list, cfg, confirm=confirm)
    except RunAbortedError as e:
        logger.error(f"aborted: {e}")
        return EXIT_ABORTED
    except (UnsupportedSourceError, PictureListError) as e:
        logger.error(f"source: {e}")
        return EXIT_FATAL
    except (EmptyLanguageSetError, UnknownLanguageError) as e:
        logger.error(f"languages: {e}")
        return EXIT_FATAL
    except DocumentIOError as e:
        logger.error(f"template: {e}")
        return EXIT_FATAL

    # log_summary が "SUMMARY " を付与するので先頭ラベルを除く
    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_variants > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
