# Shared pytest fixtures
from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from src.logging.init import APP_LOGGER_NAME, MODULE_LOGGER_NAME, reset_logging
from src.models.row import Row
from tests.helpers import JsonListAccess, make_docx, make_picture_list_xlsx, make_rows


@pytest.fixture()
def temp_workdir(monkeypatch) -> Iterator[Path]:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def json_access() -> JsonListAccess:
    return JsonListAccess()


@pytest.fixture()
def hello_bye_rows() -> list[Row]:
    return make_rows(
        {"en": "Hello", "fr": "Bonjour", "de": "Hallo"},
        {"en": "Bye", "fr": "Au revoir", "de": "Tschüss"},
    )


@pytest.fixture()
def sample_config_yaml() -> str:
    return """sheet: Strings
source_language: en
target_languages: [fr, de]
on_error: continue
skip_empty_targets: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "localize.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def docx_project(temp_workdir: Path) -> dict[str, Path]:
    """Template .docx plus matching picture list in temp_workdir/data."""
    data_dir = temp_workdir / "data"
    template = make_docx(data_dir / "poster.docx", ["Hello", "Bye ", "Unrelated footer"])
    picture_list = make_picture_list_xlsx(
        data_dir / "strings.xlsx",
        [
            {"en": "Hello", "fr": "Bonjour", "de": "Hallo"},
            {"en": "Bye", "fr": "Au revoir", "de": "Tschüss"},
        ],
        sheet_name="Strings",
    )
    return {"template": template, "picture_list": picture_list}


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Iterator[None]:
    yield
    for name in (APP_LOGGER_NAME, MODULE_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
    reset_logging()


@pytest.fixture(autouse=True)
def _restore_environ() -> Iterator[None]:
    # load_dotenv writes into os.environ; keep that from leaking between tests
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)
