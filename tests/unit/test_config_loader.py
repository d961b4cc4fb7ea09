from __future__ import annotations

from pathlib import Path

import pytest

from src.config.loader import ConfigError, apply_env_overrides, load_config
from src.models.config_models import LocalizeConfig


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.sheet == "Strings"
    assert cfg.source_language == "en"
    assert cfg.target_languages == ("fr", "de")
    assert cfg.on_error == "continue"
    assert cfg.skip_empty_targets is True
    assert cfg.row_number_column == "__rowNum__"
    assert cfg.output_directory is None


def test_load_config_defaults_when_default_file_missing(temp_workdir: Path):
    cfg = load_config()
    assert cfg == LocalizeConfig()
    assert cfg.skip_empty_targets is False


def test_load_config_reads_default_path(temp_workdir: Path, write_config: Path):
    assert load_config().source_language == "en"


def test_load_config_explicit_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "nope.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "localize.yml"
    p.write_text("sheet: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_load_config_empty_file_gives_defaults(temp_workdir: Path):
    p = temp_workdir / "config" / "localize.yml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == LocalizeConfig()


def test_apply_env_overrides():
    cfg = apply_env_overrides(
        LocalizeConfig(), {"PICTURELIST_ON_ERROR": " Abort ", "PICTURELIST_OUTPUT_DIR": "out"}
    )
    assert cfg.on_error == "abort"
    assert cfg.output_directory == "out"
    assert apply_env_overrides(LocalizeConfig(on_error="abort"), {}).on_error == "abort"


def test_apply_env_overrides_rejects_bad_policy():
    with pytest.raises(ConfigError, match="PICTURELIST_ON_ERROR"):
        apply_env_overrides(LocalizeConfig(), {"PICTURELIST_ON_ERROR": "retry"})
