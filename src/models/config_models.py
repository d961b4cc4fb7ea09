from __future__ import annotations

from dataclasses import dataclass, replace

"""Config dataclass for the picture-list localizer.

Values come from config/localize.yml (see src/config/loader.py), then environment
variables, then command-line flags. Every field has a usable default so the tool
runs without a config file.
"""

ON_ERROR_CONTINUE = "continue"
ON_ERROR_ABORT = "abort"
DEFAULT_ROW_NUMBER_COLUMN = "__rowNum__"


@dataclass(frozen=True)
class LocalizeConfig:
    """Root configuration object for a localization run."""
    sheet: str | None = None  # None -> first worksheet
    row_number_column: str = DEFAULT_ROW_NUMBER_COLUMN  # 言語列ではない予約列
    source_language: str | None = None  # None -> first language column
    target_languages: tuple[str, ...] | None = None  # None -> every other language
    output_directory: str | None = None  # None -> next to the template
    on_error: str = ON_ERROR_CONTINUE  # continue | abort
    skip_empty_targets: bool = False  # True: 空セルは元テキストを残す

    @property
    def abort_on_error(self) -> bool:
        return self.on_error == ON_ERROR_ABORT

    def with_overrides(self, **overrides: object) -> LocalizeConfig:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "target_languages" in values:
            values["target_languages"] = tuple(values["target_languages"])  # type: ignore[arg-type]
        return replace(self, **values)  # type: ignore[arg-type]
