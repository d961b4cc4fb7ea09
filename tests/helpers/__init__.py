"""Test helper utilities for picture list localizer tests."""

from .documents import (
    JsonListAccess,
    docx_texts,
    make_docx,
    make_picture_list_xlsx,
    make_rows,
    read_json_doc,
    write_json_doc,
)

__all__ = [
    "JsonListAccess",
    "docx_texts",
    "make_docx",
    "make_picture_list_xlsx",
    "make_rows",
    "read_json_doc",
    "write_json_doc",
]
