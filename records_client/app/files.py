# app/files.py
#
# Lab results keep their attachments in a single `result_file_path` column.
# Older rows hold one bare relative path; newer rows hold a JSON array of paths.

import json
from typing import Any, List, Optional, Sequence, Union

# Sent on update to remove every attachment from a lab result
CLEAR_ATTACHMENTS = "[]"


def encode_file_paths(paths: Sequence[str]) -> str:
    return json.dumps(list(paths))


def parse_file_paths(value: Any) -> List[str]:
    """Reads a stored `result_file_path` back into a list of relative paths."""
    if value is None:
        return []
    text = str(value).strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            return [str(path) for path in json.loads(text)]
        except ValueError:
            return [text]
    return [text]


def file_path_field(value: Optional[Union[str, Sequence[str]]]) -> Optional[str]:
    """
    Normalizes a caller-supplied attachment value for the wire: None stays None,
    a string is sent verbatim and a list of paths becomes a JSON array.
    """
    if value is None or isinstance(value, str):
        return value
    return encode_file_paths(value)
