"""Byte-exact comparison of solution output with expected output."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, os.PathLike]


def files_are_equal(actual: PathLike, expected: PathLike) -> bool:
    """Return True when both files hold exactly the same bytes.

    No whitespace or line-ending normalization is applied. Raises ``OSError``
    if either file cannot be opened or read.
    """

    return Path(actual).read_bytes() == Path(expected).read_bytes()
