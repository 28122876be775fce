# app/services/student/student_code.py
"""
Student code formatting and parsing.

Codes look like ``HSTL2025A001``: prefix, four-digit year, block letter and
a zero-padded sequence of at least three digits.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from app.models.base.enums import Block

DEFAULT_PREFIX = "HSTL"


@dataclass(frozen=True)
class StudentCode:
    prefix: str
    year: int
    block: Block
    sequence: int

    def __str__(self) -> str:
        return format_student_code(self.year, self.block, self.sequence, prefix=self.prefix)


def format_student_code(
    year: int,
    block: Block | str,
    sequence: int,
    *,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    return f"{prefix}{year:04d}{Block(block).value}{sequence:03d}"


def _pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}(\d{{4}})([A-D])(\d{{3,}})$")


def parse_student_code(code: str, *, prefix: str = DEFAULT_PREFIX) -> Optional[StudentCode]:
    """Split a code into its parts, or return None when it is malformed."""
    match = _pattern(prefix).match(code.strip())
    if match is None:
        return None
    return StudentCode(
        prefix=prefix,
        year=int(match.group(1)),
        block=Block(match.group(2)),
        sequence=int(match.group(3)),
    )


def is_student_code(value: str, *, prefix: str = DEFAULT_PREFIX) -> bool:
    return parse_student_code(value, prefix=prefix) is not None
