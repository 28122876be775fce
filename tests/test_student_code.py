from app.models.base.enums import Block
from app.services.student.student_code import (
    StudentCode,
    format_student_code,
    is_student_code,
    parse_student_code,
)


def test_format_pads_sequence():
    assert format_student_code(2025, Block.A, 1) == "HSTL2025A001"
    assert format_student_code(2025, "C", 42) == "HSTL2025C042"


def test_sequence_grows_past_three_digits():
    assert format_student_code(2025, Block.B, 1234) == "HSTL2025B1234"


def test_custom_prefix():
    assert format_student_code(2024, Block.D, 7, prefix="RES") == "RES2024D007"


def test_parse_splits_parts():
    code = parse_student_code("HSTL2025B017")
    assert code == StudentCode(prefix="HSTL", year=2025, block=Block.B, sequence=17)
    assert str(code) == "HSTL2025B017"


def test_parse_rejects_malformed_codes():
    assert parse_student_code("HSTL2025E001") is None
    assert parse_student_code("HSTL25A001") is None
    assert parse_student_code("XX2025A001") is None
    assert not is_student_code("not-a-code")
    assert is_student_code("HSTL2025A001")
