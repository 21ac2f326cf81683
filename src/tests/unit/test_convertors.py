"""Unit tests for task path convertors."""

import re

import pytest

from task_service.api.convertors import MAX_TASK_ID, TaskIdConvertor, bounded_int_pattern


class TestBoundedIntPattern:
    """Tests for bounded_int_pattern."""

    def test_small_limit(self) -> None:
        """Test every value up to the limit matches and nothing above it."""
        pattern = re.compile(bounded_int_pattern(305))

        assert all(pattern.fullmatch(str(n)) for n in range(306))
        assert pattern.fullmatch("306") is None
        assert pattern.fullmatch("999") is None
        assert pattern.fullmatch("1000") is None

    def test_single_digit_limit(self) -> None:
        """Test a one-digit limit."""
        pattern = re.compile(bounded_int_pattern(7))

        assert pattern.fullmatch("7")
        assert pattern.fullmatch("0")
        assert pattern.fullmatch("8") is None

    def test_leading_zeros(self) -> None:
        """Test zero padding does not count towards the bound."""
        pattern = re.compile(bounded_int_pattern(305))

        assert pattern.fullmatch("000305")
        assert pattern.fullmatch("0306") is None

    def test_rejects_non_digits(self) -> None:
        """Test signs and letters never match."""
        pattern = re.compile(bounded_int_pattern(MAX_TASK_ID))

        assert pattern.fullmatch("-1") is None
        assert pattern.fullmatch("1a") is None
        assert pattern.fullmatch("") is None


class TestTaskIdConvertor:
    """Tests for TaskIdConvertor."""

    def test_max_id_boundary(self) -> None:
        """Test the 64-bit boundary."""
        pattern = re.compile(TaskIdConvertor.regex)

        assert pattern.fullmatch(str(MAX_TASK_ID))
        assert pattern.fullmatch(str(MAX_TASK_ID + 1)) is None
        assert pattern.fullmatch("9" * 20) is None

    def test_convert(self) -> None:
        """Test path segments convert to ints."""
        assert TaskIdConvertor().convert("0042") == 42

    def test_to_string_range(self) -> None:
        """Test out-of-range ids cannot be formatted into a path."""
        convertor = TaskIdConvertor()

        assert convertor.to_string(5) == "5"
        with pytest.raises(ValueError):
            convertor.to_string(MAX_TASK_ID + 1)
