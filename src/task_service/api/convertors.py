"""URL path convertors for task routes."""

from starlette.convertors import Convertor

# Largest id a task path can name; larger numbers do not match a task route.
MAX_TASK_ID = 2**64 - 1


def bounded_int_pattern(limit: int) -> str:
    """Regex matching decimal integers from 0 to ``limit``.

    Leading zeros are allowed and do not count towards the bound.
    """
    digits = str(limit)
    alternatives = []
    if len(digits) > 1:
        alternatives.append(f"[0-9]{{1,{len(digits) - 1}}}")
    for i, digit in enumerate(digits):
        if digit == "0":
            continue
        rest = len(digits) - i - 1
        tail = f"[0-9]{{{rest}}}" if rest else ""
        alternatives.append(f"{digits[:i]}[0-{int(digit) - 1}]{tail}")
    alternatives.append(digits)
    return "0*(?:" + "|".join(alternatives) + ")"


class TaskIdConvertor(Convertor[int]):
    """Non-negative integer path segment capped at MAX_TASK_ID."""

    regex = bounded_int_pattern(MAX_TASK_ID)

    def convert(self, value: str) -> int:
        return int(value)

    def to_string(self, value: int) -> str:
        value = int(value)
        if not 0 <= value <= MAX_TASK_ID:
            raise ValueError(f"Task id out of range: {value}")
        return str(value)

