from typing import List, Sequence

from squares.errors import FormatError


def parse_digit_group(token: str) -> List[int]:
    """Parse one digit token: "7" -> [7], "03" -> [0, 3] (order kept)."""
    if len(token) in (1, 2) and token.isascii() and token.isdigit():
        return [int(ch) for ch in token]
    raise FormatError(f'Invalid digit group "{token}": expected 1 or 2 digits')


def format_digits(digits: Sequence[int]) -> str:
    if len(digits) not in (1, 2):
        raise FormatError(f'Cannot format {len(digits)} digits as a digit group')
    return ''.join(str(d) for d in digits)


def check_group_width(group: Sequence[int], axis_size: int, where: str) -> None:
    """A 5-slot axis carries two distinct digits per slot, a 10-slot axis one."""
    if axis_size == 5:
        if len(group) != 2 or group[0] == group[1]:
            raise FormatError(
                f'5-slot axis needs two different digits per group, got "{format_digits(group)}" in: "{where}"'
            )
    elif len(group) != 1:
        raise FormatError(
            f'10-slot axis needs one digit per group, got "{format_digits(group)}" in: "{where}"'
        )
