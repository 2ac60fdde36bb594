"""Squares pool domain services: text format and scoring.

Pure functions over the records in ``squares.models``. Routes and CLI
commands import from here; nothing in this package touches Flask.
"""
from .digits import format_digits, parse_digit_group
from .parser import parse_boards, parse_header, parse_single_board, parse_teams_line
from .scoring import (
    check_all_my_squares, check_full_board, check_my_square, find_position,
    get_full_board_cell_statuses, last_digit, quarter_index,
)
from .serializer import serialize_board, serialize_boards
from .summary import board_report, my_digits, payout_for_quarter, quarter_label, set_tracked_names

__all__ = [
    'board_report',
    'check_all_my_squares',
    'check_full_board',
    'check_my_square',
    'find_position',
    'format_digits',
    'get_full_board_cell_statuses',
    'last_digit',
    'my_digits',
    'parse_boards',
    'parse_digit_group',
    'parse_header',
    'parse_single_board',
    'parse_teams_line',
    'payout_for_quarter',
    'quarter_index',
    'quarter_label',
    'serialize_board',
    'serialize_boards',
    'set_tracked_names',
]
