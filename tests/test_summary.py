import pytest

from squares.errors import FormatError
from squares.models import GameState, Score
from squares.services.boards import (
    board_report, my_digits, parse_single_board, payout_for_quarter, quarter_label, set_tracked_names,
)

MY_SQUARES = """Office $10 5x5 reroll
Chiefs vs Eagles
Payouts 100 250 100 500
Chiefs 03 56 40 78, Eagles 12 48 43 47
Chiefs 19 56 21 36, Eagles 65 12 39 47"""

FULL = """Family $10 5x5 full
Seahawks (top) vs Patriots (left)
Top Seahawks 03 19 28 46 57
Left Patriots 65 12 39 47 80
Alice, Bob, Carol, Dan, Eve
Frank, Grace, Henry, Ivy, Jack
Kate, Leo, Mia, Noah, Olive
Pete, Quinn, Rose, Sam, Tina
Uma, Vic, Wendy, Xander, Yara
Mine alice, Sam"""


def test_quarter_labels():
    assert [quarter_label(q) for q in range(4)] == ['Q1', 'Q2', 'Q3', 'Final']


def test_payout_for_quarter():
    board = parse_single_board(MY_SQUARES)
    assert payout_for_quarter(board, 0) == 100
    assert payout_for_quarter(board, 3) == 500
    assert payout_for_quarter(parse_single_board(FULL), 1) is None


def test_my_digits_from_tracked_squares():
    board = parse_single_board(MY_SQUARES)
    q1 = my_digits(board, 0)
    assert q1.top_digits == [0, 1, 3, 9]
    assert q1.left_digits == [1, 2, 5, 6]
    q2 = my_digits(board, 1)
    assert q2.top_digits == [5, 6]


def test_my_digits_from_tracked_names():
    board = parse_single_board(FULL)
    digits = my_digits(board, 0)
    # Alice is (row 0, col 0), Sam is (row 3, col 3)
    assert digits.top_digits == [0, 3, 4, 6]
    assert digits.left_digits == [4, 5, 6, 7]


def test_my_digits_empty_without_tracked_names():
    board = parse_single_board(FULL)
    set_tracked_names(board, [])
    assert my_digits(board, 0).empty


def test_set_tracked_names():
    board = parse_single_board(FULL)
    assert set_tracked_names(board, [' Leo ', '', 'Uma']) == ['Leo', 'Uma']
    assert board.full_board.my_square_names == ['Leo', 'Uma']
    with pytest.raises(FormatError):
        set_tracked_names(parse_single_board(MY_SQUARES), ['Leo'])


def test_report_for_my_squares():
    board = parse_single_board(MY_SQUARES)
    report = board_report(board, GameState(quarter=0, score=Score(top=7, left=1)))
    assert report['mode'] == 'my_squares'
    assert report['size'] == '5x5'
    assert report['payout'] == 100
    assert report['winners'] == 0
    assert report['winning_digits'] == {'top': 7, 'left': 1}
    first = report['squares'][0]
    assert first['top'] == '03' and first['left'] == '12'
    assert first['is_winner'] is False
    # left 1 already matches; a Chiefs field goal (7 -> 10) lands on the 0
    assert first['near_misses'] == [{'team': 'Chiefs', 'points': 3}]


def test_report_for_full_board():
    board = parse_single_board(FULL)
    report = board_report(board, GameState(quarter=3, score=Score(top=14, left=7)))
    assert report['mode'] == 'full_board'
    assert report['top_numbers'] == ['03', '19', '28', '46', '57']
    assert report['winner']['owner'] == 'Sam'
    assert report['winner']['is_mine'] is True
    assert report['payout'] is None
    owners = {c['owner'] for c in report['cells']}
    assert owners == {'Sam', 'Tina', 'Quinn', 'Xander'}
