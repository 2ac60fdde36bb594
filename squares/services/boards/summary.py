"""Per-board views the front ends render on every score update."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from squares.errors import FormatError
from squares.models import Board, GameState
from .digits import format_digits
from .scoring import (
    check_all_my_squares, get_full_board_cell_statuses, last_digit, quarter_index,
)

QUARTER_LABELS = ('Q1', 'Q2', 'Q3', 'Final')


@dataclass
class DigitSummary:
    top_digits: List[int] = field(default_factory=list)
    left_digits: List[int] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.top_digits and not self.left_digits

    def to_dict(self):
        return {'top_digits': list(self.top_digits), 'left_digits': list(self.left_digits)}


def quarter_label(quarter: int) -> str:
    return QUARTER_LABELS[quarter]


def payout_for_quarter(board: Board, quarter: int) -> Optional[int]:
    payouts = board.config.payouts
    if not payouts or quarter >= len(payouts):
        return None
    return payouts[quarter]


def my_digits(board: Board, quarter: int) -> DigitSummary:
    """Every digit the caller holds on this board for the given quarter."""
    qi = quarter_index(board, quarter)
    top, left = set(), set()
    if board.my_squares:
        for sq in board.my_squares:
            top.update(sq.quarters[qi].top_digits)
            left.update(sq.quarters[qi].left_digits)
    elif board.full_board is not None and board.full_board.my_square_names:
        fb = board.full_board
        numbers = fb.quarters[qi]
        mine = {n.lower() for n in fb.my_square_names}
        for r, row in enumerate(fb.grid):
            for col, owner in enumerate(row):
                if owner.lower() in mine:
                    top.update(numbers.top_numbers[col])
                    left.update(numbers.left_numbers[r])
    return DigitSummary(top_digits=sorted(top), left_digits=sorted(left))


def set_tracked_names(board: Board, names: Iterable[str]) -> List[str]:
    if board.full_board is None:
        raise FormatError(f'"{board.config.name}" is not a full board; tracked names only apply to full boards')
    board.full_board.my_square_names = [n.strip() for n in names if n and n.strip()]
    return board.full_board.my_square_names


def board_report(board: Board, state: GameState) -> Dict[str, Any]:
    c = board.config
    qi = quarter_index(board, state.quarter)
    report: Dict[str, Any] = {
        'name': c.name,
        'size': f'{c.cols}x{c.rows}',
        'buy_in': c.buy_in,
        'top_team': c.top_team,
        'left_team': c.left_team,
        'payout': payout_for_quarter(board, state.quarter),
        'my_digits': my_digits(board, state.quarter).to_dict(),
        'winning_digits': {'top': last_digit(state.score.top), 'left': last_digit(state.score.left)},
    }

    if board.is_full_board:
        numbers = board.full_board.quarters[qi]
        cells = get_full_board_cell_statuses(board, state)
        report['mode'] = 'full_board'
        report['top_numbers'] = [format_digits(g) for g in numbers.top_numbers]
        report['left_numbers'] = [format_digits(g) for g in numbers.left_numbers]
        report['cells'] = [cell.to_dict() for cell in cells.values()]
        report['winner'] = next((cell.to_dict() for cell in cells.values() if cell.is_winner), None)
        return report

    squares = []
    for sq, status in zip(board.my_squares, check_all_my_squares(board, state)):
        digits = sq.quarters[qi]
        entry = status.to_dict()
        entry['top'] = format_digits(digits.top_digits)
        entry['left'] = format_digits(digits.left_digits)
        squares.append(entry)
    report['mode'] = 'my_squares'
    report['squares'] = squares
    report['winners'] = sum(1 for s in squares if s['is_winner'])
    return report
