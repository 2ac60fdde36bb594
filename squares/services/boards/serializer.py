from typing import Iterable, List

from squares.models import Board, BoardConfig, FullBoardData, MySquare
from .digits import format_digits

BOARD_SEPARATOR = '\n---\n'


def serialize_boards(boards: Iterable[Board]) -> str:
    return BOARD_SEPARATOR.join(serialize_board(board) for board in boards)


def serialize_board(board: Board) -> str:
    """Write one board in the text format ``parse_single_board`` reads back."""
    c = board.config
    lines = [_header(board)]

    if board.is_full_board:
        lines.append(f'{c.top_team} (top) vs {c.left_team} (left)')
    else:
        lines.append(f'{c.top_team} vs {c.left_team}')

    if c.payouts:
        lines.append('Payouts ' + ' '.join(str(p) for p in c.payouts))

    if board.is_full_board:
        lines.extend(_full_board_lines(board.full_board, c))
    else:
        lines.extend(_my_square_line(sq, c) for sq in board.my_squares)
    return '\n'.join(lines)


def _header(board: Board) -> str:
    c = board.config
    parts = [c.name]
    if c.buy_in is not None:
        parts.append(f'${c.buy_in}')
    parts.append(f'{c.cols}x{c.rows}')
    if c.reroll:
        parts.append('reroll')
    if board.is_full_board:
        parts.append('full')
    return ' '.join(parts)


def _my_square_line(square: MySquare, config: BoardConfig) -> str:
    # fixed boards only ever use the first quarter's digits
    quarters = square.quarters if config.reroll else square.quarters[:1]
    top = ' '.join(format_digits(q.top_digits) for q in quarters)
    left = ' '.join(format_digits(q.left_digits) for q in quarters)
    return f'{config.top_team} {top}, {config.left_team} {left}'


def _numbers(groups) -> str:
    return ' '.join(format_digits(g) for g in groups)


def _full_board_lines(full_board: FullBoardData, config: BoardConfig) -> List[str]:
    lines = []
    if config.reroll:
        for q, numbers in enumerate(full_board.quarters):
            lines.append(f'Q{q + 1} Top {_numbers(numbers.top_numbers)}, Left {_numbers(numbers.left_numbers)}')
    else:
        numbers = full_board.quarters[0]
        lines.append(f'Top {config.top_team} {_numbers(numbers.top_numbers)}')
        lines.append(f'Left {config.left_team} {_numbers(numbers.left_numbers)}')

    lines.extend(', '.join(row) for row in full_board.grid)

    if full_board.my_square_names:
        lines.append('Mine ' + ', '.join(full_board.my_square_names))
    return lines
