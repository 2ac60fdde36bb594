from typing import Dict, List, Sequence

from squares.models import (
    NEAR_MISS_POINTS, Board, BoardPosition, CellStatus, FullBoardStatus, GameState, NearMiss,
    NearMissPosition, QuarterDigits, QuarterNumbers, SquareStatus,
)


def last_digit(score: int) -> int:
    return abs(score) % 10


def quarter_index(board: Board, quarter: int) -> int:
    """Fixed boards keep one number assignment for the whole game."""
    return quarter if board.config.reroll else 0


def check_my_square(digits: QuarterDigits, top_score: int, left_score: int,
                    top_team: str, left_team: str) -> SquareStatus:
    """Winner status for one square, or the scoring plays that would make it win.

    A near miss needs the other team's digit to already match; a winning
    square never reports near misses.
    """
    td = last_digit(top_score)
    ld = last_digit(left_score)
    top_hit = td in digits.top_digits
    left_hit = ld in digits.left_digits

    if top_hit and left_hit:
        return SquareStatus(is_winner=True)

    near_misses = []
    for points in NEAR_MISS_POINTS:
        if left_hit and last_digit(top_score + points) in digits.top_digits:
            near_misses.append(NearMiss(team=top_team, points=points))
    for points in NEAR_MISS_POINTS:
        if top_hit and last_digit(left_score + points) in digits.left_digits:
            near_misses.append(NearMiss(team=left_team, points=points))
    return SquareStatus(is_winner=False, near_misses=near_misses)


def check_all_my_squares(board: Board, state: GameState) -> List[SquareStatus]:
    """Statuses parallel to ``board.my_squares`` (empty for a full board)."""
    if not board.my_squares:
        return []
    qi = quarter_index(board, state.quarter)
    c = board.config
    return [
        check_my_square(sq.quarters[qi], state.score.top, state.score.left, c.top_team, c.left_team)
        for sq in board.my_squares
    ]


def find_position(number_groups: Sequence[Sequence[int]], digit: int) -> int:
    for i, group in enumerate(number_groups):
        if digit in group:
            return i
    return -1


def check_full_board(numbers: QuarterNumbers, top_score: int, left_score: int,
                     top_team: str, left_team: str) -> FullBoardStatus:
    win_col = find_position(numbers.top_numbers, last_digit(top_score))
    win_row = find_position(numbers.left_numbers, last_digit(left_score))
    status = FullBoardStatus(winner_pos=BoardPosition(row=win_row, col=win_col))

    # On a 5-slot axis a score change can land in the winner's own slot; that is not a near miss.
    for points in NEAR_MISS_POINTS:
        near_col = find_position(numbers.top_numbers, last_digit(top_score + points))
        if near_col != -1 and near_col != win_col:
            status.near_miss_positions.append(NearMissPosition(
                pos=BoardPosition(row=win_row, col=near_col),
                near_miss=NearMiss(team=top_team, points=points),
            ))
    for points in NEAR_MISS_POINTS:
        near_row = find_position(numbers.left_numbers, last_digit(left_score + points))
        if near_row != -1 and near_row != win_row:
            status.near_miss_positions.append(NearMissPosition(
                pos=BoardPosition(row=near_row, col=win_col),
                near_miss=NearMiss(team=left_team, points=points),
            ))
    return status


def _owner(grid: List[List[str]], pos: BoardPosition) -> str:
    if 0 <= pos.row < len(grid) and 0 <= pos.col < len(grid[pos.row]):
        return grid[pos.row][pos.col]
    return ''


def cell_key(pos: BoardPosition) -> str:
    return f'{pos.row},{pos.col}'


def get_full_board_cell_statuses(board: Board, state: GameState) -> Dict[str, CellStatus]:
    """Winner and near-miss cells of a full board keyed by ``"row,col"``.

    The winner cell is always present; near misses that land on the same cell
    are merged into one entry.
    """
    fb = board.full_board
    if fb is None:
        return {}

    c = board.config
    numbers = fb.quarters[quarter_index(board, state.quarter)]
    result = check_full_board(numbers, state.score.top, state.score.left, c.top_team, c.left_team)
    mine = {name.lower() for name in fb.my_square_names}

    cells: Dict[str, CellStatus] = {}
    winner = _owner(fb.grid, result.winner_pos)
    cells[cell_key(result.winner_pos)] = CellStatus(
        pos=result.winner_pos, owner=winner, is_winner=True, is_mine=winner.lower() in mine,
    )
    for entry in result.near_miss_positions:
        key = cell_key(entry.pos)
        if key in cells:
            cells[key].near_misses.append(entry.near_miss)
            continue
        owner = _owner(fb.grid, entry.pos)
        cells[key] = CellStatus(
            pos=entry.pos, owner=owner, is_winner=False, is_mine=owner.lower() in mine,
            near_misses=[entry.near_miss],
        )
    return cells
