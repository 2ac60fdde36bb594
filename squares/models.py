from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from squares.errors import FormatError

AxisSize = Literal[5, 10]
AXIS_SIZES = (5, 10)
NEAR_MISS_POINTS = (3, 7)
QUARTER_COUNT = 4


@dataclass
class BoardConfig:
    name: str
    cols: AxisSize = 10  # top team axis
    rows: AxisSize = 10  # left team axis
    reroll: bool = False
    top_team: str = ''
    left_team: str = ''
    buy_in: Optional[int] = None
    payouts: Optional[List[int]] = None

    def to_dict(self):
        return {
            'name': self.name,
            'buy_in': self.buy_in,
            'cols': self.cols,
            'rows': self.rows,
            'reroll': self.reroll,
            'top_team': self.top_team,
            'left_team': self.left_team,
            'payouts': list(self.payouts) if self.payouts is not None else None,
        }


@dataclass
class QuarterDigits:
    """Digits held by one square in one quarter (2 per side on a 5-slot axis)."""
    top_digits: List[int]
    left_digits: List[int]

    def to_dict(self):
        return {'top_digits': list(self.top_digits), 'left_digits': list(self.left_digits)}


@dataclass
class MySquare:
    # one entry for fixed boards, four for reroll boards
    quarters: List[QuarterDigits]

    def to_dict(self):
        return {'quarters': [q.to_dict() for q in self.quarters]}


@dataclass
class QuarterNumbers:
    top_numbers: List[List[int]]   # index = column
    left_numbers: List[List[int]]  # index = row

    def to_dict(self):
        return {
            'top_numbers': [list(g) for g in self.top_numbers],
            'left_numbers': [list(g) for g in self.left_numbers],
        }


@dataclass
class FullBoardData:
    quarters: List[QuarterNumbers]
    grid: List[List[str]]  # grid[row][col] = owner name
    my_square_names: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'quarters': [q.to_dict() for q in self.quarters],
            'grid': [list(row) for row in self.grid],
            'my_square_names': list(self.my_square_names),
        }


@dataclass
class Board:
    config: BoardConfig
    full_board: Optional[FullBoardData] = None
    my_squares: Optional[List[MySquare]] = None

    def __post_init__(self):
        if (self.full_board is None) == (self.my_squares is None):
            raise FormatError('A board holds either a full board or my squares, not both or neither')

    @property
    def is_full_board(self) -> bool:
        return self.full_board is not None

    def to_dict(self):
        data: Dict[str, Any] = {'config': self.config.to_dict()}
        if self.full_board is not None:
            data['full_board'] = self.full_board.to_dict()
        else:
            data['my_squares'] = [sq.to_dict() for sq in self.my_squares]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Board':
        """Rebuild a board from the shape produced by ``to_dict``.

        Only structure is checked here; run the result back through the parser
        to enforce the digit and grid invariants.
        """
        try:
            cfg = data['config']
            payouts = cfg.get('payouts')
            config = BoardConfig(
                name=str(cfg.get('name') or 'Board'),
                buy_in=int(cfg['buy_in']) if cfg.get('buy_in') is not None else None,
                cols=int(cfg['cols']),
                rows=int(cfg['rows']),
                reroll=bool(cfg.get('reroll', False)),
                top_team=str(cfg['top_team']),
                left_team=str(cfg['left_team']),
                payouts=[int(p) for p in payouts] if payouts is not None else None,
            )
            full_board = None
            my_squares = None
            if data.get('full_board') is not None:
                fb = data['full_board']
                full_board = FullBoardData(
                    quarters=[_quarter_numbers_from_dict(q) for q in fb['quarters']],
                    grid=[[str(name) for name in row] for row in fb['grid']],
                    my_square_names=[str(n) for n in fb.get('my_square_names') or []],
                )
            if data.get('my_squares') is not None:
                my_squares = [
                    MySquare(quarters=[_quarter_digits_from_dict(q) for q in sq['quarters']])
                    for sq in data['my_squares']
                ]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise FormatError(f'Malformed board data: {exc!r}') from exc
        if config.cols not in AXIS_SIZES or config.rows not in AXIS_SIZES:
            raise FormatError(f'Board size must be 5 or 10 per axis, got {config.cols}x{config.rows}')
        expected = QUARTER_COUNT if config.reroll else 1
        if full_board is not None:
            quarter_lists = [full_board.quarters]
        else:
            quarter_lists = [sq.quarters for sq in my_squares or []]
        if any(len(quarters) != expected for quarters in quarter_lists):
            raise FormatError(f'Each {"reroll" if config.reroll else "fixed"} board entry needs {expected} quarter(s) of numbers')
        return cls(config=config, full_board=full_board, my_squares=my_squares)


def _digits(values) -> List[int]:
    return [int(v) for v in values]


def _quarter_digits_from_dict(data) -> QuarterDigits:
    return QuarterDigits(top_digits=_digits(data['top_digits']), left_digits=_digits(data['left_digits']))


def _quarter_numbers_from_dict(data) -> QuarterNumbers:
    return QuarterNumbers(
        top_numbers=[_digits(g) for g in data['top_numbers']],
        left_numbers=[_digits(g) for g in data['left_numbers']],
    )


@dataclass
class Score:
    top: int = 0
    left: int = 0

    def to_dict(self):
        return {'top': self.top, 'left': self.left}


@dataclass
class GameState:
    quarter: int = 0  # 0=Q1, 1=Q2, 2=Q3, 3=Final
    score: Score = field(default_factory=Score)


@dataclass
class NearMiss:
    team: str
    points: int  # 3 or 7

    def to_dict(self):
        return {'team': self.team, 'points': self.points}


@dataclass
class SquareStatus:
    is_winner: bool
    near_misses: List[NearMiss] = field(default_factory=list)

    def to_dict(self):
        return {
            'is_winner': self.is_winner,
            'near_misses': [nm.to_dict() for nm in self.near_misses],
        }


@dataclass
class BoardPosition:
    row: int
    col: int

    def to_dict(self):
        return {'row': self.row, 'col': self.col}


@dataclass
class NearMissPosition:
    pos: BoardPosition
    near_miss: NearMiss


@dataclass
class FullBoardStatus:
    winner_pos: BoardPosition
    near_miss_positions: List[NearMissPosition] = field(default_factory=list)


@dataclass
class CellStatus:
    pos: BoardPosition
    owner: str
    is_winner: bool
    is_mine: bool
    near_misses: List[NearMiss] = field(default_factory=list)

    def to_dict(self):
        return {
            'row': self.pos.row,
            'col': self.pos.col,
            'owner': self.owner,
            'is_winner': self.is_winner,
            'is_mine': self.is_mine,
            'near_misses': [nm.to_dict() for nm in self.near_misses],
        }
