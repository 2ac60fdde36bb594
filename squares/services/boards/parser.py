"""Parse the squares board text format into ``Board`` records.

A block of text holds one or more boards separated by a ``---`` line. Each
board is read top to bottom by a line cursor:

    header        Office Pool $10 10x10 reroll
    teams         Chiefs (top) vs Eagles (left)
    [payouts]     Payouts 100 250 100 250
    body          my-squares lines, or Top/Left (or Q1..Q4) lines + grid + [Mine]

Every failure raises ``FormatError`` naming the offending line; nothing is
returned for a board that does not parse completely.
"""
import re
from typing import List, Optional, Tuple

from squares.errors import FormatError
from squares.models import (
    QUARTER_COUNT, Board, BoardConfig, FullBoardData, MySquare, QuarterDigits, QuarterNumbers,
)
from .digits import check_group_width, parse_digit_group

BOARD_SEPARATOR_RE = re.compile(r'\n\s*---\s*\n')

_BUY_IN_RE = re.compile(r'\$(\d+)')
_DIMENSIONS_RE = re.compile(r'\b(5|10)\s*x\s*(5|10)\b', re.IGNORECASE)
_SQUARE_COUNT_RE = re.compile(r'\b(25|50|100)\s*squares?\b', re.IGNORECASE)
_REROLL_RE = re.compile(r'\bre[-\s]?roll\b', re.IGNORECASE)
_FULL_RE = re.compile(r'\bfull\b', re.IGNORECASE)

_TEAMS_RE = re.compile(r'(.+?)\s+vs\.?\s+(.+)', re.IGNORECASE)
_TOP_TAG_RE = re.compile(r'\(top\)', re.IGNORECASE)
_LEFT_TAG_RE = re.compile(r'\(left\)', re.IGNORECASE)
_SIDE_TAG_RE = re.compile(r'\s*\((top|left)\)\s*', re.IGNORECASE)

_PAYOUTS_RE = re.compile(r'^payouts?\b\s*(.*)$', re.IGNORECASE)
_FULL_BOARD_START_RE = re.compile(r'^(top|q[1-4])\s', re.IGNORECASE)
_QUARTER_LABEL_RE = re.compile(r'^q[1-4]\s+', re.IGNORECASE)
_QUARTER_BODY_RE = re.compile(r'^top\s+(.*?)\s*,\s*left\s+(.*)$', re.IGNORECASE)
_TOP_LINE_RE = re.compile(r'^top\s+(.*)$', re.IGNORECASE)
_LEFT_LINE_RE = re.compile(r'^left\s+(.*)$', re.IGNORECASE)
_MINE_RE = re.compile(r'^mine\b\s*(.*)$', re.IGNORECASE)

# 50 squares is conventionally 5 columns by 10 rows
_SQUARE_COUNT_SIZES = {25: (5, 5), 50: (5, 10), 100: (10, 10)}


class _LineCursor:
    def __init__(self, lines: List[str]):
        self._lines = lines
        self._pos = 0

    def peek(self) -> Optional[str]:
        return self._lines[self._pos] if self._pos < len(self._lines) else None

    def take(self, missing: str) -> str:
        line = self.peek()
        if line is None:
            raise FormatError(missing)
        self._pos += 1
        return line

    def rest(self) -> List[str]:
        lines = self._lines[self._pos:]
        self._pos = len(self._lines)
        return lines

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._lines)


def parse_boards(text: str) -> List[Board]:
    """Parse every board in ``text``; the first bad block fails the whole batch."""
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    blocks = BOARD_SEPARATOR_RE.split(text)
    # comment-only blocks are notes, not boards
    return [parse_single_board(block) for block in blocks if _content_lines(block)]


def _content_lines(block: str) -> List[str]:
    lines = (line.strip() for line in block.split('\n'))
    return [line for line in lines if line and not line.startswith('#')]


def parse_single_board(block: str) -> Board:
    lines = _content_lines(block)
    if len(lines) < 2:
        raise FormatError('Board needs at least a header and teams line')
    cursor = _LineCursor(lines)

    config = parse_header(cursor.take('Missing header line'))
    config.top_team, config.left_team = parse_teams_line(cursor.take('Missing teams line'))

    payouts_line = cursor.peek()
    if payouts_line is not None and _PAYOUTS_RE.match(payouts_line):
        config.payouts = parse_payouts_line(cursor.take('Missing payouts line'))

    first = cursor.peek()
    if first is None:
        raise FormatError('Board must have square data or full board data')
    if _FULL_BOARD_START_RE.match(first):
        return Board(config=config, full_board=_parse_full_board(cursor, config))
    return Board(config=config, my_squares=[_parse_my_square_line(line, config) for line in cursor.rest()])


# -- header ------------------------------------------------------------------

def _cut(text: str, match: 're.Match') -> str:
    return text[:match.start()] + ' ' + text[match.end():]


def parse_header(line: str) -> BoardConfig:
    """Pull buy-in, size, reroll and ``full`` tokens out; what is left is the name."""
    rest = line

    buy_in = None
    m = _BUY_IN_RE.search(rest)
    if m:
        buy_in = int(m.group(1))
        rest = _cut(rest, m)

    cols, rows = 10, 10
    m = _DIMENSIONS_RE.search(rest)
    if m:
        cols, rows = int(m.group(1)), int(m.group(2))
        rest = _cut(rest, m)
    else:
        m = _SQUARE_COUNT_RE.search(rest)
        if m:
            cols, rows = _SQUARE_COUNT_SIZES[int(m.group(1))]
            rest = _cut(rest, m)

    reroll = bool(_REROLL_RE.search(rest))
    rest = _REROLL_RE.sub(' ', rest)
    # "full" is informational; the body decides the board mode
    rest = _FULL_RE.sub(' ', rest)

    name = ' '.join(rest.split()) or 'Board'
    return BoardConfig(name=name, buy_in=buy_in, cols=cols, rows=rows, reroll=reroll)


# -- teams / payouts ---------------------------------------------------------

def parse_teams_line(line: str) -> Tuple[str, str]:
    """Return ``(top_team, left_team)``.

    First team is top unless the annotations say otherwise: ``A (left) vs B``
    or ``A vs B (top)`` put B on top.
    """
    m = _TEAMS_RE.match(line)
    if not m:
        raise FormatError(f'Expected "Team1 vs Team2", got: "{line}"')
    first, second = m.group(1).strip(), m.group(2).strip()

    swapped = bool(_LEFT_TAG_RE.search(first) or _TOP_TAG_RE.search(second))
    first = _SIDE_TAG_RE.sub(' ', first).strip()
    second = _SIDE_TAG_RE.sub(' ', second).strip()
    if not first or not second:
        raise FormatError(f'Both team names are required, got: "{line}"')
    if swapped:
        return second, first
    return first, second


def parse_payouts_line(line: str) -> List[int]:
    m = _PAYOUTS_RE.match(line)
    tokens = m.group(1).split() if m else []
    amounts = []
    for token in tokens:
        amount = token[1:] if token.startswith('$') else token
        if not amount.isdigit():
            raise FormatError(f'Payout "{token}" is not a whole amount in: "{line}"')
        amounts.append(int(amount))
    if len(amounts) != QUARTER_COUNT:
        raise FormatError(f'Payouts need {QUARTER_COUNT} amounts (one per quarter), got {len(amounts)} in: "{line}"')
    return amounts


# -- digit tokens ------------------------------------------------------------

def _strip_team_name(text: str, team: str) -> str:
    """Drop a leading team name: the registered name if present, else anything before the first digit."""
    text = text.strip()
    if team:
        m = re.match(rf'{re.escape(team)}(?:\s+|$)', text, re.IGNORECASE)
        if m:
            return text[m.end():].strip()
    m = re.search(r'\d', text)
    if m and m.start() > 0:
        return text[m.start():].strip()
    return text


def _digit_groups(text: str, team: str, axis_size: int, line: str) -> List[List[int]]:
    groups = [parse_digit_group(tok) for tok in _strip_team_name(text, team).split()]
    for group in groups:
        check_group_width(group, axis_size, line)
    return groups


# -- my squares --------------------------------------------------------------

def _team_split_index(line: str, left_team: str) -> int:
    """Index of the comma between the top-team clause and the left-team clause."""
    if left_team:
        m = re.search(rf',\s*{re.escape(left_team)}(?!\w)', line, re.IGNORECASE)
        if m:
            return m.start()
    idx = line.find(',')
    if idx == -1:
        raise FormatError(f'No comma separator in square line: "{line}"')
    return idx


def _parse_my_square_line(line: str, config: BoardConfig) -> MySquare:
    split = _team_split_index(line, config.left_team)
    top_groups = _digit_groups(line[:split], config.top_team, config.cols, line)
    left_groups = _digit_groups(line[split + 1:], config.left_team, config.rows, line)

    if config.reroll:
        if len(top_groups) != QUARTER_COUNT or len(left_groups) != QUARTER_COUNT:
            raise FormatError(
                f'Reroll board needs 4 digit-groups per team. '
                f'Got top={len(top_groups)}, left={len(left_groups)} in: "{line}"'
            )
        return MySquare(quarters=[
            QuarterDigits(top_digits=top, left_digits=left)
            for top, left in zip(top_groups, left_groups)
        ])

    if len(top_groups) != 1 or len(left_groups) != 1:
        raise FormatError(
            f'Non-reroll board needs 1 digit-group per team. '
            f'Got top={len(top_groups)}, left={len(left_groups)} in: "{line}"'
        )
    return MySquare(quarters=[QuarterDigits(top_digits=top_groups[0], left_digits=left_groups[0])])


# -- full board --------------------------------------------------------------

def _axis_numbers(text: str, team: str, axis_size: int, side: str, line: str) -> List[List[int]]:
    groups = _digit_groups(text, team, axis_size, line)
    if len(groups) != axis_size:
        raise FormatError(f'Expected {axis_size} {side} numbers, got {len(groups)} in: "{line}"')
    return groups


def _parse_quarter_line(line: str, config: BoardConfig) -> QuarterNumbers:
    # "Q1 Top 03 19 28 46 57, Left 65 12 39 47 80"; the Q label is not checked against position
    m = _QUARTER_BODY_RE.match(_QUARTER_LABEL_RE.sub('', line, count=1).strip())
    if not m:
        raise FormatError(f'Expected "Q_ Top ..., Left ..." format in: "{line}"')
    return QuarterNumbers(
        top_numbers=_axis_numbers(m.group(1), config.top_team, config.cols, 'top', line),
        left_numbers=_axis_numbers(m.group(2), config.left_team, config.rows, 'left', line),
    )


def _parse_labelled_numbers(line: str, label_re: 're.Pattern', label: str, team: str, axis_size: int) -> List[List[int]]:
    m = label_re.match(line)
    if not m:
        raise FormatError(f'Expected a "{label} ..." numbers line, got: "{line}"')
    return _axis_numbers(m.group(1), team, axis_size, label.lower(), line)


def parse_grid_row(line: str, expected_cols: int) -> List[str]:
    """Comma-separated owner names, falling back to whitespace-separated."""
    if ',' in line:
        names = [n.strip() for n in line.split(',') if n.strip()]
        if len(names) == expected_cols:
            return names
    names = line.split()
    if len(names) == expected_cols:
        return names
    raise FormatError(f'Grid row needs {expected_cols} names, couldn\'t parse: "{line}"')


def _parse_full_board(cursor: _LineCursor, config: BoardConfig) -> FullBoardData:
    quarters = []
    if config.reroll:
        for q in range(QUARTER_COUNT):
            quarters.append(_parse_quarter_line(cursor.take(f'Missing Q{q + 1} line'), config))
    else:
        top = _parse_labelled_numbers(
            cursor.take('Need Top and Left lines'), _TOP_LINE_RE, 'Top', config.top_team, config.cols)
        left = _parse_labelled_numbers(
            cursor.take('Need Top and Left lines'), _LEFT_LINE_RE, 'Left', config.left_team, config.rows)
        quarters.append(QuarterNumbers(top_numbers=top, left_numbers=left))

    grid = [
        parse_grid_row(cursor.take(f'Missing grid row {r + 1}'), config.cols)
        for r in range(config.rows)
    ]

    names: List[str] = []
    line = cursor.peek()
    if line is not None and _MINE_RE.match(line):
        listed = _MINE_RE.match(cursor.take('Missing Mine line')).group(1)
        names = [n.strip() for n in listed.split(',') if n.strip()]

    if not cursor.exhausted:
        raise FormatError(f'Unexpected line after the grid: "{cursor.peek()}"')
    return FullBoardData(quarters=quarters, grid=grid, my_square_names=names)
