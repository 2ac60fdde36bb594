from flask import Blueprint, jsonify, request, current_app
from squares.errors import FormatError
from squares.models import QUARTER_COUNT, Board, GameState, Score
from squares.services.boards import (
    board_report, parse_boards, quarter_label, serialize_boards,
)


boards = Blueprint('boards', __name__)


@boards.errorhandler(FormatError)
def handle_format_error(exc):
    current_app.logger.warning(f"[format-error] {exc}")
    return jsonify({'error': str(exc)}), 400


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _whole_number(value):
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _board_text(data):
    text = data.get('text')
    if not isinstance(text, str) or not text.strip():
        return None
    return text


@boards.route('/parse', methods=['POST'])
def parse():
    data = _json_body()
    text = _board_text(data)
    if text is None:
        return jsonify({'error': 'Board text is required'}), 400
    parsed = parse_boards(text)
    current_app.logger.info(f"[parse] boards={len(parsed)}")
    return jsonify({'boards': [b.to_dict() for b in parsed]})


@boards.route('/serialize', methods=['POST'])
def serialize():
    """
    Turns hand-assembled boards into board text. The text is parsed again
    before it is returned so it is guaranteed to load next time.
    """
    data = _json_body()
    raw = data.get('boards')
    if not isinstance(raw, list) or not raw:
        return jsonify({'error': 'A non-empty list of boards is required'}), 400
    built = [Board.from_dict(item) for item in raw]
    text = serialize_boards(built)
    if parse_boards(text) != built:
        raise FormatError('Boards do not survive a round trip through the text format; '
                          'check names for size, buy-in, reroll or full tokens')
    current_app.logger.info(f"[serialize] boards={len(built)}")
    return jsonify({'text': text})


@boards.route('/check', methods=['POST'])
def check():
    """
    Scores every board in the given text against one game state.
    """
    data = _json_body()
    text = _board_text(data)
    if text is None:
        return jsonify({'error': 'Board text is required'}), 400

    quarter = data.get('quarter', 0)
    score = data.get('score') or {}
    if not isinstance(score, dict):
        return jsonify({'error': 'Score must be an object with top and left'}), 400
    top, left = score.get('top', 0), score.get('left', 0)
    if not all(_whole_number(v) for v in (quarter, top, left)):
        return jsonify({'error': 'Quarter and scores must be whole numbers'}), 400
    if not 0 <= quarter < QUARTER_COUNT:
        return jsonify({'error': f'Quarter must be between 0 and {QUARTER_COUNT - 1}'}), 400
    if top < 0 or left < 0:
        return jsonify({'error': 'Scores cannot be negative'}), 400

    state = GameState(quarter=quarter, score=Score(top=top, left=left))
    reports = [board_report(b, state) for b in parse_boards(text)]
    mine_won = sum(
        r['winners'] if r['mode'] == 'my_squares' else int(bool(r['winner'] and r['winner']['is_mine']))
        for r in reports
    )
    current_app.logger.info(
        f"[check] quarter={quarter_label(quarter)} score={top}-{left} boards={len(reports)} mine_won={mine_won}"
    )
    return jsonify({
        'quarter': quarter,
        'quarter_label': quarter_label(quarter),
        'score': state.score.to_dict(),
        'boards': reports,
    })
