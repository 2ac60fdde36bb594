import click
from flask import Flask
from flask_cors import CORS
from config import Config


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Import and register blueprints here
    from squares.main import main
    flask_app.register_blueprint(main)

    from squares.api.boards import boards
    # Mount board routes under /api to match frontend API client
    flask_app.register_blueprint(boards, url_prefix='/api/boards')

    @click.command('boards-format')
    def boards_format_command():
        """Reads board text on stdin and prints it in canonical form."""
        from squares.errors import FormatError
        from squares.services.boards import parse_boards, serialize_boards

        text = click.get_text_stream('stdin').read()
        try:
            parsed = parse_boards(text)
        except FormatError as exc:
            raise click.ClickException(str(exc)) from exc
        if not parsed:
            raise click.ClickException('No boards found in input')
        flask_app.logger.info(f"[format] boards={len(parsed)}")
        click.echo(serialize_boards(parsed))

    flask_app.cli.add_command(boards_format_command)

    return flask_app
