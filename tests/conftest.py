import os
import sys
import pytest

# Ensure the project root (containing the `squares` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from squares import create_app


class TestConfig:
    TESTING = True
    CORS_ORIGINS = ['http://localhost:5173']
    MAX_CONTENT_LENGTH = 64 * 1024
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def cli_runner(flask_app):
    return flask_app.test_cli_runner()
