from config import Config


def test_config_carries_only_what_the_app_reads():
    assert not hasattr(Config, 'SECRET_KEY')
    assert Config.MAX_CONTENT_LENGTH > 0
    assert Config.CORS_ORIGINS


def test_app_config_from_test_config(flask_app):
    assert flask_app.config['MAX_CONTENT_LENGTH'] == 64 * 1024
    assert flask_app.config['CORS_ORIGINS'] == ['http://localhost:5173']
    assert flask_app.config['LOG_LEVEL'] == 'DEBUG'
