import os

class Config:
    # Front-end origins allowed to call the API (comma-separated)
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
    ).split(',') if o.strip()]
    # Largest board text body accepted per request (bytes)
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_BOARD_TEXT_BYTES', str(64 * 1024)))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
