import os
import tempfile

JWT_SECRET = os.getenv('JWT_SECRET', 'SuperSecretString')

# Where the grading service listens
GRADER_URL = os.getenv('GRADER_URL', 'http://grader:21680')
GRADER_TIMEOUT = float(os.getenv('GRADER_TIMEOUT', '5'))

# Uploaded files land in UPLOAD_TMP_DIR first, then get moved under
# PROBLEMS_DIR once they are validated
UPLOAD_TMP_DIR = os.getenv('UPLOAD_TMP_DIR', tempfile.gettempdir())
PROBLEMS_DIR = os.getenv('PROBLEMS_DIR', 'problems')

LOG_DIR = os.getenv('LOG_DIR', 'logs')
LOG_FILE = os.path.join(LOG_DIR, 'contest-oj.log')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')
LOG_CONSOLE_LEVEL = os.getenv('LOG_CONSOLE_LEVEL', LOG_LEVEL)

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format':
            '[%(asctime)s] %(levelname)s in %(module)s:%(lineno)d: %(message)s',
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': 'ext://flask.logging.wsgi_errors_stream',
            'formatter': 'default',
            'level': LOG_CONSOLE_LEVEL,
        },
        'file': {
            'class': 'logging.FileHandler',
            'filename': LOG_FILE,
            'formatter': 'default',
            'encoding': 'utf-8',
        },
    },
    'loggers': {
        # driver chatter
        'pymongo': {
            'level': 'WARNING'
        },
        'mongoengine': {
            'level': 'WARNING'
        },
        'urllib3.connectionpool': {
            'level': 'INFO'
        },
        'flask.app': {
            'level': LOG_LEVEL,
            'handlers': ['console', 'file'],
            'propagate': False,
        },
    },
    'root': {
        'level': LOG_LEVEL,
        'handlers': ['console', 'file'],
    },
}
