import os
import logging
from logging.config import dictConfig
from typing import Optional
from flask import Flask
from model import *
from mongo import *
import config


def app(
    grader: Optional[GradingService] = None,
    file_uploader: Optional[UploadAdapter] = None,
):
    '''
    Create the flask app.

    `grader` and `file_uploader` are the collaborators handed to the data
    layer; the real clients are built from config when they are omitted.
    '''
    # Setup logging
    os.makedirs(config.LOG_DIR, exist_ok=True)
    dictConfig(config.LOGGING_CONFIG)

    # Create a flask app
    app = Flask(__name__)
    app.config['PREFERRED_URL_SCHEME'] = os.environ.get(
        'PREFERRED_URL_SCHEME', 'http')
    app.config['UPLOAD_TMP_DIR'] = config.UPLOAD_TMP_DIR
    app.config['PROBLEMS_DIR'] = config.PROBLEMS_DIR
    app.url_map.strict_slashes = False

    if grader is None:
        grader = Grader(config.GRADER_URL, config.GRADER_TIMEOUT)
    if file_uploader is None:
        file_uploader = FileUploader(config.UPLOAD_TMP_DIR)
    app.extensions['grader'] = grader
    app.extensions['file_uploader'] = file_uploader

    # Register flask blueprint
    api2prefix = [
        (auth_api, '/auth'),
        (contest_api, '/contest'),
        (problem_api, '/problem'),
        (run_api, '/run'),
    ]
    for api, prefix in api2prefix:
        app.register_blueprint(api, url_prefix=prefix)

    if not User('first_admin'):
        ADMIN = {
            'username': 'first_admin',
            'password': 'firstpasswordforadmin',
            'email': 'i.am.first.admin@contest-oj.dev'
        }
        admin = User.signup(**ADMIN)
        admin.update(
            active=True,
            role=Role.ADMIN,
        )

    if __name__ != '__main__':
        logger = logging.getLogger('gunicorn.error')
        app.logger.setLevel(logger.level)

    return app
