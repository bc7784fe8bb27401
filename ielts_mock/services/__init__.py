import logging

from flask import current_app, has_app_context


def service_logger() -> logging.Logger:
    """The Flask app logger when an app context is active, else the package logger."""
    if has_app_context():
        return current_app.logger
    return logging.getLogger('ielts_mock')
