from flask import jsonify
from werkzeug.exceptions import HTTPException


class GameRuleError(Exception):
    """A requested change breaks a game rule (too few players, bad input, ...)."""

    status = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(GameRuleError):
    status = 404


def register_error_handlers(flask_app) -> None:
    @flask_app.errorhandler(GameRuleError)
    def handle_game_rule_error(exc):
        return jsonify({'error': exc.message}), exc.status

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code
