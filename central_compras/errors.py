from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


class APIError(Exception):
    """
    Erro base da API.
    Cada subclasse define o código HTTP devolvido ao cliente.
    """
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(APIError):
    status_code = 400


class NotFoundError(APIError):
    status_code = 404


class ConflictError(APIError):
    status_code = 409


class StorageError(APIError):
    status_code = 500


def handle_api_error(error):
    if isinstance(error, StorageError):
        current_app.logger.error("Falha de armazenamento: %s", error.message)
    return jsonify(error.to_dict()), error.status_code


def handle_http_exception(error):
    """Rotas inexistentes, método não permitido e JSON malformado também respondem em JSON."""
    if error.code is None or error.code < 400:
        return error
    return jsonify({'error': error.description}), error.code


def handle_unexpected_error(error):
    current_app.logger.exception("Erro inesperado: %s", error)
    return jsonify({'error': 'Erro interno do servidor'}), 500


def register_error_handlers(app):
    app.register_error_handler(APIError, handle_api_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)
