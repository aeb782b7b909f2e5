import os
from flask import current_app, jsonify
from ..store import STORES
from . import bp

@bp.route('/')
def index():
    """
    Rota inicial da API.
    Retorna título, versão, descrição e a lista de recursos disponíveis.
    """
    return jsonify({
        'title': current_app.config['API_TITLE'],
        'version': current_app.config['API_VERSION'],
        'description': current_app.config['API_DESCRIPTION'],
        'resources': [f"/{name}" for name in STORES],
    })

@bp.route('/health')
def health():
    """Verifica se a API responde e se a pasta de dados aceita gravação."""
    data_folder = current_app.config['DATA_FOLDER']
    writable = os.path.isdir(data_folder) and os.access(data_folder, os.W_OK)
    return jsonify({
        'status': 'ok' if writable else 'degraded',
        'data_folder_writable': writable,
    })
