import os
import sys
import logging
from flask import Flask
from flask_cors import CORS
from .config import Config, RESOURCE_FILES, resource_paths
from .errors import register_error_handlers
from .utils_json import ensure_json_file

def setup_logging(level):
    """Configura o logging de todos os módulos da aplicação."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stdout,
    )

def create_app(test_config=None):
    """
    Cria e configura a instância da aplicação Flask.

    Esta função:
    1. Inicializa o app Flask e carrega o objeto Config.
    2. Aplica as configurações de teste, se houver.
    3. Garante que a pasta de dados e os arquivos JSON existam.
    4. Registra CORS, tratadores de erro, os Blueprints e o comando seed.
    """
    app = Flask(__name__)
    app.config.from_object(Config)

    if test_config:
        # se a pasta de dados mudou, recalcula os arquivos de cada recurso
        if 'DATA_FOLDER' in test_config:
            app.config.update(resource_paths(test_config['DATA_FOLDER']))
        app.config.update(test_config)

    setup_logging(app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # ensure folders
    os.makedirs(app.config['DATA_FOLDER'], exist_ok=True)
    for key in RESOURCE_FILES:
        ensure_json_file(app.config[key])

    CORS(app, origins=app.config['CORS_ORIGINS'])
    register_error_handlers(app)

    # register blueprints
    from .main import bp as main_bp
    from .users import bp as users_bp
    from .products import bp as products_bp
    from .orders import bp as orders_bp
    from .stores import bp as stores_bp
    from .suppliers import bp as suppliers_bp
    from .campaigns import bp as campaigns_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(products_bp, url_prefix='/products')
    app.register_blueprint(orders_bp, url_prefix='/orders')
    app.register_blueprint(stores_bp, url_prefix='/stores')
    app.register_blueprint(suppliers_bp, url_prefix='/suppliers')
    app.register_blueprint(campaigns_bp, url_prefix='/campaigns')

    from .seed import seed_command
    app.cli.add_command(seed_command)

    app.logger.info("Dados em %s", app.config['DATA_FOLDER'])
    return app
