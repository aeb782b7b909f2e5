import json

import pytest

from central_compras import create_app


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'DATA_FOLDER': str(tmp_path / 'data'),
        'LOG_LEVEL': 'WARNING',
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def read_file(app):
    """Lê direto do disco o arquivo JSON de um recurso."""
    def _read(config_key):
        with open(app.config[config_key], encoding='utf-8') as f:
            return json.load(f)
    return _read
