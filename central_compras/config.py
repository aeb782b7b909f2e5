import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Recurso -> nome do arquivo JSON dentro de DATA_FOLDER
RESOURCE_FILES = {
    'USERS_JSON': 'users.json',
    'PRODUCTS_JSON': 'products.json',
    'ORDERS_JSON': 'orders.json',
    'STORES_JSON': 'stores.json',
    'SUPPLIERS_JSON': 'suppliers.json',
    'CAMPAIGNS_JSON': 'campaigns.json',
}


def resource_paths(data_folder):
    """Monta o caminho de cada arquivo JSON a partir da pasta de dados."""
    return {key: os.path.join(data_folder, filename) for key, filename in RESOURCE_FILES.items()}


class Config:
    """
    Classe de configuração da aplicação.
    Define a pasta de dados, os arquivos JSON de cada recurso, CORS e logging.
    """
    DATA_FOLDER = os.environ.get('CENTRAL_COMPRAS_DATA', os.path.join(BASE_DIR, 'data'))

    # JSON Files
    # Um arquivo por recurso (array de objetos, indentado)
    USERS_JSON = os.path.join(DATA_FOLDER, 'users.json')
    PRODUCTS_JSON = os.path.join(DATA_FOLDER, 'products.json')
    ORDERS_JSON = os.path.join(DATA_FOLDER, 'orders.json')
    STORES_JSON = os.path.join(DATA_FOLDER, 'stores.json')
    SUPPLIERS_JSON = os.path.join(DATA_FOLDER, 'suppliers.json')
    CAMPAIGNS_JSON = os.path.join(DATA_FOLDER, 'campaigns.json')

    # CORS (lista separada por vírgula)
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '3000'))

    API_TITLE = 'API da Central de Compras'
    API_VERSION = '1.0.0'
    API_DESCRIPTION = 'Documentação da API da Central de Compras'
