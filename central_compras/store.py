import secrets

from flask import current_app

from .errors import NotFoundError
from .utils_json import ensure_json_file, read_json, write_json


def generate_id():
    """Gera um identificador opaco de 40 caracteres hexadecimais."""
    return secrets.token_hex(20)


class JsonStore:
    """
    Armazena os registros de um recurso num único arquivo JSON.

    Cada mutação lê o arquivo inteiro, altera a lista em memória e grava
    o arquivo de volta (sobrescrita completa).
    """

    def __init__(self, path, key, not_found_message='Registro não encontrado'):
        self.path = path
        self.key = key
        # ex.: "Produto não encontrado"
        self.not_found_message = not_found_message

    def ensure(self):
        ensure_json_file(self.path)

    def _load(self):
        return read_json(self.path, self.key)

    def _save(self, records):
        write_json(self.path, records)

    def _not_found(self):
        return NotFoundError(self.not_found_message)

    def list(self, **filters):
        """Retorna todos os registros; filtros opcionais por igualdade de campo."""
        records = self._load()
        for field, value in filters.items():
            if value is None:
                continue
            records = [r for r in records if str(r.get(field)) == str(value)]
        return records

    def get(self, record_id):
        for r in self._load():
            if r.get('id') == record_id:
                return r
        raise self._not_found()

    def find(self, predicate, exclude_id=None):
        """Busca linear: primeiro registro que satisfaz o predicado, ou None."""
        for r in self._load():
            if exclude_id is not None and r.get('id') == exclude_id:
                continue
            if predicate(r):
                return r
        return None

    def exists(self, predicate, exclude_id=None):
        return self.find(predicate, exclude_id=exclude_id) is not None

    def create(self, record):
        records = self._load()
        used = {r.get('id') for r in records}
        new_id = generate_id()
        while new_id in used:
            new_id = generate_id()

        row = dict(record)
        row['id'] = new_id
        records.append(row)
        self._save(records)
        return row

    def update(self, record_id, partial):
        """Mescla os campos recebidos no registro existente, preservando o id."""
        records = self._load()
        for i, r in enumerate(records):
            if r.get('id') == record_id:
                merged = {**r, **partial, 'id': record_id}
                records[i] = merged
                self._save(records)
                return merged
        raise self._not_found()

    def delete(self, record_id):
        records = self._load()
        remaining = [r for r in records if r.get('id') != record_id]
        if len(remaining) == len(records):
            raise self._not_found()
        self._save(remaining)
        # devolve o registro removido
        return next(r for r in records if r.get('id') == record_id)


# config key, chave no JSON antigo, mensagem de 404
STORES = {
    'users': ('USERS_JSON', 'users', 'Usuário não encontrado'),
    'products': ('PRODUCTS_JSON', 'products', 'Produto não encontrado'),
    'orders': ('ORDERS_JSON', 'orders', 'Pedido não encontrado'),
    'stores': ('STORES_JSON', 'stores', 'Loja não encontrada'),
    'suppliers': ('SUPPLIERS_JSON', 'suppliers', 'Fornecedor não encontrado'),
    'campaigns': ('CAMPAIGNS_JSON', 'campaigns', 'Campanha não encontrada'),
}


def get_store(resource, app=None):
    """Devolve o JsonStore do recurso usando os caminhos configurados na aplicação."""
    app = app or current_app
    config_key, key, message = STORES[resource]
    return JsonStore(app.config[config_key], key, message)
