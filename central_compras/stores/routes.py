from flask import current_app, jsonify
from ..store import get_store
from ..errors import ConflictError
from ..validators import (
    STATUS_ON_OFF, json_body, pick_fields, require_fields, clean_text,
    check_choice, check_cnpj, check_email, check_phone, only_digits, is_blank,
)
from . import bp

FIELDS = ('store_name', 'cnpj', 'address', 'phone_number', 'contact_email', 'status')
REQUIRED = ('store_name', 'cnpj', 'contact_email')

@bp.before_request
def ensure_files():
    get_store('stores').ensure()

def clean_store(data):
    """
    Valida uma loja.
    - Obrigatórios: store_name, cnpj, contact_email.
    - cnpj e e-mail com formato válido; telefone, se informado, também.
    """
    require_fields(data, REQUIRED)
    phone = data.get('phone_number')
    return {
        'store_name': clean_text(data, 'store_name'),
        'cnpj': check_cnpj(data['cnpj']),
        'address': clean_text(data, 'address') or '',
        'phone_number': '' if is_blank(phone) else check_phone(phone),
        'contact_email': check_email(data['contact_email'], 'contact_email'),
        'status': check_choice(data.get('status', 'on'), STATUS_ON_OFF),
    }

def ensure_unique(stores, store, exclude_id=None):
    """Nome da loja (sem diferenciar maiúsculas) e CNPJ (só dígitos) são únicos."""
    name = store['store_name'].lower()
    if stores.exists(lambda s: (s.get('store_name') or '').lower() == name, exclude_id=exclude_id):
        current_app.logger.warning("Loja duplicada: %s", store['store_name'])
        raise ConflictError('Já existe uma loja com esse nome')
    cnpj = only_digits(store['cnpj'])
    if stores.exists(lambda s: only_digits(s.get('cnpj')) == cnpj, exclude_id=exclude_id):
        current_app.logger.warning("CNPJ duplicado: %s", store['cnpj'])
        raise ConflictError('Já existe uma loja com esse CNPJ')

@bp.route('', methods=['GET'])
def list_stores():
    return jsonify(get_store('stores').list())

@bp.route('/<store_id>', methods=['GET'])
def get_store_by_id(store_id):
    return jsonify(get_store('stores').get(store_id))

@bp.route('', methods=['POST'])
def create_store():
    stores = get_store('stores')
    store = clean_store(pick_fields(json_body(), FIELDS))
    ensure_unique(stores, store)
    row = stores.create(store)
    current_app.logger.info("Loja criada: %s", row['id'])
    return jsonify(row), 201

@bp.route('/<store_id>', methods=['PUT'])
def update_store(store_id):
    stores = get_store('stores')
    current = stores.get(store_id)
    store = clean_store({**current, **pick_fields(json_body(), FIELDS)})
    ensure_unique(stores, store, exclude_id=store_id)
    row = stores.update(store_id, store)
    current_app.logger.info("Loja atualizada: %s", store_id)
    return jsonify(row)

@bp.route('/<store_id>', methods=['DELETE'])
def delete_store(store_id):
    get_store('stores').delete(store_id)
    current_app.logger.info("Loja removida: %s", store_id)
    return jsonify({'message': 'Loja removida com sucesso'})
