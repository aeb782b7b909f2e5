from flask import request, current_app, jsonify
from ..store import get_store
from ..errors import ConflictError
from ..validators import (
    STATUS_ON_OFF, json_body, pick_fields, require_fields, clean_text,
    check_choice, check_email, check_phone, is_blank,
)
from . import bp

FIELDS = ('supplier_name', 'supplier_category', 'contact_email', 'phone_number', 'status')
REQUIRED = ('supplier_name', 'contact_email')

@bp.before_request
def ensure_files():
    get_store('suppliers').ensure()

def clean_supplier(data):
    require_fields(data, REQUIRED)
    phone = data.get('phone_number')
    return {
        'supplier_name': clean_text(data, 'supplier_name'),
        'supplier_category': clean_text(data, 'supplier_category') or '',
        'contact_email': check_email(data['contact_email'], 'contact_email'),
        'phone_number': '' if is_blank(phone) else check_phone(phone),
        'status': check_choice(data.get('status', 'on'), STATUS_ON_OFF),
    }

def ensure_unique_name(suppliers, supplier, exclude_id=None):
    name = supplier['supplier_name'].lower()
    if suppliers.exists(lambda s: (s.get('supplier_name') or '').lower() == name, exclude_id=exclude_id):
        current_app.logger.warning("Fornecedor duplicado: %s", supplier['supplier_name'])
        raise ConflictError('Já existe um fornecedor com esse nome')

@bp.route('', methods=['GET'])
def list_suppliers():
    """Lista os fornecedores (filtro opcional por status)."""
    return jsonify(get_store('suppliers').list(status=request.args.get('status')))

@bp.route('/<supplier_id>', methods=['GET'])
def get_supplier(supplier_id):
    return jsonify(get_store('suppliers').get(supplier_id))

@bp.route('', methods=['POST'])
def create_supplier():
    suppliers = get_store('suppliers')
    supplier = clean_supplier(pick_fields(json_body(), FIELDS))
    ensure_unique_name(suppliers, supplier)
    row = suppliers.create(supplier)
    current_app.logger.info("Fornecedor criado: %s", row['id'])
    return jsonify(row), 201

@bp.route('/<supplier_id>', methods=['PUT'])
def update_supplier(supplier_id):
    suppliers = get_store('suppliers')
    current = suppliers.get(supplier_id)
    supplier = clean_supplier({**current, **pick_fields(json_body(), FIELDS)})
    ensure_unique_name(suppliers, supplier, exclude_id=supplier_id)
    row = suppliers.update(supplier_id, supplier)
    current_app.logger.info("Fornecedor atualizado: %s", supplier_id)
    return jsonify(row)

@bp.route('/<supplier_id>', methods=['DELETE'])
def delete_supplier(supplier_id):
    get_store('suppliers').delete(supplier_id)
    current_app.logger.info("Fornecedor removido: %s", supplier_id)
    return jsonify({'message': 'Fornecedor removido com sucesso'})
