from flask import request, current_app, jsonify
from ..store import get_store
from ..errors import ConflictError
from ..validators import (
    STATUS_ON_OFF, json_body, pick_fields, require_fields, clean_text,
    check_choice, check_price, parse_int,
)
from . import bp

FIELDS = ('name', 'description', 'price', 'stock_quantity', 'supplier_id', 'status')
REQUIRED = ('name', 'price', 'stock_quantity', 'supplier_id')

@bp.before_request
def ensure_files():
    """Garante que products.json exista antes de cada requisição."""
    get_store('products').ensure()

def clean_product(data):
    """
    Valida um produto completo (já mesclado, no caso de PUT).
    - Campos obrigatórios: name, price, stock_quantity, supplier_id.
    - price >= 0 (gravado com duas casas), stock_quantity inteiro >= 0.
    - status: on/off.
    """
    require_fields(data, REQUIRED)
    product = {
        'name': clean_text(data, 'name'),
        'description': clean_text(data, 'description') or '',
        'price': check_price(data['price'], 'price'),
        'stock_quantity': parse_int(data['stock_quantity'], 'stock_quantity', minimum=0),
        'supplier_id': clean_text(data, 'supplier_id'),
        'status': check_choice(data.get('status', 'on'), STATUS_ON_OFF),
    }
    return product

def ensure_unique_name(products, product, exclude_id=None):
    """Um fornecedor não pode ter dois produtos com o mesmo nome (sem diferenciar maiúsculas)."""
    name = product['name'].lower()
    duplicate = products.exists(
        lambda p: p.get('supplier_id') == product['supplier_id'] and (p.get('name') or '').lower() == name,
        exclude_id=exclude_id,
    )
    if duplicate:
        current_app.logger.warning("Produto duplicado: %s (fornecedor %s)", product['name'], product['supplier_id'])
        raise ConflictError('Já existe um produto com esse nome para este fornecedor')

@bp.route('', methods=['GET'])
def list_products():
    """
    Lista todos os produtos.
    Filtros opcionais na querystring: supplier_id, status.
    """
    products = get_store('products').list(
        supplier_id=request.args.get('supplier_id'),
        status=request.args.get('status'),
    )
    return jsonify(products)

@bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    return jsonify(get_store('products').get(product_id))

@bp.route('', methods=['POST'])
def create_product():
    products = get_store('products')
    product = clean_product(pick_fields(json_body(), FIELDS))
    ensure_unique_name(products, product)
    row = products.create(product)
    current_app.logger.info("Produto criado: %s", row['id'])
    return jsonify(row), 201

@bp.route('/<product_id>', methods=['PUT'])
def update_product(product_id):
    products = get_store('products')
    current = products.get(product_id)
    product = clean_product({**current, **pick_fields(json_body(), FIELDS)})
    ensure_unique_name(products, product, exclude_id=product_id)
    row = products.update(product_id, product)
    current_app.logger.info("Produto atualizado: %s", product_id)
    return jsonify(row)

@bp.route('/<product_id>', methods=['DELETE'])
def delete_product(product_id):
    get_store('products').delete(product_id)
    current_app.logger.info("Produto removido: %s", product_id)
    return jsonify({'message': 'Produto removido com sucesso'})
