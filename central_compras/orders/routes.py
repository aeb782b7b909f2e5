import datetime
from decimal import Decimal
from flask import request, current_app, jsonify
from ..store import get_store
from ..errors import ValidationError
from ..validators import (
    DATETIME_FORMAT, json_body, pick_fields, require_fields, clean_text,
    check_choice, check_price, parse_int, format_money,
    is_blank, is_valid_datetime,
)
from . import bp

FIELDS = ('store_id', 'item', 'total_amount', 'status', 'date')
STATUSES = ('Pending', 'Confirmed', 'Shipped', 'Delivered', 'Cancelled')

@bp.before_request
def ensure_files():
    get_store('orders').ensure()

def clean_item(item, position):
    """Valida um item do pedido: product_id, quantity >= 1, unit_price >= 0, campaign_id opcional."""
    if not isinstance(item, dict):
        raise ValidationError(f"Item {position} do pedido deve ser um objeto")
    if is_blank(item.get('product_id')):
        raise ValidationError(f"Item {position}: product_id é obrigatório")
    if 'quantity' not in item or 'unit_price' not in item:
        raise ValidationError(f"Item {position}: quantity e unit_price são obrigatórios")
    campaign_id = item.get('campaign_id')
    return {
        'product_id': clean_text(item, 'product_id'),
        'quantity': parse_int(item['quantity'], 'quantity', minimum=1),
        'campaign_id': None if is_blank(campaign_id) else campaign_id,
        'unit_price': check_price(item['unit_price'], 'unit_price'),
    }

def order_total(items):
    """Soma quantity * unit_price de todos os itens."""
    total = sum((Decimal(i['unit_price']) * i['quantity'] for i in items), Decimal('0'))
    return format_money(total, 'total_amount')

def clean_order(data):
    """
    Valida um pedido.
    - store_id e item (lista não vazia) são obrigatórios.
    - total_amount é calculado a partir dos itens quando não informado.
    - status padrão 'Pending'; date padrão agora (AAAA-MM-DD HH:MM:SS).
    """
    require_fields(data, ('store_id',))
    items = data.get('item')
    if not isinstance(items, list) or not items:
        raise ValidationError('O pedido precisa de pelo menos um item')
    items = [clean_item(item, n) for n, item in enumerate(items, start=1)]

    if is_blank(data.get('total_amount')):
        total = order_total(items)
    else:
        total = check_price(data['total_amount'], 'total_amount')

    date = data.get('date')
    if is_blank(date):
        date = datetime.datetime.now().strftime(DATETIME_FORMAT)
    elif not is_valid_datetime(date):
        raise ValidationError("Data inválida em 'date'. Use o formato AAAA-MM-DD HH:MM:SS")

    return {
        'store_id': clean_text(data, 'store_id'),
        'item': items,
        'total_amount': total,
        'status': check_choice(data.get('status', 'Pending'), STATUSES),
        'date': date,
    }

@bp.route('', methods=['GET'])
def list_orders():
    """Lista os pedidos (filtros opcionais: store_id, status)."""
    orders = get_store('orders').list(
        store_id=request.args.get('store_id'),
        status=request.args.get('status'),
    )
    return jsonify(orders)

@bp.route('/<order_id>', methods=['GET'])
def get_order(order_id):
    return jsonify(get_store('orders').get(order_id))

@bp.route('', methods=['POST'])
def create_order():
    order = clean_order(pick_fields(json_body(), FIELDS))
    row = get_store('orders').create(order)
    current_app.logger.info("Pedido criado: %s (loja %s, total %s)", row['id'], row['store_id'], row['total_amount'])
    return jsonify(row), 201

@bp.route('/<order_id>', methods=['PUT'])
def update_order(order_id):
    orders = get_store('orders')
    current = orders.get(order_id)
    body = pick_fields(json_body(), FIELDS)
    # itens novos sem total: recalcula em vez de manter o total antigo
    if 'item' in body and 'total_amount' not in body:
        body['total_amount'] = None
    order = clean_order({**current, **body})
    row = orders.update(order_id, order)
    current_app.logger.info("Pedido atualizado: %s", order_id)
    return jsonify(row)

@bp.route('/<order_id>', methods=['DELETE'])
def delete_order(order_id):
    get_store('orders').delete(order_id)
    current_app.logger.info("Pedido removido: %s", order_id)
    return jsonify({'message': 'Pedido removido com sucesso'})
