from flask import request, current_app, jsonify
from ..store import get_store
from ..errors import ConflictError, ValidationError
from ..validators import (
    json_body, pick_fields, require_fields, clean_text, check_percentage, is_valid_date,
)
from . import bp

FIELDS = ('supplier_id', 'name', 'start_date', 'end_date', 'discount_percentage')

@bp.before_request
def ensure_files():
    get_store('campaigns').ensure()

def clean_campaign(data):
    """
    Valida uma campanha.
    Todos os campos são obrigatórios; datas em AAAA-MM-DD com início <= fim;
    desconto entre 0 (exclusivo) e 100.
    """
    require_fields(data, FIELDS)
    start_date = clean_text(data, 'start_date')
    end_date = clean_text(data, 'end_date')
    for field, value in (('start_date', start_date), ('end_date', end_date)):
        if not is_valid_date(value):
            raise ValidationError(f"Data inválida em '{field}'. Use o formato AAAA-MM-DD")
    # mesmo formato ISO: a comparação de strings respeita a ordem cronológica
    if start_date > end_date:
        raise ValidationError('A data de início deve ser anterior ou igual à data de término')

    return {
        'supplier_id': clean_text(data, 'supplier_id'),
        'name': clean_text(data, 'name'),
        'start_date': start_date,
        'end_date': end_date,
        'discount_percentage': check_percentage(data['discount_percentage']),
    }

def ensure_unique_name(campaigns, campaign, exclude_id=None):
    name = campaign['name'].lower()
    duplicate = campaigns.exists(
        lambda c: c.get('supplier_id') == campaign['supplier_id'] and (c.get('name') or '').lower() == name,
        exclude_id=exclude_id,
    )
    if duplicate:
        current_app.logger.warning("Campanha duplicada: %s (fornecedor %s)", campaign['name'], campaign['supplier_id'])
        raise ConflictError('Já existe uma campanha com esse nome para este fornecedor')

@bp.route('', methods=['GET'])
def list_campaigns():
    """Lista todas as campanhas (filtro opcional por supplier_id)."""
    return jsonify(get_store('campaigns').list(supplier_id=request.args.get('supplier_id')))

@bp.route('/<campaign_id>', methods=['GET'])
def get_campaign(campaign_id):
    return jsonify(get_store('campaigns').get(campaign_id))

@bp.route('', methods=['POST'])
def create_campaign():
    campaigns = get_store('campaigns')
    campaign = clean_campaign(pick_fields(json_body(), FIELDS))
    ensure_unique_name(campaigns, campaign)
    row = campaigns.create(campaign)
    current_app.logger.info("Campanha criada: %s", row['id'])
    return jsonify(row), 201

@bp.route('/<campaign_id>', methods=['PUT'])
def update_campaign(campaign_id):
    campaigns = get_store('campaigns')
    current = campaigns.get(campaign_id)
    campaign = clean_campaign({**current, **pick_fields(json_body(), FIELDS)})
    ensure_unique_name(campaigns, campaign, exclude_id=campaign_id)
    row = campaigns.update(campaign_id, campaign)
    current_app.logger.info("Campanha atualizada: %s", campaign_id)
    return jsonify(row)

@bp.route('/<campaign_id>', methods=['DELETE'])
def delete_campaign(campaign_id):
    get_store('campaigns').delete(campaign_id)
    current_app.logger.info("Campanha removida: %s", campaign_id)
    return jsonify({'message': 'Campanha removida com sucesso'})
