from flask import request, current_app, jsonify
from werkzeug.security import generate_password_hash
from ..store import get_store
from ..errors import ConflictError, ValidationError
from ..validators import (
    STATUS_ON_OFF, json_body, pick_fields, require_fields, clean_text,
    check_choice, check_email, is_blank,
)
from . import bp

FIELDS = ('name', 'email', 'pwd', 'role', 'status')
ROLES = ('admin', 'buyer', 'supplier', 'store')
# campos que nunca saem na resposta ('pwd' cobre arquivos antigos com hash SHA)
HIDDEN = ('password_hash', 'pwd')

@bp.before_request
def ensure_files():
    get_store('users').ensure()

def public_user(user):
    """Remove o hash da senha antes de devolver o usuário."""
    return {k: v for k, v in user.items() if k not in HIDDEN}

def clean_user(data, creating):
    """
    Valida um usuário.
    - Obrigatórios: name, email (e pwd na criação).
    - role em ROLES; status on/off.
    - A senha, quando enviada, vira password_hash.
    """
    require_fields(data, ('name', 'email', 'pwd') if creating else ('name', 'email'))
    user = {
        'name': clean_text(data, 'name'),
        'email': check_email(data['email']),
        'role': check_choice(data.get('role', 'buyer'), ROLES, 'role'),
        'status': check_choice(data.get('status', 'on'), STATUS_ON_OFF),
    }
    if 'pwd' in data:
        pwd = data['pwd']
        if is_blank(pwd) or not isinstance(pwd, str):
            raise ValidationError('Senha inválida')
        user['password_hash'] = generate_password_hash(pwd)
    return user

def ensure_unique_email(users, email, exclude_id=None):
    if users.exists(lambda u: (u.get('email') or '').lower() == email, exclude_id=exclude_id):
        current_app.logger.warning("E-mail já cadastrado: %s", email)
        raise ConflictError('E-mail já cadastrado')

@bp.route('', methods=['GET'])
def list_users():
    """Lista os usuários (filtros opcionais: role, status), sem o hash da senha."""
    users = get_store('users').list(
        role=request.args.get('role'),
        status=request.args.get('status'),
    )
    return jsonify([public_user(u) for u in users])

@bp.route('/<user_id>', methods=['GET'])
def get_user(user_id):
    return jsonify(public_user(get_store('users').get(user_id)))

@bp.route('', methods=['POST'])
def create_user():
    users = get_store('users')
    user = clean_user(pick_fields(json_body(), FIELDS), creating=True)
    ensure_unique_email(users, user['email'])
    row = users.create(user)
    current_app.logger.info("Usuário criado: %s", row['id'])
    return jsonify(public_user(row)), 201

@bp.route('/<user_id>', methods=['PUT'])
def update_user(user_id):
    users = get_store('users')
    current = public_user(users.get(user_id))
    user = clean_user({**current, **pick_fields(json_body(), FIELDS)}, creating=False)
    ensure_unique_email(users, user['email'], exclude_id=user_id)
    row = users.update(user_id, user)
    current_app.logger.info("Usuário atualizado: %s", user_id)
    return jsonify(public_user(row))

@bp.route('/<user_id>', methods=['DELETE'])
def delete_user(user_id):
    get_store('users').delete(user_id)
    current_app.logger.info("Usuário removido: %s", user_id)
    return jsonify({'message': 'Usuário removido com sucesso'})
