"""
Validações de campos usadas pelas rotas antes de criar ou atualizar registros.

Os predicados (is_valid_*) são funções puras. As funções check_* e
require_fields levantam ValidationError na primeira falha encontrada.
"""

import re
import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from flask import request

from .errors import ValidationError

STATUS_ON_OFF = ('on', 'off')

DATE_FORMAT = '%Y-%m-%d'
DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$')
# aceita "48 9696 5858", "(48) 99696-5858", "+55 48 99696 5858"
PHONE_RE = re.compile(r'^(\+\d{2}\s?)?(\(\d{2}\)|\d{2})\s?\d{4,5}[\s-]?\d{4}$')
# aceita "12.345.678/0001-90", "12345678000190" e o formato antigo "12.123.123.1234-12"
CNPJ_RE = re.compile(r'^\d{2}\.?\d{3}\.?\d{3}[./]?\d{4}-?\d{2}$')


def only_digits(v):
    return re.sub(r'\D+', '', v or '')


# ===== Predicados =====
def is_valid_email(value):
    return isinstance(value, str) and bool(EMAIL_RE.match(value.strip()))

def is_valid_phone(value):
    if not isinstance(value, str) or not PHONE_RE.match(value.strip()):
        return False
    return 10 <= len(only_digits(value)) <= 13

def is_valid_cnpj(value):
    return isinstance(value, str) and bool(CNPJ_RE.match(value.strip()))

def _parses(value, fmt):
    if not isinstance(value, str):
        return False
    try:
        datetime.datetime.strptime(value, fmt)
    except ValueError:
        return False
    return True

def is_valid_date(value):
    return _parses(value, DATE_FORMAT)

def is_valid_datetime(value):
    return _parses(value, DATETIME_FORMAT)

def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


# ===== Conversões =====
def parse_decimal(value, field):
    """Converte preço/percentual recebido como número ou string ("200.00" ou "200,00")."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Campo '{field}' deve ser numérico")
    try:
        number = Decimal(str(value).strip().replace(',', '.'))
    except InvalidOperation:
        raise ValidationError(f"Campo '{field}' deve ser numérico")
    if not number.is_finite():
        raise ValidationError(f"Campo '{field}' deve ser numérico")
    return number

def parse_int(value, field, minimum=0):
    if isinstance(value, bool):
        raise ValidationError(f"Campo '{field}' deve ser um número inteiro")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Campo '{field}' deve ser um número inteiro")
    if number < minimum:
        raise ValidationError(f"Campo '{field}' deve ser maior ou igual a {minimum}")
    return number

def format_money(number, field='valor'):
    """Arredonda para duas casas; valores grandes demais para a precisão decimal viram erro de validação."""
    try:
        return str(Decimal(number).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValidationError(f"Campo '{field}' excede o valor máximo permitido")


# ===== Verificações de campo =====
def json_body():
    """Retorna o corpo JSON da requisição; precisa ser um objeto."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('O corpo da requisição deve ser um objeto JSON')
    return data

def pick_fields(data, fields):
    """Mantém apenas os campos conhecidos do recurso (o id nunca vem do cliente)."""
    return {k: data[k] for k in fields if k in data and k != 'id'}

def require_fields(data, fields):
    for field in fields:
        if is_blank(data.get(field)):
            raise ValidationError(f"Campo obrigatório ausente: {field}")

def clean_text(data, field):
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Campo '{field}' deve ser texto")
    return value.strip()

def check_choice(value, allowed, field='status'):
    if value not in allowed:
        raise ValidationError(f"Campo '{field}' inválido. Valores aceitos: {', '.join(allowed)}")
    return value

def check_email(value, field='email'):
    if not is_valid_email(value):
        raise ValidationError(f"E-mail inválido: {field}")
    return value.strip().lower()

def check_phone(value, field='phone_number'):
    if not is_valid_phone(value):
        raise ValidationError(f"Telefone inválido: {field}")
    return value.strip()

def check_cnpj(value, field='cnpj'):
    if not is_valid_cnpj(value):
        raise ValidationError(f"CNPJ inválido: {field}")
    return value.strip()

def check_price(value, field='price'):
    number = parse_decimal(value, field)
    if number < 0:
        raise ValidationError(f"Campo '{field}' não pode ser negativo")
    return format_money(number, field)

def check_percentage(value, field='discount_percentage'):
    # o intervalo vale para o valor já arredondado, que é o que fica gravado
    rounded = format_money(parse_decimal(value, field), field)
    if Decimal(rounded) <= 0 or Decimal(rounded) > 100:
        raise ValidationError(f"Campo '{field}' deve estar entre 0 e 100")
    return rounded
