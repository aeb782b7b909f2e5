import click
from flask import current_app
from flask.cli import with_appcontext
from .store import get_store
from .utils_json import read_json, write_json

# Dados de exemplo da Central de Compras
SAMPLE_DATA = {
    'products': [
        {
            'id': 'p001',
            'name': 'Teclado e mouse',
            'description': 'Kit teclado e mouse sem fio',
            'price': '200.00',
            'stock_quantity': 8,
            'supplier_id': 's001',
            'status': 'on',
        },
        {
            'id': 'p002',
            'name': "Monitor 24''",
            'description': 'Monitor LED Full HD',
            'price': '850.00',
            'stock_quantity': 15,
            'supplier_id': 's002',
            'status': 'on',
        },
    ],
    'orders': [
        {
            'id': 'o001',
            'store_id': 'st001',
            'item': [
                {'product_id': 'p001', 'quantity': 2, 'campaign_id': 'c001', 'unit_price': '200.00'},
                {'product_id': 'p002', 'quantity': 1, 'campaign_id': None, 'unit_price': '850.00'},
            ],
            'total_amount': '1250.00',
            'status': 'Pending',
            'date': '2025-09-28 10:30:00',
        },
    ],
}


def seed_resource(resource, rows, reset=False):
    """
    Acrescenta os registros de exemplo ao arquivo do recurso.
    Registros cujo id já existe são mantidos como estão.
    Retorna quantos registros foram inseridos.
    """
    store = get_store(resource)
    records = [] if reset else read_json(store.path, store.key)
    existing = {r.get('id') for r in records}
    added = [dict(r) for r in rows if r['id'] not in existing]
    if added or reset:
        write_json(store.path, records + added)
    return len(added)


@click.command('seed')
@click.option('--reset', is_flag=True, help='Esvazia os arquivos antes de inserir os exemplos.')
@with_appcontext
def seed_command(reset):
    """Carrega produtos e pedidos de exemplo nos arquivos JSON."""
    for resource, rows in SAMPLE_DATA.items():
        added = seed_resource(resource, rows, reset=reset)
        current_app.logger.info("Seed %s: %d registro(s) inserido(s)", resource, added)
        click.echo(f"{resource}: {added} registro(s) inserido(s)")
