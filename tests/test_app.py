import os


def test_index_lists_resources(client):
    resp = client.get('/')

    assert resp.status_code == 200
    assert resp.json['title'] == 'API da Central de Compras'
    assert '/campaigns' in resp.json['resources']
    assert len(resp.json['resources']) == 6


def test_health(client):
    resp = client.get('/health')
    assert resp.json == {'status': 'ok', 'data_folder_writable': True}


def test_data_files_created_on_startup(app, read_file):
    for key in ('USERS_JSON', 'PRODUCTS_JSON', 'ORDERS_JSON',
                'STORES_JSON', 'SUPPLIERS_JSON', 'CAMPAIGNS_JSON'):
        assert read_file(key) == []


def test_missing_file_is_recreated_on_request(client, app):
    os.remove(app.config['PRODUCTS_JSON'])

    resp = client.get('/products')

    assert resp.status_code == 200
    assert resp.json == []
    assert os.path.exists(app.config['PRODUCTS_JSON'])


def test_unknown_route_returns_json_404(client):
    resp = client.get('/nao-existe/rota/qualquer')
    assert resp.status_code == 404
    assert 'error' in resp.json


def test_method_not_allowed_returns_json(client):
    resp = client.patch('/products')
    assert resp.status_code == 405
    assert 'error' in resp.json


def test_corrupt_file_returns_500(client, app):
    with open(app.config['ORDERS_JSON'], 'w', encoding='utf-8') as f:
        f.write('{quebrado')

    resp = client.get('/orders')

    assert resp.status_code == 500
    assert resp.json == {'error': 'Arquivo de dados corrompido: orders.json'}


def test_cors_header_present(client):
    resp = client.get('/products', headers={'Origin': 'http://localhost:5173'})
    assert resp.headers.get('Access-Control-Allow-Origin') in ('*', 'http://localhost:5173')


def test_seed_command_inserts_samples_once(runner, client):
    result = runner.invoke(args=['seed'])
    assert 'products: 2 registro(s) inserido(s)' in result.output
    assert 'orders: 1 registro(s) inserido(s)' in result.output

    result = runner.invoke(args=['seed'])
    assert 'products: 0 registro(s) inserido(s)' in result.output

    assert client.get('/products/p001').json['name'] == 'Teclado e mouse'
    assert client.get('/orders/o001').json['total_amount'] == '1250.00'


def test_seed_reset_replaces_existing_records(runner, client):
    client.post('/products', json={
        'name': 'Cadeira', 'price': '99.90', 'stock_quantity': 1, 'supplier_id': 's9',
    })

    runner.invoke(args=['seed', '--reset'])

    names = sorted(p['name'] for p in client.get('/products').json)
    assert names == ["Monitor 24''", 'Teclado e mouse']


def test_config_has_no_session_secret():
    from central_compras.config import Config

    assert not hasattr(Config, 'SECRET_KEY')
