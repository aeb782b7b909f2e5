SUPPLIER = {
    'supplier_name': 'Judite Heeler',
    'supplier_category': 'Informatica, Seguranca',
    'contact_email': 'j.heeler@gmail.com',
    'phone_number': '48 9696 5858',
    'status': 'on',
}


def create(client, **overrides):
    return client.post('/suppliers', json={**SUPPLIER, **overrides})


def test_crud_supplier(client):
    created = create(client)
    assert created.status_code == 201
    supplier_id = created.json['id']

    assert client.get(f'/suppliers/{supplier_id}').json['supplier_name'] == 'Judite Heeler'

    resp = client.put(f'/suppliers/{supplier_id}', json={'supplier_category': 'Eletronicos'})
    assert resp.json['supplier_category'] == 'Eletronicos'
    assert resp.json['contact_email'] == 'j.heeler@gmail.com'

    assert client.delete(f'/suppliers/{supplier_id}').status_code == 200
    assert client.get(f'/suppliers/{supplier_id}').status_code == 404


def test_required_fields(client, read_file):
    assert create(client, supplier_name='  ').status_code == 400
    assert create(client, contact_email=None).status_code == 400
    assert read_file('SUPPLIERS_JSON') == []


def test_duplicate_name_conflicts(client):
    create(client)
    resp = create(client, supplier_name='JUDITE HEELER')

    assert resp.status_code == 409
    assert resp.json == {'error': 'Já existe um fornecedor com esse nome'}


def test_filter_by_status(client):
    create(client)
    create(client, supplier_name='Bandit', status='off')

    resp = client.get('/suppliers?status=off')
    assert [s['supplier_name'] for s in resp.json] == ['Bandit']


def test_unknown_fields_are_ignored(client):
    resp = create(client, favorite_color='azul')

    assert resp.status_code == 201
    assert 'favorite_color' not in resp.json
