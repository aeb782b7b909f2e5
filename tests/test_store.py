import json

import pytest

from central_compras.errors import NotFoundError, StorageError
from central_compras.store import JsonStore
from central_compras.utils_json import ensure_json_file, read_json, write_json


@pytest.fixture
def store(tmp_path):
    s = JsonStore(str(tmp_path / 'items.json'), 'items', 'Item não encontrado')
    s.ensure()
    return s


def test_ensure_creates_empty_list(store):
    with open(store.path, encoding='utf-8') as f:
        assert json.load(f) == []


def test_ensure_keeps_existing_content(tmp_path):
    path = str(tmp_path / 'x.json')
    write_json(path, [{'id': '1'}])
    ensure_json_file(path)
    assert read_json(path) == [{'id': '1'}]


def test_write_is_pretty_printed_utf8(tmp_path):
    path = str(tmp_path / 'sub' / 'x.json')
    write_json(path, [{'nome': 'Pão'}])

    with open(path, encoding='utf-8') as f:
        text = f.read()
    assert 'Pão' in text
    assert '\n  {' in text


def test_create_assigns_unique_ids(store):
    ids = {store.create({'name': str(n)})['id'] for n in range(20)}
    assert len(ids) == 20
    assert len(store.list()) == 20


def test_create_ignores_client_id(store):
    row = store.create({'id': 'meu-id', 'name': 'a'})
    assert row['id'] != 'meu-id'


def test_get_missing_raises(store):
    with pytest.raises(NotFoundError) as exc:
        store.get('nada')
    assert exc.value.message == 'Item não encontrado'


def test_update_is_shallow_merge(store):
    row = store.create({'name': 'a', 'tags': ['x'], 'qty': 1})

    updated = store.update(row['id'], {'qty': 2, 'id': 'outro'})

    assert updated == {'id': row['id'], 'name': 'a', 'tags': ['x'], 'qty': 2}
    assert store.get(row['id']) == updated


def test_delete_removes_exactly_one(store):
    a = store.create({'name': 'a'})
    b = store.create({'name': 'b'})

    removed = store.delete(a['id'])

    assert removed['name'] == 'a'
    assert store.list() == [b]


def test_delete_missing_leaves_file_untouched(store):
    store.create({'name': 'a'})
    before = store.list()

    with pytest.raises(NotFoundError):
        store.delete('nada')
    assert store.list() == before


def test_find_and_exists_with_exclusion(store):
    a = store.create({'name': 'a'})

    assert store.find(lambda r: r['name'] == 'a') == a
    assert store.exists(lambda r: r['name'] == 'a')
    assert not store.exists(lambda r: r['name'] == 'a', exclude_id=a['id'])


def test_list_filters(store):
    store.create({'name': 'a', 'status': 'on'})
    store.create({'name': 'b', 'status': 'off'})

    assert [r['name'] for r in store.list(status='off')] == ['b']
    assert len(store.list(status=None)) == 2


def test_corrupt_file_raises_storage_error(store):
    with open(store.path, 'w', encoding='utf-8') as f:
        f.write('[{')

    with pytest.raises(StorageError):
        store.list()


def test_non_list_content_raises_storage_error(store):
    write_json(store.path, {'outra_chave': []})

    with pytest.raises(StorageError):
        store.list()


def test_concurrent_writes_leave_valid_file(tmp_path):
    import threading

    path = str(tmp_path / 'x.json')
    errors = []

    def writer(n):
        for i in range(30):
            try:
                write_json(path, [{'id': f'{n}-{i}', 'payload': 'x' * 200}])
            except StorageError as e:
                errors.append(e)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(read_json(path)) == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ['x.json']
