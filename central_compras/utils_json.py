import os, json, tempfile

from .errors import StorageError

# ===== JSON Functions =====
def ensure_json_file(path):
    """
    Cria um arquivo JSON vazio (lista vazia []) se ele não existir.
    Útil para inicializar os arquivos de dados na primeira execução.
    """
    if not os.path.exists(path):
        write_json(path, [])

def read_json(path, key=None):
    """
    Lê e retorna a lista de registros de um arquivo JSON.
    Retorna uma lista vazia se o arquivo não existir.
    Arquivos no formato antigo {"<key>": [...]} também são aceitos.
    Levanta StorageError se o arquivo estiver corrompido ou ilegível.
    """
    if not os.path.exists(path):
        return []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise StorageError(f"Arquivo de dados corrompido: {os.path.basename(path)}") from e
    except OSError as e:
        raise StorageError(f"Erro ao ler {os.path.basename(path)}") from e

    if isinstance(data, dict) and key and isinstance(data.get(key), list):
        return data[key]
    if not isinstance(data, list):
        raise StorageError(f"Formato inválido em {os.path.basename(path)}: esperado uma lista")
    return data

def write_json(path, data):
    """
    Sobrescreve o conteúdo de um arquivo JSON com os dados fornecidos.
    Cada gravação usa seu próprio arquivo temporário na mesma pasta e depois
    renomeia, para nunca deixar o arquivo pela metade.
    """
    folder = os.path.dirname(path)
    tmp_path = None
    try:
        os.makedirs(folder, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=folder, prefix=os.path.basename(path) + '.', suffix='.tmp')
        os.chmod(tmp_path, 0o644)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        raise StorageError(f"Erro ao gravar {os.path.basename(path)}") from e
    finally:
        # só sobra temporário se a gravação falhou
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
