from . import create_app

app = create_app()

if __name__ == '__main__':
    print(f"Servidor rodando em http://localhost:{app.config['PORT']}")
    app.run(host='0.0.0.0', port=app.config['PORT'])
