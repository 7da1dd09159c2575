from painel import create_app
from painel.config import Config

# Cria a aplicação usando a fábrica definida em painel/__init__.py
app = create_app()

if __name__ == "__main__":
    # O painel não depende do robô: as buscas no ContaAzul rodam pelo buscar_os.py.
    app.run(host="0.0.0.0", port=Config.PORT, debug=True, use_reloader=False)
