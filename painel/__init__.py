from flask import Flask
from .config import Config
from .os_store import OrdemServicoStore


def create_app(config_class=Config):
    """
    Application Factory (Fábrica de Aplicação):
    Cria e configura uma instância do painel de OS.

    Permite criar instâncias diferentes para Testes e Produção
    (ex: arquivos de dados em um diretório temporário).
    """

    # Arquivos estáticos do painel servidos a partir da raiz ("/index.html", "/app.js")
    app = Flask(
        __name__,
        static_folder=config_class.PUBLIC_DIR,
        static_url_path="",
    )

    app.config.from_object(config_class)

    # Uma única store por aplicação, compartilhada entre as requisições
    app.extensions["os_store"] = OrdemServicoStore(
        app.config["DATA_FILE"], app.config["ARCHIVE_FILE"]
    )

    from .main import bp as main_bp
    app.register_blueprint(main_bp)

    return app
