import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """
    Centraliza as configurações do painel de OS (Flask).
    """

    # Define o diretório base da aplicação (a pasta 'painel')
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    # Define a raiz do projeto (um nível acima da pasta 'painel')
    PROJECT_ROOT = os.path.abspath(os.path.join(BASE_DIR, ".."))

    # Arquivos estáticos do painel (index.html, js, css)
    PUBLIC_DIR = os.path.join(PROJECT_ROOT, "public")

    # Persistência em JSON
    DATA_FILE = os.environ.get("PAINEL_DATA_FILE") or os.path.join(
        PROJECT_ROOT, "backup.json"
    )
    ARCHIVE_FILE = os.environ.get("PAINEL_ARCHIVE_FILE") or os.path.join(
        PROJECT_ROOT, "arquivo_os.json"
    )

    # Regras de negócio das OS
    STATUS_VALIDOS = [
        "entrada",
        "enviar",
        "aguardando",
        "aprovado",
        "andamento",
        "agpeca",
        "agordem",
        "rma",
        "pronto",
        "semconserto",
    ]
    NUMERO_PATTERN = os.environ.get("PAINEL_NUMERO_PATTERN") or r"^[0-9]{4}$"

    PORT = int(os.environ.get("PAINEL_PORT", "3000"))

    # Chave secreta para segurança de sessões
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-key-padrao-painel-os"
