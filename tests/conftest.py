import pytest

from painel import create_app
from painel.config import Config


@pytest.fixture(autouse=True)
def clean_rpa_env(monkeypatch):
    for name in (
        "CONTA_AZUL_EMAIL",
        "CONTA_AZUL_PASSWORD",
        "CHROME_REMOTE_DEBUGGING_URL",
        "CHROME_REMOTE_DEBUGGING_HOST",
        "CHROME_EXECUTABLE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("CONTA_AZUL_EMAIL", "operador@oficina.com.br")
    monkeypatch.setenv("CONTA_AZUL_PASSWORD", "s3nh4")
    return {"email": "operador@oficina.com.br", "password": "s3nh4"}


# --- Painel (Flask) ---


@pytest.fixture
def painel_config(tmp_path):
    class TestConfig(Config):
        TESTING = True
        DATA_FILE = str(tmp_path / "backup.json")
        ARCHIVE_FILE = str(tmp_path / "arquivo_os.json")

    return TestConfig


@pytest.fixture
def app(painel_config):
    return create_app(painel_config)


@pytest.fixture
def client(app):
    return app.test_client()
