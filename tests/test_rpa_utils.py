import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rpa_contaazul.config_rpa import EXECUTION_LOGS_DIR, get_credentials
from rpa_contaazul.utils import (
    CancellationToken,
    generate_task_id,
    save_debug_screenshot,
    setup_logger,
)
from tests.fakes import FakePage


def test_setup_logger_is_idempotent():
    first = setup_logger("teste_idempotente")
    second = setup_logger("teste_idempotente")

    assert first is second
    assert len(first.handlers) == 2
    assert first.propagate is False
    assert first.level == logging.DEBUG


def test_task_ids_are_short_and_unique():
    ids = {generate_task_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(i.startswith("busca_") and len(i) == len("busca_") + 8 for i in ids)


def test_screenshot_failure_is_only_logged(tmp_path):
    class BrokenPage(FakePage):
        def screenshot(self, path=None, full_page=False):
            raise RuntimeError("Target page, context or browser has been closed")

    assert save_debug_screenshot(BrokenPage(), tmp_path / "x.png", "t") is False
    assert save_debug_screenshot(FakePage(), tmp_path / "sub" / "y.png", "t") is True
    assert (tmp_path / "sub" / "y.png").exists()


def test_cancellation_token():
    token = CancellationToken()
    assert token.is_cancelled is False
    token.cancel()
    assert token.is_cancelled is True


def test_credentials_require_both_values(monkeypatch):
    assert get_credentials() is None

    monkeypatch.setenv("CONTA_AZUL_EMAIL", "operador@oficina.com.br")
    assert get_credentials() is None

    monkeypatch.setenv("CONTA_AZUL_PASSWORD", "s3nh4")
    assert get_credentials() == {"email": "operador@oficina.com.br", "password": "s3nh4"}


def test_log_file_goes_to_configured_execution_dir():
    logger = setup_logger("teste_diretorio_logs")
    file_handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))

    assert Path(file_handler.baseFilename).parent == EXECUTION_LOGS_DIR
