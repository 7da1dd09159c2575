# -*- coding: utf-8 -*-
"""
Módulo de Utilitários do RPA (rpa_contaazul/utils.py).

Responsabilidade:
1. Configurar o sistema de logging centralizado (Console + Arquivo com rotação).
2. Gerar IDs únicos para rastrear cada busca nos logs.
3. Salvar screenshots de diagnóstico sem interromper o fluxo.
4. Oferecer um token de cancelamento para esperas longas (login manual).
"""

import uuid
import logging
import threading
from pathlib import Path
from datetime import datetime
from logging.handlers import RotatingFileHandler

# Diretórios criados na importação de config_rpa
from rpa_contaazul.config_rpa import EXECUTION_LOGS_DIR


# --- Funções de Logging ---


def setup_logger(name="rpa_logger", log_level=logging.DEBUG):
    """
    Configura um logger centralizado para o robô e para o painel.

    Estratégia de Logging:
    - Console (StreamHandler): Exibe apenas INFO, WARNING e ERROR.
    - Arquivo (RotatingFileHandler): Registra TUDO (DEBUG+), 5 MB x 10 arquivos,
      um arquivo por dia (execution_YYYYMMDD.log).

    Args:
        name (str): Nome do logger (permite múltiplos loggers isolados).
        log_level (int): Nível mínimo de log para o arquivo (padrão: DEBUG).

    Returns:
        logging.Logger: Instância configurada e pronta para uso.
    """
    logger = logging.getLogger(name)

    # Evita duplicação de handlers se o logger já estiver configurado.
    if logger.handlers:
        return logger

    logger.setLevel(log_level)

    # Desabilita propagação para o logger root (evita logs duplicados no Flask)
    logger.propagate = False

    # O campo %(threadName)s identifica a thread do worker de buscas e as threads do Flask.
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(name)s:%(lineno)d] [%(threadName)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_filename = f"execution_{datetime.now().strftime('%Y%m%d')}.log"
    log_filepath = EXECUTION_LOGS_DIR / log_filename

    file_handler = RotatingFileHandler(
        log_filepath, maxBytes=5 * 1024 * 1024, backupCount=10, encoding="utf-8"  # 5 MB
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


logger = setup_logger("rpa_utils")


# --- Funções Auxiliares ---


def generate_task_id():
    """
    Gera um identificador curto para uma busca, no formato 'busca_a3f8b2e1'.
    Usado como prefixo nas linhas de log de uma mesma execução.
    """
    return f"busca_{uuid.uuid4().hex[:8]}"


def save_debug_screenshot(page, screenshot_path, task_id):
    """
    Salva uma screenshot de página inteira para depuração.

    Falhas ao salvar são apenas registradas: a screenshot é diagnóstico
    e nunca deve mascarar o erro original.

    Returns:
        bool: True se o arquivo foi gravado.
    """
    try:
        Path(screenshot_path).parent.mkdir(parents=True, exist_ok=True)
        page.screenshot(path=str(screenshot_path), full_page=True)
        logger.info(f"[{task_id}] Screenshot de depuração salva em: {screenshot_path}")
        return True
    except Exception as e:
        logger.error(f"[{task_id}] Falha ao salvar screenshot de depuração: {e}")
        return False


class CancellationToken:
    """
    Sinal de cancelamento compartilhável entre threads.

    Permite que o aplicativo hospedeiro interrompa a espera pelo login manual,
    que de outra forma não tem prazo.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
