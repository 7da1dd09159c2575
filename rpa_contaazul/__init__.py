# -*- coding: utf-8 -*-
"""
Módulo RPA - Busca de Ordens de Serviço no ContaAzul.

Este pacote contém a automação que abre uma aba no Chrome do operador,
garante o login no ContaAzul e pesquisa uma OS pelo número.
"""

__version__ = "1.0.0"

from rpa_contaazul.config_rpa import URLS, get_credentials, get_session_settings
from rpa_contaazul.browser_session import BrowserSessionHolder
from rpa_contaazul.bot_controller import ContaAzulBot, SearchWorker, run_search_process
from rpa_contaazul.utils import CancellationToken, setup_logger, generate_task_id

__all__ = [
    "URLS",
    "get_credentials",
    "get_session_settings",
    "BrowserSessionHolder",
    "ContaAzulBot",
    "SearchWorker",
    "run_search_process",
    "CancellationToken",
    "setup_logger",
    "generate_task_id",
]
