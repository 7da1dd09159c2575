# -*- coding: utf-8 -*-
"""
Módulo de Navegação no ContaAzul (rpa_contaazul/portal_navigator.py).

Responsabilidade:
1. Navegar entre as telas do ContaAzul (início, login, Ordens de Serviço).
2. Contornar falhas de navegação da SPA ajustando a rota via hash.
3. Confirmar que o campo de busca de OS está disponível.
"""
from pathlib import Path

from playwright.sync_api import (
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from rpa_contaazul.config_rpa import (
    ORDENS_SERVICO_HASH,
    SEARCH_INPUT_TIMEOUT,
    SELECTORS,
    URLS,
)
from rpa_contaazul.error_handler import ElementNotFoundError, NavigationError
from rpa_contaazul.utils import save_debug_screenshot, setup_logger

logger = setup_logger("rpa_portal_navigator")


class ContaAzulNavigator:
    """
    Encapsula a navegação dentro de uma aba do ContaAzul.
    """

    def __init__(self, page: Page, task_id: str):
        """
        Args:
            page (Page): Aba do Playwright.
            task_id (str): ID da tarefa para rastreamento nos logs.
        """
        self.page = page
        self.task_id = task_id

    def goto(self, url: str) -> None:
        """
        Navega até a URL aguardando a rede estabilizar.

        Raises:
            NavigationError: Se a navegação falhar ou estourar o tempo.
        """
        logger.debug(f"[{self.task_id}] Navegando para {url}")
        try:
            self.page.goto(url, wait_until="networkidle")
        except PlaywrightError as e:
            raise NavigationError(f"Falha ao navegar para {url}: {e}", e) from e

    def open_home(self) -> None:
        """Abre a página inicial do ContaAzul (a SPA se comporta melhor entrando pela raiz)."""
        logger.info(f"[{self.task_id}] 🧭 Abrindo o ContaAzul...")
        self.goto(URLS["base"])

    def open_login(self) -> None:
        self.goto(URLS["login"])

    def go_to_orders(self) -> None:
        """
        Navega até a tela de Ordens de Serviço.
        Se a navegação falhar, ajusta window.location.hash diretamente na página.
        """
        logger.info(f"[{self.task_id}] 🧭 Navegando para Ordens de Serviço...")
        try:
            self.goto(URLS["ordens_servico"])
        except NavigationError as e:
            logger.warning(f"[{self.task_id}] {e}. Tentando alterar a rota via hash...")
            try:
                self.page.evaluate(
                    "hash => { window.location.hash = hash; }", ORDENS_SERVICO_HASH
                )
            except PlaywrightError as hash_error:
                # A espera pelo campo de busca reporta a falha de forma mais útil
                logger.warning(
                    f"[{self.task_id}] Falha ao alterar a rota via hash: {hash_error}"
                )

    def wait_for_search_input(self, screenshot_path: Path) -> None:
        """
        Aguarda o campo de busca de OS.

        Args:
            screenshot_path (Path): Onde salvar a screenshot se o campo não aparecer.

        Raises:
            ElementNotFoundError: Se o campo não aparecer dentro do prazo.
        """
        selector = SELECTORS["ordens_servico"]["search_input"]
        try:
            self.page.wait_for_selector(selector, timeout=SEARCH_INPUT_TIMEOUT)
        except PlaywrightTimeoutError as e:
            msg = f"Timeout waiting for {selector}. Page URL: {self.page.url}"
            logger.error(f"[{self.task_id}] ❌ {msg}")
            save_debug_screenshot(self.page, screenshot_path, self.task_id)
            raise ElementNotFoundError(msg, e) from e

        logger.debug(f"[{self.task_id}] Campo de busca de OS disponível.")
