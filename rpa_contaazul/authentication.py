# -*- coding: utf-8 -*-
"""
Módulo de Autenticação (rpa_contaazul/authentication.py).

Responsabilidade:
1. Detectar se a aba já está autenticada no ContaAzul.
2. Tentar o login automático com as credenciais do .env, localizando os campos
   por listas de seletores alternativos.
3. Em qualquer falha, aguardar o login manual do operador: a aba nunca é
   devolvida sem autenticação.
"""
from typing import Iterable, Optional

from playwright.sync_api import (
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from rpa_contaazul.config_rpa import (
    LOGIN_PROBE_TIMEOUT,
    LOGIN_TIMEOUT,
    MANUAL_LOGIN_POLL_INTERVAL,
    SELECTORS,
    TYPING_DELAY,
    CredentialData,
    get_credentials,
)
from rpa_contaazul.error_handler import (
    AuthenticationTimeoutError,
    LoginWaitCancelledError,
    NavigationError,
)
from rpa_contaazul.portal_navigator import ContaAzulNavigator
from rpa_contaazul.utils import CancellationToken, setup_logger

logger = setup_logger("rpa_authentication")


def find_first_selector(page: Page, candidates: Iterable[str]) -> Optional[str]:
    """
    Retorna o primeiro seletor da lista que existe na página, ou None.
    A busca para na primeira correspondência.
    """
    for selector in candidates:
        if page.query_selector(selector):
            return selector
    return None


class ContaAzulAuthenticator:
    """
    Garante que uma aba esteja autenticada no ContaAzul.
    """

    def __init__(
        self,
        page: Page,
        task_id: str,
        cancel_token: Optional[CancellationToken] = None,
    ):
        """
        Args:
            page (Page): Aba do Playwright.
            task_id (str): ID da tarefa para rastreamento nos logs.
            cancel_token (CancellationToken, optional): Interrompe a espera pelo login manual.
        """
        self.page = page
        self.task_id = task_id
        self.cancel_token = cancel_token
        self.marker = SELECTORS["auth_marker"]

    def ensure_logged_in(self) -> bool:
        """
        Garante que a aba esteja autenticada.

        Returns:
            bool: Sempre True. Se o login automático não for possível, bloqueia
            até o operador entrar manualmente.

        Raises:
            LoginWaitCancelledError: Somente se o token de cancelamento for acionado
            durante a espera manual.
        """
        if self._is_logged_in(LOGIN_PROBE_TIMEOUT):
            logger.info(f"[{self.task_id}] Já autenticado (campo de busca presente).")
            return True

        try:
            ContaAzulNavigator(self.page, self.task_id).open_login()
        except NavigationError as e:
            logger.warning(f"[{self.task_id}] {e} (seguindo mesmo assim).")

        credentials = get_credentials()
        if credentials is None:
            logger.warning(
                f"[{self.task_id}] Sem credenciais no .env. Faça o login manualmente na aba aberta do Chrome. Aguardando..."
            )
            return self._wait_for_manual_login()

        try:
            return self._auto_login(credentials)
        except LoginWaitCancelledError:
            raise
        except AuthenticationTimeoutError as e:
            logger.warning(f"[{self.task_id}] {e} Aguardando login manual...")
        except Exception as e:
            logger.error(f"[{self.task_id}] Erro durante o login automático: {e}")
            logger.warning(f"[{self.task_id}] Faça o login manualmente na aba aberta do Chrome.")

        return self._wait_for_manual_login()

    def _is_logged_in(self, timeout: int) -> bool:
        try:
            # Basta o marcador existir no DOM, visível ou não
            self.page.wait_for_selector(self.marker, timeout=timeout, state="attached")
            return True
        except PlaywrightTimeoutError:
            return False

    def _auto_login(self, credentials: CredentialData) -> bool:
        """
        Preenche e envia o formulário de login.

        Raises:
            AuthenticationTimeoutError: Se a tela autenticada não aparecer após o envio.
        """
        login_selectors = SELECTORS["login"]
        email_selector = find_first_selector(self.page, login_selectors["email_candidates"])
        password_selector = find_first_selector(
            self.page, login_selectors["password_candidates"]
        )

        if not email_selector or not password_selector:
            logger.warning(
                f"[{self.task_id}] Não foi possível detectar os campos de login. Faça o login manualmente."
            )
            return self._wait_for_manual_login()

        logger.info(
            f"[{self.task_id}] 🔐 Login automático para '{credentials['email'][:4]}...' "
            f"(campos {email_selector} / {password_selector})."
        )
        self._type_into(email_selector, credentials["email"])
        self._type_into(password_selector, credentials["password"])
        self._submit(login_selectors["submit_candidates"])

        if not self._is_logged_in(LOGIN_TIMEOUT):
            raise AuthenticationTimeoutError(
                "Login automático não chegou à tela autenticada."
            )

        logger.info(f"[{self.task_id}] ✅ Login automático realizado (campo de busca presente).")
        return True

    def _type_into(self, selector: str, value: str):
        field = self.page.locator(selector)
        # Seleciona o conteúdo atual antes de limpar, como um operador faria
        try:
            field.click(click_count=3)
        except PlaywrightError:
            pass
        field.fill("")
        field.press_sequentially(value, delay=TYPING_DELAY)

    def _submit(self, candidates: Iterable[str]):
        for selector in candidates:
            element = self.page.query_selector(selector)
            if not element:
                continue
            try:
                element.click()
                logger.debug(f"[{self.task_id}] Formulário enviado via {selector}.")
                return
            except PlaywrightError as e:
                logger.debug(f"[{self.task_id}] Clique em {selector} falhou: {e}")

        logger.debug(f"[{self.task_id}] Nenhum botão de envio clicável. Enviando com Enter.")
        self.page.keyboard.press("Enter")

    def _wait_for_manual_login(self) -> bool:
        """
        Aguarda o marcador de tela autenticada sem prazo, verificando o token de
        cancelamento entre as tentativas.
        """
        while True:
            if self.cancel_token is not None and self.cancel_token.is_cancelled:
                logger.warning(f"[{self.task_id}] Espera pelo login manual cancelada.")
                raise LoginWaitCancelledError("Espera pelo login manual cancelada.")

            if self._is_logged_in(MANUAL_LOGIN_POLL_INTERVAL):
                logger.info(f"[{self.task_id}] ✅ Login manual detectado.")
                return True
