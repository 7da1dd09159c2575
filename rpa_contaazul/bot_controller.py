# -*- coding: utf-8 -*-
"""
Módulo Orquestrador do Robô (rpa_contaazul/bot_controller.py).

Responsabilidade:
1. Orquestrar a busca de uma OS no ContaAzul (Sessão -> Nova aba -> Login -> Busca).
2. Converter toda falha em um resultado estruturado: o chamador nunca recebe exceção.
3. Serializar buscas concorrentes numa única thread dona da sessão do Playwright.
"""
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from rpa_contaazul.authentication import ContaAzulAuthenticator
from rpa_contaazul.browser_session import BrowserSessionHolder
from rpa_contaazul.config_rpa import (
    DEBUG_SCREENSHOTS_DIR,
    DEFAULT_TIMEOUT,
    RESULT_SETTLE_DELAY,
    SCREENSHOT_FILES,
    SELECTORS,
    TYPING_DELAY,
    VIEWPORT,
)
from rpa_contaazul.error_handler import ElementNotFoundError
from rpa_contaazul.portal_navigator import ContaAzulNavigator
from rpa_contaazul.utils import (
    CancellationToken,
    generate_task_id,
    save_debug_screenshot,
    setup_logger,
)

logger = setup_logger("rpa_bot_controller")


class ContaAzulBot:
    """
    Classe principal do Robô: abre uma aba nova no Chrome compartilhado e
    pesquisa uma Ordem de Serviço pelo número.
    """

    def __init__(
        self,
        session_holder: BrowserSessionHolder,
        task_id: str,
        cancel_token: Optional[CancellationToken] = None,
        screenshots_dir: Path = DEBUG_SCREENSHOTS_DIR,
    ):
        """
        Args:
            session_holder (BrowserSessionHolder): Sessão compartilhada do navegador.
            task_id (str): ID único para rastrear a execução nos logs.
            cancel_token (CancellationToken, optional): Interrompe a espera pelo login manual.
            screenshots_dir (Path): Diretório das screenshots de diagnóstico.
        """
        self.session_holder = session_holder
        self.task_id = task_id
        self.cancel_token = cancel_token
        self.screenshots_dir = Path(screenshots_dir)

    def search_os(self, numero) -> dict:
        """
        Pesquisa a OS no ContaAzul. A aba fica aberta para o operador ver o resultado.

        Args:
            numero: Número da OS (convertido para texto).

        Returns:
            dict: {'ok': True, 'message': ...} ou {'ok': False, 'error': ...}.
        """
        logger.info(f"[{self.task_id}] 🔎 Iniciando busca da OS {numero}.")

        try:
            context = self.session_holder.acquire()
            page = context.new_page()
        except Exception as e:
            logger.error(f"[{self.task_id}] Não foi possível obter o navegador: {e}")
            return {"ok": False, "error": str(e)}

        try:
            page.set_default_timeout(DEFAULT_TIMEOUT)
            page.set_viewport_size(VIEWPORT)

            navigator = ContaAzulNavigator(page, self.task_id)
            navigator.open_home()

            auth = ContaAzulAuthenticator(page, self.task_id, self.cancel_token)
            auth.ensure_logged_in()

            navigator.go_to_orders()
            navigator.wait_for_search_input(
                self.screenshots_dir / SCREENSHOT_FILES["search_input_missing"]
            )

            self._fill_and_search(page, str(numero))

            # Pausa apenas para o resultado renderizar diante do operador
            page.wait_for_timeout(RESULT_SETTLE_DELAY)

            logger.info(f"[{self.task_id}] ✅ Busca da OS {numero} executada.")
            return {"ok": True, "message": f"Search executed for {numero}"}

        except Exception as e:
            logger.exception(f"[{self.task_id}] Erro na busca da OS {numero}: {e}")
            save_debug_screenshot(
                page, self.screenshots_dir / SCREENSHOT_FILES["search_error"], self.task_id
            )
            return {"ok": False, "error": str(e) or e.__class__.__name__}

    def _fill_and_search(self, page, text: str):
        selectors = SELECTORS["ordens_servico"]

        search_input = page.locator(selectors["search_input"])
        search_input.click(click_count=3)
        search_input.fill("")
        search_input.press_sequentially(text, delay=TYPING_DELAY)

        search_button = page.query_selector(selectors["search_button"])
        if not search_button:
            raise ElementNotFoundError(f"{selectors['search_button']} button not found")
        search_button.click()


def run_search_process(
    numero,
    session_holder: BrowserSessionHolder,
    task_id: Optional[str] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> dict:
    """
    Função de ponto de entrada para uma busca.
    Cria uma instância do ContaAzulBot e executa o fluxo.
    """
    bot = ContaAzulBot(session_holder, task_id or generate_task_id(), cancel_token)
    return bot.search_os(numero)


class SearchWorker:
    """
    Executa as buscas em uma única thread.

    Os objetos do Playwright (API síncrona) pertencem à thread que os criou,
    então todas as buscas usam a mesma thread e o mesmo holder de sessão.
    Buscas sobrepostas entram na fila; cada uma abre sua própria aba e recebe
    seu próprio token de cancelamento.
    """

    def __init__(self, session_holder: Optional[BrowserSessionHolder] = None):
        self.session_holder = session_holder or BrowserSessionHolder()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="contaazul")
        self._pending = {}
        self._pending_lock = threading.Lock()

    def submit(
        self,
        numero,
        task_id: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Future:
        token = cancel_token or CancellationToken()
        with self._pending_lock:
            future = self._executor.submit(
                run_search_process, numero, self.session_holder, task_id, token
            )
            self._pending[future] = token
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future):
        with self._pending_lock:
            self._pending.pop(future, None)

    def cancel_pending(self):
        """
        Cancela as buscas ainda na fila e interrompe a espera pelo login manual
        da busca em andamento. Buscas submetidas depois disso não são afetadas.
        """
        with self._pending_lock:
            pending = list(self._pending.items())
        for future, token in pending:
            future.cancel()
            token.cancel()
        if pending:
            logger.warning(f"{len(pending)} busca(s) pendente(s) cancelada(s).")

    def shutdown(self, close_session: bool = True, cancel_pending: bool = False):
        """
        Aguarda as buscas pendentes e, opcionalmente, encerra a sessão na thread do worker.

        Args:
            close_session (bool): Fecha o navegador/Playwright na thread do worker.
            cancel_pending (bool): Cancela antes as buscas pendentes, para que uma
                espera pelo login manual não bloqueie o encerramento.
        """
        if cancel_pending:
            self.cancel_pending()
        if close_session:
            self._executor.submit(self.session_holder.close).result()
        self._executor.shutdown(wait=True)
