# -*- coding: utf-8 -*-
"""
Módulo de Sessão do Navegador (rpa_contaazul/browser_session.py).

Responsabilidade:
1. Obter um navegador utilizável, preferindo se conectar a um Chrome já aberto
   (depuração remota) para abrir as buscas como novas abas.
2. Sem Chrome acessível, iniciar um Chrome local com perfil persistente,
   para que o login no ContaAzul sobreviva entre execuções.
3. Garantir no máximo uma sessão por holder (memoização segura entre threads).
"""
import threading
from typing import Callable, Optional

from playwright.sync_api import (
    BrowserContext,
    Error as PlaywrightError,
    Playwright,
    sync_playwright,
)
from playwright_stealth import Stealth

from rpa_contaazul.config_rpa import (
    BROWSER_ARGS,
    DEFAULT_REMOTE_DEBUGGING_URL,
    USER_DATA_DIR,
    SessionSettings,
    candidate_endpoints,
    get_session_settings,
)
from rpa_contaazul.error_handler import BrowserConnectionError, ConfigurationError
from rpa_contaazul.utils import setup_logger

logger = setup_logger("rpa_browser_session")


def _start_playwright() -> Playwright:
    return sync_playwright().start()


class BrowserSessionHolder:
    """
    Holder da sessão do navegador, inicializado sob demanda.

    Criado pelo chamador e injetado no orquestrador; a primeira aquisição
    bem-sucedida é reaproveitada até o fim do processo.
    """

    def __init__(
        self,
        settings: Optional[SessionSettings] = None,
        playwright_factory: Optional[Callable[[], Playwright]] = None,
    ):
        """
        Args:
            settings (dict, optional): 'remote_url' e 'executable_path'. Se omitido,
                é lido do ambiente no momento da aquisição.
            playwright_factory (Callable, optional): Inicia o driver do Playwright.
        """
        self._settings = settings
        self._playwright_factory = playwright_factory or _start_playwright
        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self._lock = threading.Lock()

    @property
    def is_acquired(self) -> bool:
        return self._context is not None

    def acquire(self) -> BrowserContext:
        """
        Retorna o contexto do navegador, conectando ou iniciando o Chrome na primeira chamada.

        Raises:
            ConfigurationError: Nenhum endpoint respondeu e não há executável configurado.
        """
        if self._context is not None:
            return self._context

        with self._lock:
            # Outra thread pode ter concluído a aquisição enquanto esperávamos o lock
            if self._context is not None:
                return self._context

            settings = self._settings if self._settings is not None else get_session_settings()

            if self._playwright is None:
                self._playwright = self._playwright_factory()

            for url in candidate_endpoints(settings.get("remote_url")):
                try:
                    self._context = self._connect(url)
                    return self._context
                except BrowserConnectionError as e:
                    logger.warning(str(e))

            executable_path = settings.get("executable_path")
            if not executable_path:
                self._stop_playwright()
                raise ConfigurationError(
                    "Nenhum Chrome acessível via depuração remota e CHROME_EXECUTABLE_PATH não definido. "
                    "Defina CHROME_EXECUTABLE_PATH no .env ou inicie o Chrome com "
                    f"--remote-debugging-port=9222 ({DEFAULT_REMOTE_DEBUGGING_URL})."
                )

            try:
                self._context = self._launch(executable_path)
            except PlaywrightError as e:
                self._stop_playwright()
                raise ConfigurationError(
                    f"Falha ao iniciar o Chrome em '{executable_path}': {e}", e
                ) from e
            return self._context

    def _connect(self, url: str) -> BrowserContext:
        """Conecta a um Chrome já aberto e reutiliza o contexto existente (cookies do operador)."""
        logger.info(f"Tentando conectar ao Chrome existente em {url} ...")
        try:
            browser = self._playwright.chromium.connect_over_cdp(url)
        except PlaywrightError as e:
            raise BrowserConnectionError(f"Conexão com {url} falhou: {e}", e) from e

        context = browser.contexts[0] if browser.contexts else browser.new_context()
        logger.info(f"✅ Conectado ao Chrome via depuração remota: {url}")
        return context

    def _launch(self, executable_path: str) -> BrowserContext:
        logger.info(f"🚀 Iniciando novo Chrome em: {executable_path}")
        context = self._playwright.chromium.launch_persistent_context(
            str(USER_DATA_DIR),
            executable_path=executable_path,
            headless=False,
            args=BROWSER_ARGS,
            no_viewport=True,
        )

        Stealth(
            navigator_languages_override=("pt-BR", "pt"),
            navigator_vendor_override="Google Inc.",
        ).apply_stealth_sync(context)
        context.add_init_script(
            "Object.defineProperty(navigator, 'webdriver', {get: () => undefined})"
        )

        logger.info(f"Chrome iniciado com perfil persistente em {USER_DATA_DIR}")
        return context

    def _stop_playwright(self):
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.debug(f"Falha ao encerrar o Playwright: {e}")
            self._playwright = None

    def close(self):
        """
        Esquece a sessão e encerra o driver do Playwright.
        Um Chrome conectado via depuração remota continua aberto.
        """
        with self._lock:
            self._context = None
            self._stop_playwright()
