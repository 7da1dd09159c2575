# -*- coding: utf-8 -*-
"""
Módulo de Configuração do RPA.

Centraliza constantes, URLs, caminhos de diretórios e seletores CSS
usados na automação do ContaAzul.
Os valores que dependem do ambiente (endpoint de depuração remota, caminho
do Chrome e credenciais) são lidos sob demanda, a cada tentativa.
"""
from typing import Dict, Any, List, Optional

import os
from pathlib import Path
from dotenv import load_dotenv

# Carrega as variáveis de ambiente do arquivo .env na raiz
load_dotenv()

# --- Diretórios do Projeto ---
PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOGS_DIR = PROJECT_ROOT / "rpa_logs"
EXECUTION_LOGS_DIR = LOGS_DIR / "execution_logs"
DEBUG_SCREENSHOTS_DIR = LOGS_DIR / "debug_screenshots"
LOGS_DIR.mkdir(exist_ok=True)
EXECUTION_LOGS_DIR.mkdir(exist_ok=True)
DEBUG_SCREENSHOTS_DIR.mkdir(exist_ok=True)

# Perfil persistente do Chrome: mantém os cookies de sessão entre execuções
USER_DATA_DIR = PROJECT_ROOT / "chrome_user_data"


# --- Configurações do ContaAzul ---

CONTA_AZUL_BASE = os.getenv("CONTA_AZUL_BASE_URL", "https://app.contaazul.com")

# Rota SPA da tela de Ordens de Serviço (usada também no fallback via hash)
ORDENS_SERVICO_HASH = "#/ordens-de-servico"

URLS: Dict[str, str] = {
    "base": CONTA_AZUL_BASE,
    "login": f"{CONTA_AZUL_BASE}/login",
    "ordens_servico": f"{CONTA_AZUL_BASE}/{ORDENS_SERVICO_HASH}",
}

# Tipos auxiliares
CredentialData = Dict[str, str]
SessionSettings = Dict[str, Optional[str]]


# --- Configurações do Chrome / Playwright ---

# Endpoint padrão do Chrome iniciado com --remote-debugging-port=9222
DEFAULT_REMOTE_DEBUGGING_URL = "http://127.0.0.1:9222"

BROWSER_ARGS = [
    "--start-maximized",
    "--no-sandbox",
    "--disable-setuid-sandbox",
]

VIEWPORT: Dict[str, int] = {"width": 1280, "height": 900}

# --- Timeouts (em milissegundos) ---
DEFAULT_TIMEOUT = int(os.getenv("RPA_DEFAULT_TIMEOUT", "20000"))
LOGIN_TIMEOUT = int(os.getenv("RPA_LOGIN_TIMEOUT", "20000"))
LOGIN_PROBE_TIMEOUT = 5000
SEARCH_INPUT_TIMEOUT = 15000
# Intervalo entre verificações durante a espera pelo login manual
MANUAL_LOGIN_POLL_INTERVAL = 1000
# Pausa após a busca para o operador ver o resultado (não é uma sincronização)
RESULT_SETTLE_DELAY = 1500
# Atraso entre teclas na digitação
TYPING_DELAY = 60

# --- SELETORES (Mapeamento do DOM) ---
SELECTORS: Dict[str, Any] = {
    # Elemento que só existe em telas autenticadas
    "auth_marker": "#workOrderTextualSearch",
    "login": {
        # Listas ordenadas: a primeira correspondência vence
        "email_candidates": [
            'input[type="email"]',
            'input[name="email"]',
            "input#email",
            'input[id*="email"]',
        ],
        "password_candidates": [
            'input[type="password"]',
            'input[name="password"]',
            "input#password",
            'input[id*="password"]',
        ],
        "submit_candidates": [
            'button[type="submit"]',
            "button.login-button",
            "button.btn-primary",
            "button",
        ],
    },
    "ordens_servico": {
        "search_input": "#workOrderTextualSearch",
        "search_button": "#searchWorkOrder",
    },
}

# Screenshots de diagnóstico (nomes fixos, sobrescritos a cada falha)
SCREENSHOT_FILES: Dict[str, str] = {
    "search_input_missing": "workorder_search_missing.png",
    "search_error": "search_error.png",
}


# ----------------------------------------------------------------------
# LEITURA DO AMBIENTE (feita a cada chamada, não na importação)
# ----------------------------------------------------------------------


def _normalize_endpoint(value: str) -> str:
    """Aceita 'host:porta' e devolve uma URL http completa."""
    value = value.strip()
    if "://" not in value:
        value = f"http://{value}"
    return value.rstrip("/")


def get_remote_debugging_url() -> Optional[str]:
    """
    Endpoint de depuração remota configurado pelo operador, se houver.
    CHROME_REMOTE_DEBUGGING_URL tem prioridade sobre CHROME_REMOTE_DEBUGGING_HOST.
    """
    value = os.getenv("CHROME_REMOTE_DEBUGGING_URL") or os.getenv(
        "CHROME_REMOTE_DEBUGGING_HOST"
    )
    if not value or not value.strip():
        return None
    return _normalize_endpoint(value)


def get_executable_path() -> Optional[str]:
    value = os.getenv("CHROME_EXECUTABLE_PATH")
    return value.strip() if value and value.strip() else None


def get_session_settings() -> SessionSettings:
    """
    Configuração usada pelo BrowserSessionHolder para conectar ou iniciar o Chrome.

    Retorno: dicionário com 'remote_url' e 'executable_path' (ambos opcionais).
    """
    return {
        "remote_url": get_remote_debugging_url(),
        "executable_path": get_executable_path(),
    }


def candidate_endpoints(remote_url: Optional[str]) -> List[str]:
    """
    Lista ordenada de endpoints a tentar: o configurado primeiro, depois o padrão local.
    """
    endpoints: List[str] = []
    if remote_url:
        endpoints.append(_normalize_endpoint(remote_url))
    if DEFAULT_REMOTE_DEBUGGING_URL not in endpoints:
        endpoints.append(DEFAULT_REMOTE_DEBUGGING_URL)
    return endpoints


def get_credentials() -> Optional[CredentialData]:
    """
    Credenciais do operador no ContaAzul.

    Retorno: {'email': ..., 'password': ...} ou None se alguma estiver ausente
    (nesse caso o robô aguarda o login manual).
    """
    email = os.getenv("CONTA_AZUL_EMAIL")
    password = os.getenv("CONTA_AZUL_PASSWORD")
    if not email or not password:
        return None
    return {"email": email, "password": password}


# --- Validação Básica ---
def validate_config():
    warnings = []

    if not get_remote_debugging_url() and not get_executable_path():
        warnings.append(
            f"Nenhum endpoint remoto nem CHROME_EXECUTABLE_PATH definidos "
            f"(será tentado apenas {DEFAULT_REMOTE_DEBUGGING_URL})."
        )

    if get_credentials() is None:
        warnings.append(
            "CONTA_AZUL_EMAIL ou CONTA_AZUL_PASSWORD não definidos: o login será manual."
        )

    if warnings:
        print(f"⚠️  Aviso de Configuração RPA: {' '.join(warnings)}")


try:
    validate_config()
except Exception as e:
    print(f"⚠️ Configuração RPA Inválida: {e}")
