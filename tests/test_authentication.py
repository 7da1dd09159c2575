import threading
import time

import pytest
from playwright.sync_api import Error as PlaywrightError

from rpa_contaazul.authentication import ContaAzulAuthenticator, find_first_selector
from rpa_contaazul.config_rpa import SELECTORS, URLS
from rpa_contaazul.error_handler import LoginWaitCancelledError
from rpa_contaazul.utils import CancellationToken
from tests.fakes import FakePage

MARKER = SELECTORS["auth_marker"]


def inject_later(page, selector, delay=0.2):
    """Injeta o seletor na página depois de um atraso, registrando o instante."""
    injected = {}

    def _inject():
        injected["at"] = time.monotonic()
        page.add_selector(selector)

    timer = threading.Timer(delay, _inject)
    timer.start()
    return timer, injected


def test_already_logged_in_skips_login_page():
    page = FakePage(present={MARKER})

    assert ContaAzulAuthenticator(page, "t1").ensure_logged_in() is True
    assert URLS["login"] not in page.gotos
    assert page.typed == []


def test_no_credentials_blocks_until_marker_appears():
    page = FakePage()
    timer, injected = inject_later(page, MARKER)

    result = ContaAzulAuthenticator(page, "t2").ensure_logged_in()
    returned_at = time.monotonic()
    timer.join()

    assert result is True
    assert returned_at >= injected["at"]
    assert page.gotos == [URLS["login"]]
    # Sem credenciais nenhum campo é preenchido
    assert page.typed == []


def test_login_navigation_failure_is_not_fatal():
    page = FakePage(goto_errors={URLS["login"]: PlaywrightError("net::ERR_TIMED_OUT")})
    timer, _ = inject_later(page, MARKER, delay=0.05)

    assert ContaAzulAuthenticator(page, "t3").ensure_logged_in() is True
    timer.join()


def test_missing_login_fields_fall_back_to_manual_wait(credentials):
    page = FakePage(present={"div.login-form"})
    timer, injected = inject_later(page, MARKER)

    result = ContaAzulAuthenticator(page, "t4").ensure_logged_in()
    timer.join()

    assert result is True
    assert "at" in injected
    assert page.typed == []
    assert page.keys == []


def test_field_discovery_stops_at_first_match(credentials):
    login = SELECTORS["login"]
    page = FakePage(
        present={'input[name="email"]', 'input[type="password"]', 'button[type="submit"]'},
        on_click={'button[type="submit"]': [MARKER]},
    )

    assert ContaAzulAuthenticator(page, "t5").ensure_logged_in() is True

    # Email: primeiro candidato ausente, segundo encontrado, a busca para ali
    assert page.queried[:2] == login["email_candidates"][:2]
    assert page.queried[2] == login["password_candidates"][0]
    assert page.typed == [
        ('input[name="email"]', credentials["email"]),
        ('input[type="password"]', credentials["password"]),
    ]
    assert page.values['input[name="email"]'] == credentials["email"]
    assert page.clicks.count('button[type="submit"]') == 1
    assert page.keys == []


def test_find_first_selector_returns_none_when_nothing_matches():
    page = FakePage(present={"span"})
    candidates = SELECTORS["login"]["email_candidates"]

    assert find_first_selector(page, candidates) is None
    assert page.queried == candidates


def test_submit_falls_back_to_enter_key(credentials):
    page = FakePage(present={"input#email", "input#password"})

    def on_enter(key):
        page.keys.append(key)
        page.add_selector(MARKER)

    page.keyboard.press = on_enter

    assert ContaAzulAuthenticator(page, "t6").ensure_logged_in() is True
    assert page.keys == ["Enter"]


def test_unclickable_submit_candidate_is_skipped(credentials):
    page = FakePage(
        present={'input[type="email"]', 'input[type="password"]', 'button[type="submit"]', "button"},
        on_click={"button": [MARKER]},
    )
    page.unclickable.add('button[type="submit"]')

    assert ContaAzulAuthenticator(page, "t7").ensure_logged_in() is True
    assert "button" in page.clicks
    assert 'button[type="submit"]' not in page.clicks


def test_auto_login_timeout_degrades_to_manual_wait(credentials):
    page = FakePage(present={'input[type="email"]', 'input[type="password"]', 'button[type="submit"]'})
    timer, injected = inject_later(page, MARKER, delay=0.3)

    result = ContaAzulAuthenticator(page, "t8").ensure_logged_in()
    returned_at = time.monotonic()
    timer.join()

    assert result is True
    assert returned_at >= injected["at"]
    assert page.clicks.count('button[type="submit"]') == 1


def test_cancelled_manual_wait_raises():
    page = FakePage()
    token = CancellationToken()
    token.cancel()

    with pytest.raises(LoginWaitCancelledError):
        ContaAzulAuthenticator(page, "t9", cancel_token=token).ensure_logged_in()


def test_cancel_during_manual_wait_stops_polling():
    page = FakePage()
    token = CancellationToken()
    timer = threading.Timer(0.1, token.cancel)
    timer.start()

    with pytest.raises(LoginWaitCancelledError):
        ContaAzulAuthenticator(page, "t10", cancel_token=token).ensure_logged_in()
    timer.join()
    assert MARKER not in page.present


def test_hidden_marker_still_counts_as_logged_in():
    page = FakePage(present={MARKER})
    page.hidden.add(MARKER)

    assert ContaAzulAuthenticator(page, "t11").ensure_logged_in() is True
    assert page.gotos == []
