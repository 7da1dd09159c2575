"""Fakes em memória do Playwright usados pelos testes do robô."""
import threading
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError


class FakeElement:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    def click(self):
        if self.selector in self.page.unclickable:
            raise PlaywrightError(f"Element {self.selector} is not clickable")
        self.page.record_click(self.selector)


class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    def click(self, click_count=1):
        self.page.record_click(self.selector)

    def fill(self, value):
        self.page.values[self.selector] = value

    def press_sequentially(self, text, delay=None):
        self.page.typed.append((self.selector, text))
        self.page.values[self.selector] = self.page.values.get(self.selector, "") + text


class FakeKeyboard:
    def __init__(self, page):
        self.page = page

    def press(self, key):
        self.page.keys.append(key)


class FakePage:
    """
    Aba em memória: 'present' é o conjunto de seletores existentes no DOM.
    Registra navegações, cliques, textos digitados e screenshots.
    """

    def __init__(self, present=(), url="about:blank", on_goto=None, goto_errors=None, on_click=None):
        self.present = set(present)
        self.url = url
        self.on_goto = on_goto or {}
        self.goto_errors = goto_errors or {}
        self.on_click = on_click or {}
        self.unclickable = set()
        # Seletores presentes no DOM, mas invisíveis
        self.hidden = set()
        self.evaluate_error = None

        self.gotos = []
        self.clicks = []
        self.typed = []
        self.values = {}
        self.keys = []
        self.queried = []
        self.waits = []
        self.evaluated = []
        self.screenshots = []
        self.settle_delays = []
        self.default_timeout = None
        self.viewport = None
        self.closed = False

        self.keyboard = FakeKeyboard(self)
        self._cond = threading.Condition()

    def add_selector(self, selector):
        with self._cond:
            self.present.add(selector)
            self._cond.notify_all()

    def record_click(self, selector):
        self.clicks.append(selector)
        for added in self.on_click.get(selector, ()):
            self.add_selector(added)

    def goto(self, url, wait_until=None, timeout=None):
        self.gotos.append(url)
        if url in self.goto_errors:
            raise self.goto_errors[url]
        self.url = url
        if url in self.on_goto:
            with self._cond:
                self.present = set(self.on_goto[url])

    def _matches(self, selector, state):
        if selector not in self.present:
            return False
        return state == "attached" or selector not in self.hidden

    def wait_for_selector(self, selector, timeout=None, state=None):
        self.waits.append((selector, timeout))
        with self._cond:
            if not self._matches(selector, state):
                # Espera curta e real: permite que outra thread injete o seletor
                self._cond.wait(0.01)
            if self._matches(selector, state):
                return FakeElement(self, selector)
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def query_selector(self, selector):
        self.queried.append(selector)
        if selector in self.present:
            return FakeElement(self, selector)
        return None

    def locator(self, selector):
        return FakeLocator(self, selector)

    def evaluate(self, expression, arg=None):
        self.evaluated.append((expression, arg))
        if self.evaluate_error:
            raise self.evaluate_error
        if isinstance(arg, str) and arg.startswith("#"):
            self.url = self.url.split("#")[0] + arg

    def screenshot(self, path=None, full_page=False):
        Path(path).write_bytes(b"\x89PNG fake")
        self.screenshots.append(str(path))

    def wait_for_timeout(self, timeout):
        self.settle_delays.append(timeout)

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_viewport_size(self, size):
        self.viewport = size

    def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, pages=None):
        self._pending = list(pages or [])
        self.pages = []
        self.init_scripts = []
        self.page_threads = []

    def new_page(self):
        page = self._pending.pop(0) if self._pending else FakePage()
        self.pages.append(page)
        self.page_threads.append(threading.current_thread().name)
        return page

    def add_init_script(self, script=None, path=None):
        self.init_scripts.append(script)


class FakeBrowser:
    def __init__(self, contexts=None):
        self.contexts = list(contexts or [])
        self.created_contexts = []

    def new_context(self):
        context = FakeContext()
        self.created_contexts.append(context)
        self.contexts.append(context)
        return context


class FakeChromium:
    def __init__(self, reachable=None):
        self.reachable = dict(reachable or {})
        self.connect_attempts = []
        self.launches = []
        self._lock = threading.Lock()

    def connect_over_cdp(self, endpoint_url, **kwargs):
        with self._lock:
            self.connect_attempts.append(endpoint_url)
        if endpoint_url not in self.reachable:
            raise PlaywrightError(f"connect ECONNREFUSED {endpoint_url}")
        return self.reachable[endpoint_url]

    def launch_persistent_context(self, user_data_dir, **kwargs):
        context = FakeContext()
        self.launches.append({"user_data_dir": user_data_dir, **kwargs})
        return context


class FakePlaywright:
    def __init__(self, chromium):
        self.chromium = chromium
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeSessionHolder:
    def __init__(self, context=None, error=None):
        self.context = context
        self.error = error
        self.acquire_calls = 0
        self.closed = False

    @property
    def is_acquired(self):
        return self.context is not None and self.acquire_calls > 0

    def acquire(self):
        self.acquire_calls += 1
        if self.error:
            raise self.error
        return self.context

    def close(self):
        self.closed = True


