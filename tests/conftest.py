from pathlib import Path

from ana_scraper.config import AIRPORT_LIST_SCRIPT
from ana_scraper.exceptions import NavigationTimeoutError

AIRPORTS = [
    {"code": "TYO", "name": "Tokyo (All)"},
    {"code": "NRT", "name": "Tokyo (Narita)"},
    {"code": "SFO", "name": "San Francisco"},
    {"code": "JFK", "name": "New York (John F. Kennedy)"},
]


class FakeResponse:
    def __init__(self, status=200, url="https://aswbe-i.ana.co.jp/search", status_text="OK"):
        self.status = status
        self.url = url
        self.status_text = status_text

    @property
    def ok(self):
        return 200 <= self.status < 300


class FakeBrowser:
    """
    In-memory stand-in for BrowserPage.

    Page state is a set of visible selectors, a set of present selectors and
    a text table. Waits never sleep: they succeed or raise straight away.
    ``on_click`` hooks let a test change page state when a selector is
    clicked, the way a real submit would.
    """

    def __init__(self, visible=(), present=(), texts=None, checked=(), airports=None):
        self.visible = set(visible)
        self.present = set(present) | self.visible
        self.texts = dict(texts or {})
        self.checked = set(checked)
        self.airports = AIRPORTS if airports is None else airports
        self.html = "<html><body>results</body></html>"
        self.url = "https://aswbe-i.ana.co.jp/start"

        self.calls = []
        self.form_values = {}
        self.responses = {}
        self.on_click = {}

    def show(self, selector, text=None):
        self.visible.add(selector)
        self.present.add(selector)
        if text is not None:
            self.texts[selector] = text

    def hide(self, selector):
        self.visible.discard(selector)
        self.present.discard(selector)

    def called(self, name):
        return [args for method, args in self.calls if method == name]

    def _run_hook(self, selector):
        hook = self.on_click.get(selector)
        if hook:
            hook(self)

    async def navigate(self, url, wait_until="networkidle"):
        self.calls.append(("navigate", (url, wait_until)))
        self.url = url
        return FakeResponse(url=url)

    async def wait_for_visible(self, selector, timeout=None):
        self.calls.append(("wait_for_visible", (selector, timeout)))
        if selector not in self.visible:
            raise NavigationTimeoutError(f"{selector} not visible", selector=selector)

    async def wait_for_hidden(self, selector, timeout=None):
        self.calls.append(("wait_for_hidden", (selector, timeout)))
        if selector in self.visible:
            raise NavigationTimeoutError(f"{selector} still visible", selector=selector)

    async def click(self, selector):
        self.calls.append(("click", (selector,)))
        self._run_hook(selector)

    async def click_and_wait(self, selector, wait_until="networkidle"):
        self.calls.append(("click_and_wait", (selector,)))
        self._run_hook(selector)
        return self.responses.get(selector, FakeResponse())

    async def type_text(self, selector, text, delay=10):
        self.calls.append(("type_text", (selector, text, delay)))
        self.form_values[selector] = self.form_values.get(selector, "") + text

    async def clear_field(self, selector):
        self.calls.append(("clear_field", (selector,)))
        self.form_values[selector] = ""

    async def exists(self, selector):
        return selector in self.present

    async def is_visible(self, selector):
        return selector in self.visible

    async def is_checked(self, selector):
        return selector in self.checked

    async def read_text(self, selector, default=""):
        if selector not in self.present:
            return default
        return self.texts.get(selector, default)

    async def evaluate(self, expression, arg=None):
        self.calls.append(("evaluate", (expression, arg)))
        if expression == AIRPORT_LIST_SCRIPT:
            return self.airports
        return None

    async def fill_form(self, values):
        self.calls.append(("fill_form", (dict(values),)))
        self.form_values.update(values)
        return []

    async def delay(self, ms):
        self.calls.append(("delay", (ms,)))

    async def content(self):
        return self.html

    async def screenshot(self, path):
        self.calls.append(("screenshot", (str(path),)))
        Path(path).write_bytes(b"\x89PNG fake")


class FakeResultsSink:
    def __init__(self):
        self.saved = []
        self.structured = {}

    async def save_structured(self, name, data):
        self.saved.append(("structured", name))
        self.structured[name] = data

    async def save_raw_snapshot(self, name):
        self.saved.append(("snapshot", name))

    async def save_screenshot(self, name):
        self.saved.append(("screenshot", name))

    def names(self, kind):
        return [name for k, name in self.saved if k == kind]
