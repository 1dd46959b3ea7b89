"""Configure tests."""

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from conversation_archive.config import Settings
from conversation_archive.operations import page_scripts
from conversation_archive.operations.scripts import ScriptBundle


class FakeToggle:
    """Stand-in for a Playwright locator matched by text."""

    def __init__(self, visible: bool = True, fails: bool = False, on_click=None):
        self.visible = visible
        self.fails = fails
        self.on_click = on_click
        self.clicked = False

    async def is_visible(self) -> bool:
        return self.visible

    async def click(self, timeout: float | None = None) -> None:
        if self.fails:
            raise PlaywrightError("Element is not attached to the DOM")
        self.clicked = True
        if self.on_click is not None:
            self.on_click()


class FakeTextQuery:
    def __init__(self, toggles: list[FakeToggle]):
        self.toggles = toggles

    async def all(self) -> list[FakeToggle]:
        return list(self.toggles)


class FakePage:
    """Stand-in for a Playwright page recording every call in order."""

    def __init__(
        self,
        title: str | None = "Hello world",
        includes_math: bool = False,
        content: str = "<html><body>conversation</body></html>",
        ready: bool = True,
        goto_error: Exception | None = None,
        page_data: object = None,
        toggles: dict[str, list[FakeToggle]] | None = None,
    ):
        self.title = title
        self.includes_math = includes_math
        self.page_data = page_data if page_data is not None else {"content": content}
        self.ready = ready
        self.goto_error = goto_error
        self.toggles = toggles or {}
        self.calls: list[tuple[str, object]] = []
        self.serialization_options: dict | None = None
        self.closed = False

    async def add_init_script(self, script: str | None = None, path: str | None = None) -> None:
        self.calls.append(("add_init_script", script))

    async def goto(self, url: str, **kwargs) -> None:
        self.calls.append(("goto", url))
        if self.goto_error is not None:
            raise self.goto_error

    async def wait_for_selector(self, selector: str, timeout: float | None = None) -> None:
        self.calls.append(("wait_for_selector", selector))
        if not self.ready:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    async def wait_for_timeout(self, timeout: float) -> None:
        self.calls.append(("wait_for_timeout", timeout))

    def get_by_text(self, text: str) -> FakeTextQuery:
        self.calls.append(("get_by_text", text))
        return FakeTextQuery(self.toggles.get(text, []))

    async def evaluate(self, expression: str, arg: object = None) -> object:
        if expression == page_scripts.READ_TITLE:
            self.calls.append(("evaluate", "title"))
            if self.title is None:
                raise PlaywrightError("Cannot read properties of null (reading 'textContent')")
            return self.title
        if expression == page_scripts.HAS_CLASS:
            self.calls.append(("evaluate", "math"))
            return self.includes_math
        if expression == page_scripts.CLEAN_UP_PAGE:
            self.calls.append(("evaluate", "clean_up"))
            return None
        if expression == page_scripts.GET_PAGE_DATA:
            self.calls.append(("evaluate", "serialize"))
            self.serialization_options = arg
            return self.page_data
        raise AssertionError(f"Unexpected script: {expression}")

    async def close(self) -> None:
        self.calls.append(("close", None))
        self.closed = True


class FakeBrowser:
    """Stand-in for a Playwright browser handing out prepared pages."""

    def __init__(self, *pages: FakePage):
        self.pages = list(pages)
        self.new_page_kwargs: list[dict] = []

    async def new_page(self, **kwargs) -> FakePage:
        self.new_page_kwargs.append(kwargs)
        return self.pages.pop(0)


@pytest.fixture
def fake_page():
    """Factory for fake conversation pages."""
    return FakePage


@pytest.fixture
def fake_browser():
    """Factory for fake browsers."""
    return FakeBrowser


@pytest.fixture
def fake_toggle():
    """Factory for fake expand toggles."""
    return FakeToggle


@pytest.fixture
def script_bundle():
    """Minimal SingleFile scripts."""
    return ScriptBundle(
        hook_script="/* hook */",
        script="/* single-file */",
        zip_script="/* zip */",
    )


@pytest.fixture
def workspace(tmp_path):
    """Create a workspace with markdown files linking conversations."""
    root = tmp_path / "workspace"
    (root / "notes").mkdir(parents=True)

    (root / "README.md").write_text(
        "# Prompts\n\n"
        "- [Sorting](https://gemini.google.com/share/abc123)\n"
        "- https://g.co/gemini/share/def456 and again https://gemini.google.com/share/abc123\n"
    )
    (root / "notes" / "ideas.md").write_text(
        "See https://gemini.google.com/share/ghi789/ for details.\n"
    )
    (root / "notes" / "ignored.txt").write_text("https://gemini.google.com/share/txt000\n")

    return root


@pytest.fixture
def settings(tmp_path, workspace, monkeypatch):
    """Settings pointing at the temporary workspace."""
    monkeypatch.chdir(tmp_path)
    return Settings(
        workspace_root=workspace,
        archive_dir=workspace / "conversations",
        report_file=workspace / ".git" / "commit-msg",
        ready_timeout=1,
        settle_delay=0,
    )
