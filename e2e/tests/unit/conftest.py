"""
In-memory stand-ins for the browser so the engine can be tested without Chromium.

FakeSession: a static set of pages, one element list per selector.
FakeParaBank: a tiny simulation of the demo bank wired to the real selectors,
so the scenarios yaml runs end to end.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

from src.core.errors import InputError, LocatorError, NavigationError, StepTimeoutError
from src.core.scenario_loader import load_scenarios
from src.selectors import parabank_selectors as S


@dataclass
class FakeElement:
    # a list means successive reads (the last one sticks)
    text: Union[str, List[str]] = ""
    editable: bool = True
    clickable: bool = True
    go_to: Optional[str] = None
    value: str = ""
    reads: int = 0

    def read(self) -> str:
        if isinstance(self.text, list):
            cur = self.text[min(self.reads, len(self.text) - 1)]
            self.reads += 1
            return cur
        return self.text


class FakeSession:
    def __init__(self, pages: Dict[str, dict], start: Optional[str] = None) -> None:
        self.pages = pages
        self.current = start
        self.calls: List[tuple] = []

    def _page(self) -> dict:
        if self.current is None:
            raise NavigationError("nothing loaded yet")
        return self.pages[self.current]

    def navigate(self, url, timeout_ms):
        self.calls.append(("navigate", url))
        if url not in self.pages:
            raise NavigationError(f"could not load {url}")
        self.current = url

    def locate(self, selector, timeout_ms):
        self.calls.append(("locate", selector))
        matches = self._page()["elements"].get(selector, [])
        if len(matches) != 1:
            raise LocatorError(selector, len(matches))
        return matches[0]

    def fill(self, handle, value, timeout_ms):
        self.calls.append(("fill", value))
        if not handle.editable:
            raise InputError("element rejected input")
        handle.value = value

    def click(self, handle, timeout_ms):
        self.calls.append(("click", handle.go_to))
        if not handle.clickable:
            raise StepTimeoutError(f"element was not clickable within {timeout_ms}ms")
        if handle.go_to:
            self.current = handle.go_to

    def text_of(self, handle):
        return handle.read()

    def title(self):
        return self._page()["title"]

    def screenshot(self, path):
        Path(path).write_bytes(b"\x89PNG fake")

    def content(self):
        return f"<html><title>{self.title()}</title></html>"


class FakeParaBank:
    """Server side: the customer table every session shares."""

    def __init__(self) -> None:
        self.customers: Dict[str, dict] = {}

    def session(self) -> "FakeParaBankSession":
        return FakeParaBankSession(self)


REGISTER_FIELDS = {
    S.REG_FIRST_NAME: "first_name",
    S.REG_LAST_NAME: "last_name",
    S.REG_STREET: "street",
    S.REG_CITY: "city",
    S.REG_STATE: "state",
    S.REG_ZIP: "zip",
    S.REG_PHONE: "phone",
    S.REG_SSN: "ssn",
    S.REG_USERNAME: "username",
    S.REG_PASSWORD: "password",
    S.REG_REPEATED_PASSWORD: "repeated_password",
}


class FakeParaBankSession:
    """Browser side: page, form values and login cookie are per session."""

    def __init__(self, bank: FakeParaBank) -> None:
        self.bank = bank
        self.page: Optional[str] = None
        self.form: Dict[str, str] = {}
        self.user: Optional[str] = None
        self.status = ""
        self.calls: List[tuple] = []

    def _elements(self) -> Dict[str, str]:
        """selector -> text for whatever the current page shows."""
        if self.page is None:
            raise NavigationError("nothing loaded yet")
        els: Dict[str, str] = {}
        if self.user is None:
            els.update({S.LOGIN_USERNAME: "", S.LOGIN_PASSWORD: "", S.LOGIN_SUBMIT: "", S.REGISTER_LINK: "Register"})
        else:
            c = self.bank.customers[self.user]
            els.update({S.LOGOUT_LINK: "Log Out", S.WELCOME_TEXT: f"Welcome {c['first_name']} {c['last_name']}"})
        if self.page == "register":
            els.update({sel: "" for sel in REGISTER_FIELDS})
            els[S.REG_SUBMIT] = ""
            if self.status:
                els[S.STATUS_TEXT] = self.status
        elif self.page == "created":
            els[S.PAGE_TITLE_HEADING] = f"Welcome {self.user}"
            els[S.STATUS_TEXT] = "Your account was created successfully. You are now logged in."
        elif self.page == "error":
            els[S.ERROR_TEXT] = "The username and password could not be verified."
        return els

    def navigate(self, url, timeout_ms):
        self.calls.append(("navigate", url))
        if not url.endswith("index.htm"):
            raise NavigationError(f"could not load {url}")
        self.page = "index"

    def locate(self, selector, timeout_ms):
        self.calls.append(("locate", selector))
        if selector not in self._elements():
            raise LocatorError(selector, 0)
        return selector

    def fill(self, handle, value, timeout_ms):
        self.calls.append(("fill", handle, value))
        self.form[handle] = value

    def click(self, handle, timeout_ms):
        self.calls.append(("click", handle))
        if handle == S.REGISTER_LINK:
            self.page, self.form, self.status = "register", {}, ""
        elif handle == S.REG_SUBMIT:
            self._register()
        elif handle == S.LOGOUT_LINK:
            self.user, self.page = None, "index"
        elif handle == S.LOGIN_SUBMIT:
            c = self.bank.customers.get(self.form.get(S.LOGIN_USERNAME, ""))
            if c is not None and c["password"] == self.form.get(S.LOGIN_PASSWORD):
                self.user, self.page = c["username"], "overview"
            else:
                self.page = "error"

    def _register(self):
        data = {name: self.form.get(sel, "") for sel, name in REGISTER_FIELDS.items()}
        if data["username"] in self.bank.customers:
            self.status = "This username already exists."
            return
        self.bank.customers[data["username"]] = data
        self.user, self.page = data["username"], "created"

    def text_of(self, handle):
        return self._elements().get(handle, "")

    def title(self):
        return {
            "index": "ParaBank | Welcome | Online Banking",
            "register": "ParaBank | Register for Free Online Account Access",
            "created": "ParaBank | Customer Created",
            "overview": "ParaBank | Accounts Overview",
            "error": "ParaBank | Error",
        }[self.page]

    def screenshot(self, path):
        Path(path).write_bytes(b"\x89PNG fake")

    def content(self):
        return "<html></html>"


@pytest.fixture()
def bank():
    return FakeParaBank()


@pytest.fixture()
def bank_sessions(bank):
    """Suite session factory: a fresh browser session per case, one shared bank."""

    @contextmanager
    def factory(case):
        yield bank.session()

    return factory


@pytest.fixture()
def scenarios():
    counter = iter(range(1000))
    return load_scenarios(id_factory=lambda seed: f"u{next(counter):03d}")


@pytest.fixture()
def scenario_by_id(scenarios):
    return {s.id: s for s in scenarios}


@pytest.fixture()
def fake_session_cls():
    return FakeSession


@pytest.fixture()
def fake_element_cls():
    return FakeElement
