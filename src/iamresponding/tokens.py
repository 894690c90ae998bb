"""Anti-forgery token scraping for the login page."""

from __future__ import annotations

import re
from typing import Protocol

from lxml import etree
from lxml import html as lxml_html

TOKEN_FIELD = "__RequestVerificationToken"


class TokenExtractor(Protocol):
    """Find the anti-forgery token in a login page.

    Returns ``None`` when the page carries no token and raises ``ValueError``
    when the page cannot be parsed at all.
    """

    def __call__(self, document: str | bytes, form_class: str) -> str | None: ...


class LxmlTokenExtractor:
    """Structured lookup: marked ``<form>`` -> direct child ``<input>`` -> ``value``."""

    def __call__(self, document: str | bytes, form_class: str) -> str | None:
        if not document or not document.strip():
            raise ValueError("Login page is empty")
        try:
            root = lxml_html.document_fromstring(document)
        except (etree.ParserError, etree.XMLSyntaxError) as exc:
            raise ValueError("Login page is not parseable HTML") from exc

        for form in root.iter("form"):
            if form_class not in form.classes:
                continue
            for field in form.findall("input"):
                if field.get("name") == TOKEN_FIELD:
                    return field.get("value", "")
        return None


class RegexTokenExtractor:
    """Pattern lookup over the raw markup.

    Only inputs between the opening tag of a form carrying the marker class and
    its closing tag are considered. Nesting inside that span is not checked.
    """

    _FORM = re.compile(r"<form\b([^>]*)>(.*?)</form\s*>", re.IGNORECASE | re.DOTALL)
    _CLASS = re.compile(r"""\bclass\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))""", re.IGNORECASE)
    _INPUT = re.compile(r"<input\b[^>]*>", re.IGNORECASE)
    _NAME = re.compile(r"""\bname\s*=\s*["']?([^"'\s>]+)""", re.IGNORECASE)
    _VALUE = re.compile(r"""\bvalue\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))""", re.IGNORECASE)

    def __call__(self, document: str | bytes, form_class: str) -> str | None:
        if isinstance(document, bytes):
            document = document.decode("utf-8", errors="replace")
        if not document.strip():
            raise ValueError("Login page is empty")

        for attributes, body in self._FORM.findall(document):
            if form_class not in _first_group(self._CLASS.search(attributes)).split():
                continue
            for tag in self._INPUT.findall(body):
                name = self._NAME.search(tag)
                if not name or name.group(1) != TOKEN_FIELD:
                    continue
                return _first_group(self._VALUE.search(tag))
        return None


def _first_group(match: re.Match[str] | None) -> str:
    if match is None:
        return ""
    return next((group for group in match.groups() if group is not None), "")


def extract_token(
    document: str | bytes,
    form_class: str = "login-form",
    extractor: TokenExtractor | None = None,
) -> str | None:
    """Return the anti-forgery token embedded in ``document``, if any."""
    return (extractor or LxmlTokenExtractor())(document, form_class)
