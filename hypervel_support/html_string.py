"""HTML that should be rendered as-is."""

from __future__ import annotations


class HtmlString:
    """A string of HTML that template escaping must leave untouched.

    ``__html__`` makes instances recognised as safe markup by Jinja2 and
    MarkupSafe.
    """

    def __init__(self, html: str = "") -> None:
        self.html = html

    def to_html(self) -> str:
        return self.html

    def is_empty(self) -> bool:
        return self.html == ""

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def __html__(self) -> str:
        return self.to_html()

    def __str__(self) -> str:
        return self.to_html() or ""

    def __repr__(self) -> str:
        return f"HtmlString({self.html!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HtmlString):
            return self.html == other.html
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.html)
