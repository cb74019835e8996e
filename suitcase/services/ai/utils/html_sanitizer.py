"""
Chapter HTML Sanitizer

Generated chapter text is model output rendered straight into the reader, so
it is reduced to an allow-list before it leaves the service: <h3> headings and
<p> paragraphs, no attributes.
"""
import re

from bs4 import BeautifulSoup, Comment


ALLOWED_TAGS = {"h3", "p"}
HEADING_TAGS = {"h1", "h2", "h4", "h5", "h6"}
# Removed together with their content
DROPPED_TAGS = ["script", "style", "iframe", "object", "embed", "template", "noscript", "head", "title"]

_BLANK_LINES_RE = re.compile(r"\n\s*\n")


def _wrap_plain_text(soup: BeautifulSoup) -> str:
    """Turn tag-less text into <p> paragraphs split on blank lines."""
    text = soup.get_text()
    out = BeautifulSoup("", "html.parser")
    for block in _BLANK_LINES_RE.split(text):
        block = " ".join(block.split())
        if block:
            paragraph = out.new_tag("p")
            paragraph.string = block
            out.append(paragraph)
    return str(out)


def sanitize_chapter_html(fragment: str) -> str:
    """
    Reduce an HTML fragment to headings and paragraphs.

    Args:
        fragment: HTML produced by a model

    Returns:
        Sanitized HTML; empty string if nothing readable remains

    Examples:
        >>> sanitize_chapter_html('<h1 class="x">One</h1><script>x()</script><p>Hi <em>there</em></p>')
        '<h3>One</h3><p>Hi there</p>'
    """
    soup = BeautifulSoup(fragment, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name in HEADING_TAGS:
            tag.name = "h3"
        if tag.name in ALLOWED_TAGS:
            tag.attrs = {}
        else:
            tag.unwrap()

    if not soup.find(list(ALLOWED_TAGS)):
        return _wrap_plain_text(soup)
    return str(soup).strip()


__all__ = [
    "sanitize_chapter_html",
]
