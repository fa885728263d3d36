"""Markdown to HTML conversion for assistant chat bubbles."""

import html
import re

_CODE_BLOCK = re.compile(r"```[\w+-]*\n?([\s\S]*?)```")
_INLINE_CODE = re.compile(r"`([^`\n]+)`")
_PLACEHOLDER = re.compile(r"\x00(\d+)\x00")

_HEADING = re.compile(r"^(#{1,6})\s+(.+)$")
_BULLET = re.compile(r"^\s*[-*+]\s+(.*)$")
_NUMBERED = re.compile(r"^\s*\d+[.)]\s+(.*)$")

_BOLD = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC = re.compile(r"(?<![\w*])\*(?!\s)([^*\n]+?)\*|(?<!\w)_([^_\n]+)_(?!\w)")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")


def _link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2)
    if url.lower().startswith(("javascript:", "data:", "vbscript:")):
        return match.group(0)
    url = url.replace('"', "&quot;")
    return f'<a href="{url}" target="_blank" rel="noopener">{label}</a>'


def _inline(text: str) -> str:
    text = _BOLD.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", text)
    text = _ITALIC.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", text)
    return _LINK.sub(_link, text)


def _render_lines(lines: list[str]) -> str:
    out: list[str] = []
    open_list: str | None = None
    prev_plain = False

    for line in lines:
        item = _BULLET.match(line) or _NUMBERED.match(line)
        tag = None
        if item:
            tag = "ul" if item.re is _BULLET else "ol"

        if tag != open_list:
            if open_list:
                out.append(f"</{open_list}>")
            if tag:
                out.append(f"<{tag}>")
            open_list = tag

        if item:
            out.append(f"<li>{_inline(item.group(1))}</li>")
            prev_plain = False
            continue

        heading = _HEADING.match(line)
        if heading:
            level = len(heading.group(1))
            out.append(f"<h{level}>{_inline(heading.group(2))}</h{level}>")
            prev_plain = False
            continue

        if prev_plain:
            out.append("<br>")
        out.append(_inline(line))
        prev_plain = True

    if open_list:
        out.append(f"</{open_list}>")
    return "".join(out)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: fenced code, inline code, headings, bold, italic, links,
    bullet and numbered lists, line breaks. Input is HTML-escaped first and
    code is shielded from inline formatting. The output depends only on the
    input, so re-rendering a growing reply from scratch is always consistent.
    """
    # NUL delimits stash placeholders, so it may only come from keep().
    text = html.escape(text.replace("\x00", ""), quote=False)

    stash: list[str] = []

    def keep(fragment: str) -> str:
        stash.append(fragment)
        return f"\x00{len(stash) - 1}\x00"

    text = _CODE_BLOCK.sub(lambda m: keep(f"<pre><code>{m.group(1)}</code></pre>"), text)
    text = _INLINE_CODE.sub(lambda m: keep(f"<code>{m.group(1)}</code>"), text)

    rendered = _render_lines(text.split("\n"))
    return _PLACEHOLDER.sub(lambda m: stash[int(m.group(1))], rendered)
