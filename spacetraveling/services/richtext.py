import html
from typing import Iterable, List, Tuple

from spacetraveling.schemas.blog import RichTextBlock, Span

BLOCK_TAGS = {
    "paragraph": "p",
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "preformatted": "pre",
    "list-item": "li",
    "o-list-item": "li",
}

LIST_WRAPPERS = {"list-item": "ul", "o-list-item": "ol"}


def as_text(blocks: Iterable[RichTextBlock], separator: str = " ") -> str:
    """Plain-text rendering of rich text, one block per separator."""
    return separator.join(block.text for block in blocks)


def as_html(blocks: Iterable[RichTextBlock]) -> str:
    """
    Render rich text blocks to HTML.
    Consecutive list items are grouped under a single <ul>/<ol>.
    """
    parts: List[str] = []
    open_list = None

    for block in blocks:
        wrapper = LIST_WRAPPERS.get(block.type)
        if wrapper != open_list:
            if open_list:
                parts.append(f"</{open_list}>")
            if wrapper:
                parts.append(f"<{wrapper}>")
            open_list = wrapper
        parts.append(_render_block(block))

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(parts)


def _render_block(block: RichTextBlock) -> str:
    if block.type == "image":
        src = html.escape(block.url or "", quote=True)
        alt = html.escape(block.alt or "", quote=True)
        return f'<p class="block-img"><img src="{src}" alt="{alt}" /></p>'

    tag = BLOCK_TAGS.get(block.type, "p")
    return f"<{tag}>{render_spans(block.text, block.spans)}</{tag}>"


def render_spans(text: str, spans: Iterable[Span]) -> str:
    """
    Escape ``text`` and wrap the span ranges in their inline tags.

    Ranges that overlap without nesting are split: at every boundary the tags
    still open above a closing range are closed and reopened after it.
    """
    # Longer spans open first so nested ranges stay balanced.
    pending = []
    for span in sorted(spans, key=lambda s: (s.start, -s.end)):
        start, end = max(span.start, 0), min(span.end, len(text))
        if start >= end:
            continue
        open_tag, close_tag = _span_tags(span)
        pending.append((start, end, open_tag, close_tag))

    boundaries = sorted(
        {0, len(text)} | {p[0] for p in pending} | {p[1] for p in pending}
    )
    stack: List[Tuple[int, str, str]] = []
    out: List[str] = []
    cursor = 0
    for i, position in enumerate(boundaries):
        ended = next(
            (depth for depth, (end, _, _) in enumerate(stack) if end <= position),
            None,
        )
        if ended is not None:
            unwound = stack[ended:]
            del stack[ended:]
            out.extend(close_tag for _, _, close_tag in reversed(unwound))
            for entry in unwound:
                if entry[0] > position:
                    out.append(entry[1])
                    stack.append(entry)

        while cursor < len(pending) and pending[cursor][0] == position:
            _, end, open_tag, close_tag = pending[cursor]
            out.append(open_tag)
            stack.append((end, open_tag, close_tag))
            cursor += 1

        if i + 1 < len(boundaries):
            chunk = text[position : boundaries[i + 1]]
            out.append(html.escape(chunk).replace("\n", "<br />"))
    return "".join(out)


def _span_tags(span: Span):
    if span.type == "strong":
        return "<strong>", "</strong>"
    if span.type == "em":
        return "<em>", "</em>"
    if span.type == "hyperlink":
        data = span.data or {}
        href = html.escape(data.get("url", ""), quote=True)
        target = data.get("target")
        target_attr = (
            f' target="{html.escape(target, quote=True)}" rel="noopener"'
            if target
            else ""
        )
        return f'<a href="{href}"{target_attr}>', "</a>"
    label = html.escape((span.data or {}).get("label", span.type), quote=True)
    return f'<span class="{label}">', "</span>"
