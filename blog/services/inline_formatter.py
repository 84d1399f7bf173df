"""
Inline markdown transforms for paragraph and list-item text.

A line is held as a flat list of segments. Raw segments are author text,
still unescaped. Markup segments are single opening or closing tags built by
one of the transforms below. Rendering escapes every Raw segment and emits
Markup verbatim, so nothing the author typed can become a tag.

A transform wraps the text it matched as Markup(open) + Raw(inner) +
Markup(close), leaving the inner text available to later transforms. Matches
run over the whole line, but a match that overlaps a tag is left untouched:
`**`x`**` gets a <code> inside the highlight, while `**[label](url)**` keeps
its asterisks because the bold would have to span the anchor's tags.
"""
import logging
from dataclasses import dataclass
from typing import List

from blog.constants import (
    LINK_PATTERN, BOLD_PATTERN, INLINE_CODE_PATTERN,
    LINK_CLASS, HIGHLIGHT_CLASS, INLINE_CODE_CLASS,
)
from blog.utils import escape_html, is_safe_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    text: str
    trusted: bool = False

    @classmethod
    def raw(cls, text):
        return cls(text, trusted=False)

    @classmethod
    def markup(cls, html):
        return cls(html, trusted=True)


def _slice(segments, start, end):
    """Return the part of `segments` covering [start, end) of the joined text."""
    pieces = []
    offset = 0
    for segment in segments:
        seg_start, seg_end = offset, offset + len(segment.text)
        offset = seg_end
        lo, hi = max(start, seg_start), min(end, seg_end)
        if lo >= hi:
            continue
        pieces.append(Segment(segment.text[lo - seg_start:hi - seg_start], segment.trusted))
    return pieces


def _trusted_spans(segments):
    spans = []
    offset = 0
    for segment in segments:
        end = offset + len(segment.text)
        if segment.trusted:
            spans.append((offset, end))
        offset = end
    return spans


def apply_transform(segments: List[Segment], pattern, render) -> List[Segment]:
    """
    Replace every match of `pattern` with the segments returned by `render`.

    Matches that overlap a Markup segment are skipped and scanning resumes
    after them, mirroring re.sub with a callback that returns the match.
    A match lying wholly inside Raw text, including text already wrapped by
    an earlier transform, is replaced.
    """
    text = ''.join(segment.text for segment in segments)
    spans = _trusted_spans(segments)
    result = []
    cursor = 0
    for match in pattern.finditer(text):
        start, end = match.span()
        if any(start < span_end and span_start < end for span_start, span_end in spans):
            continue
        result.extend(_slice(segments, cursor, start))
        result.extend(render(match))
        cursor = end
    result.extend(_slice(segments, cursor, len(text)))
    return result


def render_segments(segments: List[Segment]) -> str:
    return ''.join(
        segment.text if segment.trusted else escape_html(segment.text)
        for segment in segments
    )


def _wrap(open_tag, text, close_tag):
    return [Segment.markup(open_tag), Segment.raw(text), Segment.markup(close_tag)]


def _render_link(match):
    text, url = match.group(1), match.group(2)
    if not is_safe_url(url):
        logger.debug(f"Dropped unsafe link target: {url!r}")
        return [Segment.raw(text)]
    return _wrap(
        f'<a href="{escape_html(url.strip())}" class="{LINK_CLASS}" '
        f'target="_blank" rel="noopener noreferrer">',
        text,
        '</a>',
    )


def _render_bold(match):
    return _wrap(f'<span class="{HIGHLIGHT_CLASS}">', match.group(1), '</span>')


def _render_inline_code(match):
    return _wrap(f'<code class="{INLINE_CODE_CLASS}">', match.group(1), '</code>')


def format_inline(line: str) -> str:
    """Links, then bold, then inline code; everything else escaped."""
    segments = [Segment.raw(line)]
    segments = apply_transform(segments, LINK_PATTERN, _render_link)
    segments = apply_transform(segments, BOLD_PATTERN, _render_bold)
    segments = apply_transform(segments, INLINE_CODE_PATTERN, _render_inline_code)
    return render_segments(segments)


def format_list_item(text: str) -> str:
    """List items only support bold."""
    segments = apply_transform([Segment.raw(text)], BOLD_PATTERN, _render_bold)
    return render_segments(segments)
