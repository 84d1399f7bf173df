"""
Markdown rendering service for blog posts.

This service handles:
- Classifying each line of a post into a block kind
- Driving the code-block / list / image-wrapper state machine
- Converting the post to terminal-themed HTML safe for direct injection
- Reporting content that the formatter will silently drop
- Caching rendered post HTML

The formatter is a pure function of its input. Each call builds its own
ParserState and output list; nothing is shared between calls.
"""

import enum
import hashlib
import logging
from dataclasses import dataclass, field, replace
from typing import List, Tuple

from django.conf import settings
from django.core.cache import cache
from django.utils.safestring import mark_safe

from blog.constants import (
    FENCE_MARKER, LIST_MARKER, HEADER_PREFIXES, IMAGE_PATTERN, LINK_PATTERN,
    RENDER_CACHE_TIMEOUT, HEADER_CLASSES, PROMPT_CLASS, LIST_CLASS, LIST_ITEM_CLASS,
    LIST_ARROW, PARAGRAPH_CLASS, COMMAND_CLASS, CODE_BLOCK_CLASS, CODE_LANGUAGE_CLASS,
    CODE_PRE_CLASS, CODE_CODE_CLASS, IMAGE_WRAPPER_CLASS, IMAGE_CLASS, IMAGE_HINT_CLASS,
    IMAGE_CAPTION_CLASS, CAPTION_CLASS,
)
from blog.services.inline_formatter import format_inline, format_list_item
from blog.utils import escape_html, is_safe_url, is_safe_image_path

logger = logging.getLogger(__name__)


class LineKind(enum.Enum):
    FENCE = 'fence'
    CODE = 'code'
    HEADER = 'header'
    LIST_ITEM = 'list_item'
    BLANK = 'blank'
    COMMAND = 'command'
    IMAGE = 'image'
    CAPTION = 'caption'
    PARAGRAPH = 'paragraph'


@dataclass
class ParserState:
    in_code_block: bool = False
    code_lines: List[str] = field(default_factory=list)
    code_language: str = ''
    in_list: bool = False
    image_block_open: bool = False


def _is_caption(stripped):
    return (
        len(stripped) > 2
        and stripped.startswith('*')
        and stripped.endswith('*')
        and '**' not in stripped
    )


def classify_line(line: str, state: ParserState) -> LineKind:
    """Classify one line. Priority order matters: fences and code win over everything."""
    if line.startswith(FENCE_MARKER):
        return LineKind.FENCE
    if state.in_code_block:
        return LineKind.CODE
    if any(line.startswith(prefix) for prefix, _ in HEADER_PREFIXES):
        return LineKind.HEADER
    if line.startswith(LIST_MARKER):
        return LineKind.LIST_ITEM

    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK
    if stripped.startswith('$'):
        return LineKind.COMMAND
    if IMAGE_PATTERN.match(stripped):
        return LineKind.IMAGE
    if _is_caption(stripped):
        return LineKind.CAPTION
    return LineKind.PARAGRAPH


def _render_code_block(lines, language):
    code = escape_html(''.join(f"{line}\n" for line in lines)).strip('\n')
    prompt = ''
    if language:
        prompt = (
            f'<div class="{CODE_LANGUAGE_CLASS}">'
            f'<span class="{PROMPT_CLASS}">$</span> {escape_html(language)}</div>'
        )
    return (
        f'<div class="{CODE_BLOCK_CLASS}">{prompt}'
        f'<pre class="{CODE_PRE_CLASS}"><code class="{CODE_CODE_CLASS}">{code}</code></pre>'
        f'</div>'
    )


def _render_header(line):
    for prefix, level in HEADER_PREFIXES:
        if line.startswith(prefix):
            text = escape_html(line[len(prefix):])
            return (
                f'<h{level} class="{HEADER_CLASSES[level]}">'
                f'<span class="{PROMPT_CLASS}"># </span>{text}</h{level}>'
            )
    return ''


def _render_image(alt, path):
    alt = escape_html(alt)
    path = escape_html(path)
    return (
        f'<div class="{IMAGE_WRAPPER_CLASS}">'
        f'<img src="{path}" alt="{alt}" class="{IMAGE_CLASS}" '
        f'data-image-src="{path}" data-image-alt="{alt}" />'
        f'<p class="{IMAGE_HINT_CLASS}"><i class="fa-solid fa-expand mr-1"></i> Click to expand</p>'
    )


def step(state: ParserState, line: str) -> Tuple[ParserState, str]:
    """
    Advance the state machine by one line.

    Args:
        state: State after the previous line; never modified
        line: The current line, without its trailing newline

    Returns:
        tuple: (new ParserState, HTML fragment emitted for this line)
    """
    kind = classify_line(line, state)

    if kind is LineKind.CODE:
        return replace(state, code_lines=[*state.code_lines, line]), ''

    out = []

    # Any non-list line closes an open list before its own handler runs.
    if state.in_list and kind is not LineKind.LIST_ITEM:
        out.append('</ul>')
        state = replace(state, in_list=False)

    if kind is LineKind.FENCE:
        if not state.in_code_block:
            state = replace(
                state,
                in_code_block=True,
                code_lines=[],
                code_language=line[len(FENCE_MARKER):].strip(),
            )
        else:
            out.append(_render_code_block(state.code_lines, state.code_language))
            state = replace(state, in_code_block=False, code_lines=[], code_language='')

    elif kind is LineKind.HEADER:
        out.append(_render_header(line))

    elif kind is LineKind.LIST_ITEM:
        if not state.in_list:
            out.append(f'<ul class="{LIST_CLASS}">')
            state = replace(state, in_list=True)
        body = format_list_item(line[len(LIST_MARKER):])
        out.append(
            f'<li class="{LIST_ITEM_CLASS}"><span class="{PROMPT_CLASS}">{LIST_ARROW}</span> {body}</li>'
        )

    elif kind is LineKind.BLANK:
        # An open image wrapper waits for a possible caption.
        if not state.image_block_open:
            out.append('<br />')

    elif kind is LineKind.COMMAND:
        out.append(
            f'<div class="{COMMAND_CLASS}"><span class="{PROMPT_CLASS}">{escape_html(line)}</span></div>'
        )

    elif kind is LineKind.IMAGE:
        if state.image_block_open:
            out.append('</div>')
            state = replace(state, image_block_open=False)
        alt, path = IMAGE_PATTERN.match(line.strip()).groups()
        path = path.strip()
        if is_safe_image_path(path):
            out.append(_render_image(alt, path))
            state = replace(state, image_block_open=True)
        else:
            logger.debug(f"Dropped unsafe image source: {path!r}")

    elif kind is LineKind.CAPTION:
        stripped = line.strip()
        caption = escape_html(stripped[1:-1])
        if state.image_block_open:
            out.append(f'<p class="{IMAGE_CAPTION_CLASS}">{caption}</p></div>')
            state = replace(state, image_block_open=False)
        else:
            out.append(f'<p class="{CAPTION_CLASS}">{caption}</p>')

    else:
        if state.image_block_open:
            out.append('</div>')
            state = replace(state, image_block_open=False)
        out.append(f'<p class="{PARAGRAPH_CLASS}">{format_inline(line)}</p>')

    return state, ''.join(out)


def finish(state: ParserState) -> str:
    """Close whatever is still open at end of input. An unterminated code block is dropped."""
    out = []
    if state.in_list:
        out.append('</ul>')
    if state.image_block_open:
        out.append('</div>')
    if state.in_code_block:
        logger.debug(f"Discarded unterminated code block ({len(state.code_lines)} lines)")
    return ''.join(out)


class MarkdownService:
    """Handles markdown rendering for blog posts."""

    @staticmethod
    def format_content(content):
        """
        Convert post markdown to terminal-themed HTML.

        Never raises: malformed markdown degrades to escaped paragraphs, and
        unsafe links and images are dropped.

        Args:
            content: Raw markdown body (frontmatter already removed)

        Returns:
            str: HTML fragment
        """
        state = ParserState()
        html = []
        for line in (content or '').split('\n'):
            state, fragment = step(state, line)
            html.append(fragment)
        html.append(finish(state))
        return ''.join(html)

    @staticmethod
    def find_issues(content):
        """
        List the parts of a post that the formatter will drop.

        Args:
            content: Raw markdown body

        Returns:
            list[str]: Human-readable problems, each prefixed with its line number
        """
        issues = []
        state = ParserState()
        fence_line = None

        for number, line in enumerate((content or '').split('\n'), start=1):
            kind = classify_line(line, state)
            if kind is LineKind.FENCE and not state.in_code_block:
                fence_line = number
            elif kind is LineKind.IMAGE:
                path = IMAGE_PATTERN.match(line.strip()).group(2).strip()
                if not is_safe_image_path(path):
                    issues.append(f"line {number}: unsafe image source {path!r} will be dropped")
            elif kind is LineKind.PARAGRAPH:
                for match in LINK_PATTERN.finditer(line):
                    if not is_safe_url(match.group(2)):
                        issues.append(f"line {number}: unsafe link {match.group(2)!r} rendered as plain text")
            state, _ = step(state, line)

        if state.in_code_block:
            issues.append(f"line {fence_line}: code fence is never closed; its contents will be dropped")

        return issues

    @staticmethod
    def _cache_key(post):
        digest = hashlib.sha256(post.content.encode('utf-8')).hexdigest()[:16]
        return f"blog:post:render:{post.slug}:{digest}"

    @staticmethod
    def render_post(post, use_cache=True):
        """
        Render a post's body to HTML.

        Args:
            post: BlogPost instance
            use_cache: Whether to use cached result

        Returns:
            str: Rendered HTML (marked safe)
        """
        cache_key = MarkdownService._cache_key(post)

        if use_cache:
            cached = cache.get(cache_key)
            if cached:
                return mark_safe(cached)

        html = MarkdownService.format_content(post.content)

        if use_cache:
            timeout = getattr(settings, 'BLOG_RENDER_CACHE_TIMEOUT', RENDER_CACHE_TIMEOUT)
            cache.set(cache_key, html, timeout)

        return mark_safe(html)

    @staticmethod
    def invalidate_post_cache(post):
        """
        Invalidate cached render for a post.

        Args:
            post: BlogPost instance
        """
        cache.delete(MarkdownService._cache_key(post))
        logger.debug(f"Post cache invalidated: {post.slug}")
