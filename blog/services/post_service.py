"""
Filesystem-backed post repository.

Posts are markdown files named `<slug>.md` in settings.BLOG_POSTS_DIR, each
starting with a YAML frontmatter block:

    ---
    title: Hardening nginx
    date: 2025-01-15
    description: Notes from a weekend of config reviews
    tags: [security, nginx]
    icon: fa-shield
    ---
    # Body in the blog markdown dialect
"""

import logging
import os
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from django.conf import settings

from blog.constants import (
    DEFAULT_POST_ICON, POST_FILE_EXTENSION, SLUG_PATTERN, SLUGIFY_PATTERN,
    MAX_SEARCH_QUERY_LENGTH, RELATED_POSTS_LIMIT,
)
from blog.exceptions import InvalidSlugError, PostParseError, PostExistsError
from blog.services.markdown_service import MarkdownService

logger = logging.getLogger(__name__)


@dataclass
class BlogPost:
    slug: str
    title: str = ''
    date: str = ''
    description: str = ''
    tags: List[str] = field(default_factory=list)
    icon: str = DEFAULT_POST_ICON
    content: str = ''

    def to_dict(self):
        return asdict(self)


def _coerce_date(value):
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return ''
    return str(value).strip()


def _coerce_tags(value):
    if not value:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(',') if tag.strip()]
    return [str(tag) for tag in value]


class PostService:
    """Reads, searches and writes blog posts."""

    @staticmethod
    def posts_dir() -> Path:
        return Path(settings.BLOG_POSTS_DIR)

    @staticmethod
    def parse_frontmatter(text: str) -> Tuple[dict, str]:
        """
        Split a post file into its frontmatter mapping and body.

        Files without a leading `---` block have empty metadata.

        Raises:
            PostParseError: If the frontmatter is not valid YAML or not a mapping
        """
        text = text.replace('\r\n', '\n').lstrip('\ufeff')
        if not text.startswith('---\n'):
            return {}, text

        lines = text.split('\n')
        for i in range(1, len(lines)):
            if lines[i].strip() == '---':
                try:
                    meta = yaml.safe_load('\n'.join(lines[1:i])) or {}
                except yaml.YAMLError as e:
                    raise PostParseError('<frontmatter>', reason=str(e)) from e
                if not isinstance(meta, dict):
                    raise PostParseError('<frontmatter>', reason='frontmatter is not a mapping')
                return meta, '\n'.join(lines[i + 1:])

        return {}, text

    @staticmethod
    def _load(slug: str, path: Path) -> BlogPost:
        try:
            text = path.read_text(encoding='utf-8')
        except (UnicodeDecodeError, OSError) as e:
            raise PostParseError(path, reason=str(e)) from e

        try:
            meta, body = PostService.parse_frontmatter(text)
        except PostParseError as e:
            raise PostParseError(path, reason=e.reason) from e

        return BlogPost(
            slug=slug,
            title=str(meta.get('title') or ''),
            date=_coerce_date(meta.get('date')),
            description=str(meta.get('description') or ''),
            tags=_coerce_tags(meta.get('tags')),
            icon=str(meta.get('icon') or DEFAULT_POST_ICON),
            content=body.strip(),
        )

    @staticmethod
    def _path_for_slug(slug) -> Path:
        if not isinstance(slug, str) or not SLUG_PATTERN.match(slug):
            raise InvalidSlugError(slug)

        posts_dir = PostService.posts_dir().resolve()
        path = (posts_dir / f"{slug}{POST_FILE_EXTENSION}").resolve()
        if os.path.commonpath([posts_dir, path]) != str(posts_dir):
            raise InvalidSlugError(slug)
        return path

    @staticmethod
    def get_all_posts() -> List[BlogPost]:
        """
        Load every post, newest first.

        Files that cannot be decoded or whose frontmatter cannot be parsed are
        skipped and logged.
        """
        posts_dir = PostService.posts_dir()
        if not posts_dir.is_dir():
            return []

        posts = []
        for path in sorted(posts_dir.glob(f"*{POST_FILE_EXTENSION}")):
            slug = path.name[:-len(POST_FILE_EXTENSION)]
            try:
                posts.append(PostService._load(slug, path))
            except PostParseError as e:
                logger.warning(f"Skipping post {slug}: {e}")

        return sorted(posts, key=lambda post: post.date, reverse=True)

    @staticmethod
    def get_post_by_slug(slug) -> Optional[BlogPost]:
        """
        Load one post.

        Returns:
            BlogPost or None if the slug is invalid or no such file exists

        Raises:
            PostParseError: If the file exists but is not UTF-8 or its frontmatter is malformed
        """
        try:
            path = PostService._path_for_slug(slug)
        except InvalidSlugError:
            logger.debug(f"Rejected post slug: {slug!r}")
            return None

        if not path.is_file():
            return None

        return PostService._load(slug, path)

    @staticmethod
    def _index_of(posts, slug):
        for index, post in enumerate(posts):
            if post.slug == slug:
                return index
        return -1

    @staticmethod
    def get_previous_post(slug) -> Optional[BlogPost]:
        """The next newer post (posts are sorted newest first)."""
        posts = PostService.get_all_posts()
        index = PostService._index_of(posts, slug)
        return posts[index - 1] if index > 0 else None

    @staticmethod
    def get_next_post(slug) -> Optional[BlogPost]:
        """The next older post."""
        posts = PostService.get_all_posts()
        index = PostService._index_of(posts, slug)
        if index == -1:
            return None
        return posts[index + 1] if index < len(posts) - 1 else None

    @staticmethod
    def get_related_posts(slug, limit=RELATED_POSTS_LIMIT) -> List[BlogPost]:
        """
        Posts sharing at least one tag with `slug`, topped up with the most
        recent other posts when there are fewer than `limit`.
        """
        posts = PostService.get_all_posts()
        current = next((post for post in posts if post.slug == slug), None)
        if current is None:
            return []

        tags = set(current.tags)
        related = [
            post for post in posts
            if post.slug != slug and tags.intersection(post.tags)
        ][:limit]

        if len(related) < limit:
            chosen = {post.slug for post in related}
            fillers = [
                post for post in posts
                if post.slug != slug and post.slug not in chosen
            ]
            related.extend(fillers[:limit - len(related)])

        return related

    @staticmethod
    def search_posts(posts, query) -> List[BlogPost]:
        """
        Case-insensitive substring search over title, description and tags.

        The query is capped at MAX_SEARCH_QUERY_LENGTH characters. Plain
        substring matching only, so no user input ever reaches a regex.
        """
        query = (query or '').strip()[:MAX_SEARCH_QUERY_LENGTH].lower()
        if not query:
            return list(posts)

        return [
            post for post in posts
            if query in post.title.lower()
            or query in post.description.lower()
            or any(query in tag.lower() for tag in post.tags)
        ]

    @staticmethod
    def generate_slug(title) -> str:
        """'Hello, World!' -> 'hello-world'"""
        return SLUGIFY_PATTERN.sub('-', (title or '').lower()).strip('-')

    @staticmethod
    def save_post(data, original_slug=None) -> BlogPost:
        """
        Create or update a post file.

        Args:
            data: dict with title, content and optional slug, date,
                description, tags, icon
            original_slug: Slug of the post being edited, if any. When it
                differs from the new slug the old file is removed.

        Returns:
            BlogPost: The saved post

        Raises:
            InvalidSlugError: If the resulting slug is unusable
            PostExistsError: If another post already uses the slug
        """
        slug = data.get('slug') or PostService.generate_slug(data.get('title'))
        path = PostService._path_for_slug(slug)

        if path.exists() and slug != original_slug:
            raise PostExistsError(slug)

        post = BlogPost(
            slug=slug,
            title=data.get('title', ''),
            date=_coerce_date(data.get('date')) or date.today().isoformat(),
            description=data.get('description', ''),
            tags=_coerce_tags(data.get('tags')),
            icon=data.get('icon') or DEFAULT_POST_ICON,
            content=(data.get('content') or '').strip(),
        )

        meta = {
            'title': post.title,
            'date': post.date,
            'description': post.description,
            'tags': post.tags,
            'icon': post.icon,
        }
        frontmatter = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True).rstrip()

        if original_slug:
            try:
                previous = PostService.get_post_by_slug(original_slug)
            except PostParseError as e:
                logger.warning(f"Overwriting unreadable post {original_slug}: {e}")
                previous = None
            if previous is not None:
                MarkdownService.invalidate_post_cache(previous)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"---\n{frontmatter}\n---\n\n{post.content}\n", encoding='utf-8')

        if original_slug and original_slug != slug:
            PostService.delete_post(original_slug)

        logger.info(f"Post saved: {slug}")
        return post

    @staticmethod
    def delete_post(slug) -> bool:
        """
        Remove a post file.

        Returns:
            bool: True if a file was deleted
        """
        try:
            path = PostService._path_for_slug(slug)
        except InvalidSlugError:
            return False

        if not path.is_file():
            return False

        path.unlink()
        logger.info(f"Post deleted: {slug}")
        return True
