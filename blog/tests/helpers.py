import shutil
import tempfile
from pathlib import Path

from django.core.cache import cache
from django.test import override_settings


def write_post(directory, slug, title='Post', date='2025-01-01', tags=None,
               description='', icon='fa-file-code', content='Body text'):
    tags = tags or []
    text = (
        '---\n'
        f'title: {title}\n'
        f'date: {date}\n'
        f'description: {description}\n'
        f'tags: [{", ".join(tags)}]\n'
        f'icon: {icon}\n'
        '---\n\n'
        f'{content}\n'
    )
    path = Path(directory) / f'{slug}.md'
    path.write_text(text, encoding='utf-8')
    return path


class PostsDirMixin:
    """Points BLOG_POSTS_DIR at a throwaway directory for each test."""

    def setUp(self):
        super().setUp()
        self.posts_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.posts_dir, ignore_errors=True)
        override = override_settings(BLOG_POSTS_DIR=self.posts_dir)
        override.enable()
        self.addCleanup(override.disable)
        cache.clear()

    def write_post(self, slug, **kwargs):
        return write_post(self.posts_dir, slug, **kwargs)
