"""
Tests for the blog index and post pages.
"""
from pathlib import Path
from unittest.mock import patch

from django.template import Context, Template
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from django.utils.safestring import mark_safe

from blog.constants import POSTS_PER_PAGE
from blog.tests.helpers import PostsDirMixin


class PostListViewTests(PostsDirMixin, TestCase):

    def test_lists_posts(self):
        self.write_post('one', title='First Post')
        self.write_post('two', title='Second Post', date='2025-02-01')

        response = self.client.get(reverse('blog:post_list'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'blog/post_list.html')
        self.assertContains(response, 'First Post')
        self.assertContains(response, 'Second Post')
        self.assertEqual([post.slug for post in response.context['posts']], ['two', 'one'])

    def test_empty_blog(self):
        response = self.client.get(reverse('blog:post_list'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'No posts found.')

    def test_undecodable_post_does_not_break_index(self):
        self.write_post('fine', title='Fine Post')
        (Path(self.posts_dir) / 'broken.md').write_bytes(b'\xff\xfe')

        with self.assertLogs('blog.services.post_service', level='WARNING'):
            response = self.client.get(reverse('blog:post_list'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Fine Post')

    def test_search(self):
        self.write_post('nginx', title='Hardening nginx', tags=['security'])
        self.write_post('django', title='Django tips', tags=['python'])

        response = self.client.get(reverse('blog:post_list'), {'q': 'security'})

        self.assertEqual(response.context['query'], 'security')
        self.assertEqual(response.context['result_count'], 1)
        self.assertContains(response, 'Found 1 post')
        self.assertContains(response, 'Hardening nginx')
        self.assertNotContains(response, 'Django tips')

    def test_search_query_is_escaped(self):
        response = self.client.get(reverse('blog:post_list'), {'q': '<script>alert(1)</script>'})
        self.assertEqual(response.status_code, 200)
        self.assertNotContains(response, '<script>alert(1)</script>')

    def test_pagination(self):
        for i in range(POSTS_PER_PAGE + 2):
            self.write_post(f'post-{i}', title=f'Post {i}', date=f'2025-01-{i + 1:02d}')

        first = self.client.get(reverse('blog:post_list'))
        self.assertTrue(first.context['is_paginated'])
        self.assertEqual(len(first.context['posts']), POSTS_PER_PAGE)

        second = self.client.get(reverse('blog:post_list'), {'page': 2})
        self.assertEqual(len(second.context['posts']), 2)

    def test_out_of_range_page_shows_last_page(self):
        for i in range(POSTS_PER_PAGE + 1):
            self.write_post(f'post-{i}', date=f'2025-01-{i + 1:02d}')

        response = self.client.get(reverse('blog:post_list'), {'page': 99})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['page_obj'].number, 2)

    def test_non_numeric_page_shows_first_page(self):
        self.write_post('only')
        response = self.client.get(reverse('blog:post_list'), {'page': 'abc'})
        self.assertEqual(response.context['page_obj'].number, 1)


class PostDetailViewTests(PostsDirMixin, TestCase):

    def test_renders_post(self):
        self.write_post('hello', title='Hello', content='# Welcome\n- **one**\n[link](https://example.com)')

        response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'hello'}))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'blog/post_detail.html')
        self.assertContains(response, '<h1 class="text-3xl')
        self.assertContains(response, '<span class="highlight')
        self.assertContains(response, '<a href="https://example.com"')
        self.assertEqual(response.context['read_time'], 1)

    def test_post_markup_is_escaped(self):
        self.write_post('xss', content='<script>alert(1)</script>\n![x](javascript:alert(1))')

        response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'xss'}))

        self.assertNotContains(response, '<script>alert(1)</script>')
        self.assertContains(response, '&lt;script&gt;alert(1)&lt;/script&gt;')
        self.assertNotContains(response, 'javascript:alert')

    def test_missing_post_404(self):
        response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'missing'}))
        self.assertEqual(response.status_code, 404)

    def test_invalid_slug_404(self):
        response = self.client.get('/blog/bad.slug/')
        self.assertEqual(response.status_code, 404)

    def test_unreadable_post_404_and_logged(self):
        (Path(self.posts_dir) / 'broken.md').write_text('---\n- x\n---\n', encoding='utf-8')

        with self.assertLogs('blog.views', level='ERROR'):
            response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'broken'}))

        self.assertEqual(response.status_code, 404)

    def test_undecodable_post_404(self):
        (Path(self.posts_dir) / 'latin.md').write_bytes(b'---\ntitle: Caf\xe9\n---\n')

        with self.assertLogs('blog.views', level='ERROR'):
            response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'latin'}))

        self.assertEqual(response.status_code, 404)

    def test_navigation_and_related(self):
        self.write_post('older', title='Older Post', date='2025-01-01', tags=['python'])
        self.write_post('middle', title='Middle Post', date='2025-02-01', tags=['python'])
        self.write_post('newer', title='Newer Post', date='2025-03-01')

        response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'middle'}))

        self.assertEqual(response.context['previous_post'].slug, 'newer')
        self.assertEqual(response.context['next_post'].slug, 'older')
        self.assertEqual(response.context['related_posts'][0].slug, 'older')

    @override_settings(DISQUS_SHORTNAME='myblog', SITE_URL='https://example.com/')
    def test_comments_config(self):
        self.write_post('talk', title='Talk')

        response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'talk'}))

        comments = response.context['comments']
        self.assertEqual(comments['identifier'], 'talk')
        self.assertEqual(comments['url'], 'https://example.com/blog/talk/')
        self.assertContains(response, 'id="disqus-config"')

    @override_settings(DISQUS_SHORTNAME='')
    def test_no_comments_without_shortname(self):
        self.write_post('quiet')
        response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'quiet'}))
        self.assertNotContains(response, 'disqus-config')

    def test_body_comes_from_render_post(self):
        self.write_post('cached')
        with patch('blog.views.MarkdownService.render_post', return_value=mark_safe('<p>cached</p>')) as mock_render:
            response = self.client.get(reverse('blog:post_detail', kwargs={'slug': 'cached'}))
        mock_render.assert_called_once()
        self.assertContains(response, '<p>cached</p>')


class TemplateFilterTests(SimpleTestCase):

    def test_format_content_filter(self):
        template = Template('{% load markdown_filters %}{{ body|format_content }}')
        html = template.render(Context({'body': '**hi** <b>'}))

        self.assertIn('<span class="highlight', html)
        self.assertIn('&lt;b&gt;', html)

    def test_format_content_filter_empty(self):
        template = Template('{% load markdown_filters %}[{{ body|format_content }}]')
        self.assertEqual(template.render(Context({'body': ''})), '[]')

    def test_blog_filters(self):
        template = Template(
            '{% load blog_filters %}{{ date|post_date }}|{{ body|read_time }}|{{ icon|icon_class }}'
        )
        rendered = template.render(Context({'date': '2025-1-2', 'body': 'a b c', 'icon': 'fa-shield'}))
        self.assertEqual(rendered, '2025-01-02|1 min read|fa-solid fa-shield')
