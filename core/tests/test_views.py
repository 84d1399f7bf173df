"""
Tests for the static pages, robots.txt, the sitemap and the security headers
attached to every response.
"""
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from blog.tests.helpers import PostsDirMixin
from portfolio.middleware import SecurityHeadersMiddleware


class PageTests(PostsDirMixin, TestCase):

    def test_home_shows_latest_posts(self):
        for i in range(5):
            self.write_post(f'post-{i}', title=f'Post number {i}', date=f'2025-01-0{i + 1}')

        response = self.client.get(reverse('home'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [post.slug for post in response.context['latest_posts']],
            ['post-4', 'post-3', 'post-2']
        )

    def test_static_pages(self):
        for name, template in [('privacy', 'privacy.html'), ('accessibility', 'accessibility.html')]:
            response = self.client.get(reverse(name))
            self.assertEqual(response.status_code, 200)
            self.assertTemplateUsed(response, template)

    def test_robots_txt(self):
        response = self.client.get(reverse('robots_txt'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/plain')
        self.assertContains(response, 'User-agent: *')
        self.assertContains(response, 'Sitemap: http://testserver/sitemap.xml')

    def test_robots_txt_get_only(self):
        response = self.client.post(reverse('robots_txt'))
        self.assertEqual(response.status_code, 405)

    def test_sitemap_lists_pages_and_posts(self):
        self.write_post('mapped', date='2025-04-01')

        response = self.client.get('/sitemap.xml')

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'http://testserver/blog/mapped/')
        self.assertContains(response, 'http://testserver/privacy/')
        self.assertContains(response, '<lastmod>2025-04-01</lastmod>')

    def test_sitemap_skips_bad_dates(self):
        self.write_post('undated', date='someday')

        response = self.client.get('/sitemap.xml')

        self.assertContains(response, 'http://testserver/blog/undated/')
        self.assertNotContains(response, 'someday')


class SecurityHeadersTests(PostsDirMixin, TestCase):

    def test_headers_present(self):
        response = self.client.get(reverse('home'))

        self.assertEqual(response['X-Frame-Options'], 'SAMEORIGIN')
        self.assertEqual(response['X-Content-Type-Options'], 'nosniff')
        self.assertEqual(response['Referrer-Policy'], 'strict-origin-when-cross-origin')
        self.assertIn("default-src 'self'", response['Content-Security-Policy'])
        self.assertIn('max-age=63072000', response['Strict-Transport-Security'])


class ContentSecurityPolicyTests(SimpleTestCase):

    @override_settings(DEBUG=False)
    def test_no_unsafe_eval_in_production(self):
        self.assertNotIn("'unsafe-eval'", SecurityHeadersMiddleware.content_security_policy())

    @override_settings(DEBUG=True)
    def test_unsafe_eval_in_debug(self):
        self.assertIn("'unsafe-eval'", SecurityHeadersMiddleware.content_security_policy())

    @override_settings(CSP_SCRIPT_SOURCES=['https://cdn.example.com'])
    def test_extra_script_sources(self):
        policy = SecurityHeadersMiddleware.content_security_policy()
        self.assertIn("script-src 'self' 'unsafe-inline' https://cdn.example.com", policy)
