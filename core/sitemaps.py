from datetime import date

from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from blog.services.post_service import PostService


class StaticViewSitemap(Sitemap):
    priority = 0.8
    changefreq = 'weekly'

    def items(self):
        return ['home', 'blog:post_list', 'privacy', 'accessibility']

    def location(self, item):
        return reverse(item)


class PostSitemap(Sitemap):
    changefreq = 'monthly'
    priority = 0.6

    def items(self):
        return PostService.get_all_posts()

    def location(self, obj):
        return reverse('blog:post_detail', kwargs={'slug': obj.slug})

    def lastmod(self, obj):
        try:
            return date.fromisoformat(obj.date)
        except ValueError:
            return None
