from django.http import HttpResponse
from django.urls import reverse
from django.views.generic import TemplateView
from django.views.decorators.http import require_GET

from blog.services.post_service import PostService


class IndexView(TemplateView):
    template_name = 'index.html'
    LATEST_POSTS_COUNT = 3

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['latest_posts'] = PostService.get_all_posts()[:self.LATEST_POSTS_COUNT]
        return context


class PrivacyView(TemplateView):
    template_name = 'privacy.html'


class AccessibilityView(TemplateView):
    template_name = 'accessibility.html'


@require_GET
def robots_txt(request):
    lines = [
        'User-agent: *',
        'Allow: /',
        f"Sitemap: {request.build_absolute_uri(reverse('django.contrib.sitemaps.views.sitemap'))}",
    ]
    return HttpResponse('\n'.join(lines) + '\n', content_type='text/plain')
