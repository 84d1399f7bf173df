import logging

from django.conf import settings
from django.http import Http404
from django.urls import reverse, reverse_lazy
from django.utils.decorators import method_decorator
from django.views.generic import ListView, TemplateView
from django_ratelimit.decorators import ratelimit

from blog.constants import POSTS_PER_PAGE
from blog.exceptions import PostParseError
from blog.forms import PostSearchForm
from blog.services.markdown_service import MarkdownService
from blog.services.post_service import PostService
from blog.utils import estimate_read_time, get_icon_class

logger = logging.getLogger(__name__)


@method_decorator(ratelimit(key='ip', rate='120/m', method='GET', block=True), name='dispatch')
class PostListView(ListView):
    """
    Display the blog index.

    Supports a `q` search over title, description and tags, and `page`
    pagination. Page numbers past the end show the last page instead of 404.
    """
    template_name = 'blog/post_list.html'
    context_object_name = 'posts'
    paginate_by = POSTS_PER_PAGE

    def get_queryset(self):
        posts = PostService.get_all_posts()
        self.form = PostSearchForm(self.request.GET)
        self.query = ''

        if self.form.is_valid():
            self.query = self.form.cleaned_data.get('q')
            if self.query:
                posts = PostService.search_posts(posts, self.query)

        return posts

    def paginate_queryset(self, queryset, page_size):
        paginator = self.get_paginator(queryset, page_size, allow_empty_first_page=True)
        page = paginator.get_page(self.request.GET.get(self.page_kwarg))
        return paginator, page, page.object_list, page.has_other_pages()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['form'] = self.form
        context['query'] = self.query
        context['result_count'] = len(self.object_list)
        context['items'] = [
            {'text': 'Home', 'url': reverse_lazy('home')},
            {'text': 'Blog'},
        ]
        return context


class PostDetailView(TemplateView):
    """
    Display a single post rendered through the markdown formatter, with
    previous/next navigation, related posts and the comment widget config.
    """
    template_name = 'blog/post_detail.html'

    def get_post(self):
        slug = self.kwargs.get('slug')
        try:
            post = PostService.get_post_by_slug(slug)
        except PostParseError as e:
            logger.error(f"Unreadable post requested: {e}")
            raise Http404("Post not found")

        if post is None:
            raise Http404("Post not found")
        return post

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        post = self.get_post()

        context['post'] = post
        context['content_html'] = MarkdownService.render_post(post)
        context['read_time'] = estimate_read_time(post.content)
        context['icon_class'] = get_icon_class(post.icon)
        context['previous_post'] = PostService.get_previous_post(post.slug)
        context['next_post'] = PostService.get_next_post(post.slug)
        context['related_posts'] = PostService.get_related_posts(post.slug)
        context['comments'] = {
            'shortname': settings.DISQUS_SHORTNAME,
            'identifier': post.slug,
            'url': f"{settings.SITE_URL.rstrip('/')}{reverse('blog:post_detail', kwargs={'slug': post.slug})}",
            'title': post.title,
        }
        context['items'] = [
            {'text': 'Home', 'url': reverse_lazy('home')},
            {'text': 'Blog', 'url': reverse_lazy('blog:post_list')},
            {'text': post.title},
        ]
        return context
