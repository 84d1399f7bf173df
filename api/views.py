"""
REST API views for the blog admin editor.

GET endpoints are public. Writes and previews require a staff session.
"""
import logging

from django.utils.decorators import method_decorator
from django_ratelimit.decorators import ratelimit
from rest_framework import status
from rest_framework.authentication import SessionAuthentication
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from blog.exceptions import InvalidSlugError, PostExistsError, PostParseError
from blog.services.markdown_service import MarkdownService
from blog.services.post_service import PostService
from .permissions import IsStaffOrReadOnly
from .serializers import PostSummarySerializer, PostSerializer, PreviewSerializer

logger = logging.getLogger(__name__)


class PostListAPIView(APIView):
    """
    GET  /api/posts/  -> list of post summaries, newest first
    POST /api/posts/  -> create a post (staff)
    """
    permission_classes = [IsStaffOrReadOnly]
    authentication_classes = [SessionAuthentication]

    def get(self, request):
        posts = PostService.get_all_posts()
        query = request.query_params.get('q')
        if query:
            posts = PostService.search_posts(posts, query)
        return Response(PostSummarySerializer(posts, many=True).data)

    def post(self, request):
        serializer = PostSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            post = PostService.save_post(serializer.validated_data)
        except PostExistsError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidSlugError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Post created via API by {request.user}: {post.slug}")
        return Response(post.to_dict(), status=status.HTTP_201_CREATED)


class PostDetailAPIView(APIView):
    """
    GET    /api/posts/<slug>/  -> post with rendered HTML
    PUT    /api/posts/<slug>/  -> replace a post, possibly renaming it (staff)
    DELETE /api/posts/<slug>/  -> delete a post (staff)
    """
    permission_classes = [IsStaffOrReadOnly]
    authentication_classes = [SessionAuthentication]

    def _get_post(self, slug):
        try:
            return PostService.get_post_by_slug(slug)
        except PostParseError as e:
            logger.error(f"Unreadable post requested via API: {e}")
            return None

    def get(self, request, slug):
        post = self._get_post(slug)
        if post is None:
            return Response({'error': 'Post not found.'}, status=status.HTTP_404_NOT_FOUND)

        data = post.to_dict()
        data['html'] = str(MarkdownService.render_post(post))
        return Response(data)

    def put(self, request, slug):
        if self._get_post(slug) is None:
            return Response({'error': 'Post not found.'}, status=status.HTTP_404_NOT_FOUND)

        serializer = PostSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = dict(serializer.validated_data)
        data['slug'] = data.get('slug') or slug
        try:
            post = PostService.save_post(data, original_slug=slug)
        except PostExistsError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidSlugError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Post updated via API by {request.user}: {slug} -> {post.slug}")
        return Response(post.to_dict())

    def delete(self, request, slug):
        if not PostService.delete_post(slug):
            return Response({'error': 'Post not found.'}, status=status.HTTP_404_NOT_FOUND)

        logger.info(f"Post deleted via API by {request.user}: {slug}")
        return Response(status=status.HTTP_204_NO_CONTENT)


class MarkdownPreviewAPIView(APIView):
    """
    POST /api/preview/
    Body: {"content": str}

    Renders markdown without touching the render cache.
    """
    permission_classes = [IsAdminUser]
    authentication_classes = [SessionAuthentication]

    @method_decorator(ratelimit(key='user', rate='60/m', method='POST', block=True))
    def post(self, request):
        serializer = PreviewSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        content = serializer.validated_data['content']
        return Response({
            'html': MarkdownService.format_content(content),
            'issues': MarkdownService.find_issues(content),
        })
