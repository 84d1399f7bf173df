from django.urls import path
from .views import PostListAPIView, PostDetailAPIView, MarkdownPreviewAPIView

app_name = 'api'

urlpatterns = [
    path('posts/', PostListAPIView.as_view(), name='post-list'),
    path('posts/<str:slug>/', PostDetailAPIView.as_view(), name='post-detail'),
    path('preview/', MarkdownPreviewAPIView.as_view(), name='preview'),
]
