"""
URL configuration for the portfolio project.
"""

from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import path, include

from core.sitemaps import StaticViewSitemap, PostSitemap
from core.views import IndexView, PrivacyView, AccessibilityView, robots_txt

sitemaps = {
    'static': StaticViewSitemap,
    'posts': PostSitemap,
}

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", IndexView.as_view(), name="home"),
    path('privacy/', PrivacyView.as_view(), name='privacy'),
    path('accessibility/', AccessibilityView.as_view(), name='accessibility'),
    path('blog/', include('blog.urls')),
    path('api/', include('api.urls')),
    path('sitemap.xml', sitemap, {'sitemaps': sitemaps}, name='django.contrib.sitemaps.views.sitemap'),
    path('robots.txt', robots_txt, name='robots_txt'),
]
