from django.conf import settings


class SecurityHeadersMiddleware:
    """
    Attach the site's security headers to every response.

    In DEBUG the script-src also allows 'unsafe-eval' so browser devtools
    and live-reload tooling keep working.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    @staticmethod
    def content_security_policy():
        script_src = ["'self'", "'unsafe-inline'"]
        if settings.DEBUG:
            script_src.append("'unsafe-eval'")
        script_src.extend(settings.CSP_SCRIPT_SOURCES)

        disqus = 'https://*.disqus.com https://disqus.com https://*.disquscdn.com'
        directives = [
            "default-src 'self'",
            f"script-src {' '.join(script_src)}",
            f"style-src 'self' 'unsafe-inline' https://fonts.googleapis.com {disqus}",
            "font-src 'self' https://fonts.gstatic.com",
            "img-src 'self' data: https: http://cdn.viglink.com",
            f"connect-src 'self' {disqus} https://*.liadm.com",
            "frame-ancestors 'self'",
            "frame-src 'self' https://*.disqus.com https://disqus.com https://*.liadm.com",
        ]
        return '; '.join(directives) + ';'

    def __call__(self, request):
        response = self.get_response(request)

        response['X-DNS-Prefetch-Control'] = 'on'
        response['Strict-Transport-Security'] = 'max-age=63072000; includeSubDomains; preload'
        response['X-Frame-Options'] = 'SAMEORIGIN'
        response['X-Content-Type-Options'] = 'nosniff'
        response['X-XSS-Protection'] = '1; mode=block'
        response['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response['Permissions-Policy'] = 'camera=(), microphone=(), geolocation=()'
        response['Content-Security-Policy'] = self.content_security_policy()

        return response
