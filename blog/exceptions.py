"""
Custom exception classes for the blog app.

The markdown formatter itself never raises; these cover the post repository
that feeds it.
"""


class BlogBaseException(Exception):
    """Base exception class for all blog app exceptions."""
    pass


class InvalidSlugError(BlogBaseException):
    """Raised when a slug could escape the posts directory or is malformed."""

    def __init__(self, slug):
        self.slug = slug
        super().__init__(f"Invalid post slug: {slug!r}")


class PostParseError(BlogBaseException):
    """Raised when a post file's frontmatter cannot be parsed."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Could not parse post {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PostExistsError(BlogBaseException):
    """Raised when saving a post would overwrite a different existing post."""

    def __init__(self, slug):
        self.slug = slug
        super().__init__(f"A post with slug {slug!r} already exists")
