"""
Management command to lint blog posts before publishing.

Reports, per post:
- Links with unsafe targets (rendered as plain text)
- Images with unsafe sources (dropped entirely)
- Code fences that are never closed (contents dropped)

Usage:
    python manage.py check_posts
    python manage.py check_posts --slug hardening-nginx
    python manage.py check_posts --strict
"""
from django.core.management.base import BaseCommand, CommandError

from blog.exceptions import PostParseError
from blog.services.markdown_service import MarkdownService
from blog.services.post_service import PostService


class Command(BaseCommand):
    help = 'Check blog posts for content the markdown formatter will drop'

    def add_arguments(self, parser):
        parser.add_argument(
            '--slug',
            type=str,
            help='Only check the post with this slug',
        )
        parser.add_argument(
            '--strict',
            action='store_true',
            help='Exit with an error if any problem is found',
        )

    def handle(self, *args, **options):
        slug = options.get('slug')

        if slug:
            try:
                post = PostService.get_post_by_slug(slug)
            except PostParseError as e:
                raise CommandError(str(e))
            if post is None:
                raise CommandError(f"Post '{slug}' not found.")
            posts = [post]
        else:
            posts = PostService.get_all_posts()

        problem_count = 0
        for post in posts:
            issues = MarkdownService.find_issues(post.content)
            if not issues:
                self.stdout.write(f"  ok  {post.slug}")
                continue

            problem_count += len(issues)
            self.stdout.write(self.style.WARNING(f"  !!  {post.slug}"))
            for issue in issues:
                self.stdout.write(f"        {issue}")

        self.stdout.write(f"\nChecked {len(posts)} post(s), found {problem_count} problem(s)")

        if problem_count and options['strict']:
            raise CommandError(f"{problem_count} problem(s) found")

        if not problem_count:
            self.stdout.write(self.style.SUCCESS('All posts render cleanly'))
