"""
Constants and configuration values for the blog app.

This module centralizes the markdown dialect patterns, the terminal theme
class strings emitted by the formatter, and the tunables used by the post
repository and the blog views.
"""
import re

# Pagination / Search
POSTS_PER_PAGE = 9
MAX_SEARCH_QUERY_LENGTH = 200
RELATED_POSTS_LIMIT = 2

# Reading time
WORDS_PER_MINUTE = 200

# Post defaults
DEFAULT_POST_ICON = 'fa-file-code'
POST_FILE_EXTENSION = '.md'

# Cache Timeouts (in seconds)
RENDER_CACHE_TIMEOUT = 3600       # 1 hour for rendered post HTML

# URL / image validation
DANGEROUS_SCHEMES = ('javascript:', 'data:', 'vbscript:', 'file:', 'about:')
SAFE_URL_PREFIXES = ('http://', 'https://', 'mailto:', '/', '#')
SAFE_IMAGE_PREFIXES = ('http://', 'https://', '/')

# Font Awesome icon mapping for post cards
ICON_CLASSES = {
    'fa-file-code': 'fa-solid fa-file-code',
    'fa-shield': 'fa-solid fa-shield',
    'fa-shield-alt': 'fa-solid fa-shield-halved',
    'fa-bug': 'fa-solid fa-bug',
    'fa-gavel': 'fa-solid fa-gavel',
    'fa-code-branch': 'fa-solid fa-code-branch',
    'fa-network-wired': 'fa-solid fa-network-wired',
    'fa-cloud-arrow-up': 'fa-solid fa-cloud-arrow-up',
    'fa-user-secret': 'fa-solid fa-user-secret',
}
DEFAULT_ICON_CLASS = 'fa-solid fa-file-code'

# Slugs
SLUG_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
SLUGIFY_PATTERN = re.compile(r'[^a-z0-9]+')

# Markdown dialect
FENCE_MARKER = '```'
LIST_MARKER = '- '
HEADER_PREFIXES = (
    ('# ', 1),
    ('## ', 2),
    ('### ', 3),
    ('#### ', 4),
)
IMAGE_PATTERN = re.compile(r'^!\[(.*?)\]\((.*?)\)$')
LINK_PATTERN = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
BOLD_PATTERN = re.compile(r'\*\*(.*?)\*\*')
INLINE_CODE_PATTERN = re.compile(r'`(.*?)`')

# Terminal theme classes
HEADER_CLASSES = {
    1: 'text-3xl font-bold text-white mb-4 mt-8',
    2: 'text-xl font-semibold text-white mb-4 mt-8',
    3: 'text-lg font-semibold text-white mb-3 mt-6',
    4: 'text-base font-semibold text-white mb-2 mt-4',
}
PROMPT_CLASS = 'text-terminal-green'
LIST_CLASS = 'list-none space-y-2 mb-6 pl-4'
LIST_ITEM_CLASS = 'text-terminal-gray'
LIST_ARROW = '→'
PARAGRAPH_CLASS = 'text-terminal-gray leading-relaxed mb-6'
COMMAND_CLASS = 'text-terminal-gray mb-6'
CODE_BLOCK_CLASS = 'bg-terminal-bg border border-terminal-border rounded p-4 my-6 overflow-x-auto code-block-wrapper'
CODE_LANGUAGE_CLASS = 'text-terminal-gray text-sm mb-2'
CODE_PRE_CLASS = 'text-terminal-green text-sm code-block-pre'
CODE_CODE_CLASS = 'code-block-code'
HIGHLIGHT_CLASS = 'highlight bg-terminal-bg px-1 py-0.5 rounded border border-terminal-border'
INLINE_CODE_CLASS = 'bg-terminal-bg px-1 py-0.5 text-terminal-green rounded text-sm border border-terminal-border'
LINK_CLASS = 'text-terminal-green hover:text-white underline'
IMAGE_WRAPPER_CLASS = 'my-8'
IMAGE_CLASS = 'w-full rounded border border-terminal-border cursor-pointer hover:opacity-90 transition-opacity blog-image'
IMAGE_HINT_CLASS = 'text-terminal-gray text-xs italic text-center mt-1 opacity-75'
IMAGE_CAPTION_CLASS = 'text-terminal-gray text-sm italic mt-2 mb-6 text-center'
CAPTION_CLASS = 'text-terminal-gray text-sm italic mb-6 text-center'
