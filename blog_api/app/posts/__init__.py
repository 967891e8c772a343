from blog_api.app.posts.domains import (
    ContentTarget,
    PostCreateRequest,
    PostCreateResponse,
    PostUpdateRequest,
    PostUpdateResponse,
)
from blog_api.app.posts.service import PostService

__all__ = [
    # Domains
    'ContentTarget',
    'PostCreateRequest',
    'PostCreateResponse',
    'PostUpdateRequest',
    'PostUpdateResponse',
    # Services
    'PostService',
]
