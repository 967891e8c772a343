from typing import Any

from blog_api.common.domain import BaseDomain, RequestDomain


class PostCreateRequest(RequestDomain):
    target_dir: str | None = None
    file_name: str | None = None
    commit_message: str | None = None
    file_content: str | None = None


class PostUpdateRequest(RequestDomain):
    file_path: str | None = None
    new_content: str | None = None
    commit_message: str | None = None
    sha: str | None = None  # blob sha the edit was based on, GitHub rejects stale ones


class PostCreateResponse(BaseDomain):
    message: str = 'Post created successfully on GitHub'
    data: Any = None


class PostUpdateResponse(BaseDomain):
    message: str = 'Post updated successfully on GitHub'
    data: Any = None
    new_sha: str | None = None


class ContentTarget(BaseDomain):
    """
    What a contents request points at, decided once by the route that matched
    """

    path: str
    is_file: bool
    filename: str | None = None

    @classmethod
    def for_file(cls, folder: str, filename: str) -> 'ContentTarget':
        return cls(path=f'{folder}/{filename}', is_file=True, filename=filename)

    @classmethod
    def for_folder(cls, folder: str) -> 'ContentTarget':
        return cls(path=folder, is_file=False)

    @property
    def is_markdown(self) -> bool:
        return self.is_file and bool(self.filename) and self.filename.lower().endswith('.md')
