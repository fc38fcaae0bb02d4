"""
Tests for file mutation primitives — save, rename, delete.
"""

from __future__ import annotations

import pytest

from pressroom.adapters.mock import MockProvider, blob_sha
from pressroom.core.errors import ConflictError, NotFoundError
from pressroom.core.services.file_ops import delete_file, rename_file, save_file
from tests.helpers import BRANCH, REPO


@pytest.fixture
def repo(provider: MockProvider) -> MockProvider:
    provider.add_file(REPO, "posts/a.md", "A\n")
    return provider


class TestSaveFile:
    def test_create_new_file(self, repo: MockProvider):
        sha = save_file(repo, REPO, BRANCH, "posts/new.md", "New\n", expected_sha=None)
        assert sha == blob_sha("New\n")
        assert repo.commits[-1].message == "Create file posts/new.md"

    def test_update_with_current_sha(self, repo: MockProvider):
        save_file(repo, REPO, BRANCH, "posts/a.md", "A2\n", expected_sha=blob_sha("A\n"))
        assert repo.read_file(REPO, "posts/a.md") == "A2\n"
        assert repo.commits[-1].message == "Update file posts/a.md"

    def test_existing_file_without_sha_conflicts(self, repo: MockProvider):
        with pytest.raises(ConflictError):
            save_file(repo, REPO, BRANCH, "posts/a.md", "Overwrite\n", expected_sha=None)
        assert repo.read_file(REPO, "posts/a.md") == "A\n"

    def test_stale_sha_conflicts(self, repo: MockProvider):
        with pytest.raises(ConflictError):
            save_file(repo, REPO, BRANCH, "posts/a.md", "Late\n", expected_sha=blob_sha("old\n"))

    def test_expected_sha_is_required(self, repo: MockProvider):
        with pytest.raises(TypeError):
            save_file(repo, REPO, BRANCH, "posts/a.md", "x")  # type: ignore[call-arg]

    def test_custom_message(self, repo: MockProvider):
        save_file(repo, REPO, BRANCH, "b.md", "B", expected_sha=None, message="Add b")
        assert repo.commits[-1].message == "Add b"


class TestRenameFile:
    def test_rename(self, repo: MockProvider):
        result = rename_file(repo, REPO, BRANCH, "posts/a.md", "archive/a.md", blob_sha("A\n"))
        assert repo.read_file(REPO, "posts/a.md") is None
        assert repo.read_file(REPO, "archive/a.md") == "A\n"
        assert result.message == "Move file posts/a.md to archive/a.md"

    def test_stale_sha_conflicts(self, repo: MockProvider):
        with pytest.raises(ConflictError):
            rename_file(repo, REPO, BRANCH, "posts/a.md", "b.md", blob_sha("other"))

    def test_missing_source(self, repo: MockProvider):
        with pytest.raises(NotFoundError):
            rename_file(repo, REPO, BRANCH, "posts/zzz.md", "b.md", "sha")

    def test_same_path_rejected(self, repo: MockProvider):
        with pytest.raises(ValueError):
            rename_file(repo, REPO, BRANCH, "posts/a.md", "posts/a.md", blob_sha("A\n"))


class TestDeleteFile:
    def test_delete(self, repo: MockProvider):
        delete_file(repo, REPO, BRANCH, "posts/a.md")
        assert repo.read_file(REPO, "posts/a.md") is None
        assert repo.commits[-1].message == "Delete file posts/a.md"

    def test_delete_with_stale_sha(self, repo: MockProvider):
        with pytest.raises(ConflictError):
            delete_file(repo, REPO, BRANCH, "posts/a.md", sha=blob_sha("changed"))
        assert repo.read_file(REPO, "posts/a.md") == "A\n"

    def test_delete_missing(self, repo: MockProvider):
        with pytest.raises(NotFoundError):
            delete_file(repo, REPO, BRANCH, "posts/none.md")
