"""
Tests for the project config lifecycle — ensure, read, update, delete.
"""

from __future__ import annotations

import json

import pytest

from pressroom.adapters.mock import MockProvider, blob_sha
from pressroom.core.errors import ConfigDocumentError, ConflictError
from pressroom.core.models.project import ProjectCollection, ProjectConfig
from pressroom.core.services.config_ops import (
    CONFIG_FILE_NAME,
    CONFIG_FILE_TEMPLATE,
    delete_config,
    dump_config,
    ensure_config,
    read_config,
    read_config_document,
    update_config,
)
from tests.helpers import BRANCH, REPO


@pytest.fixture
def repo(provider: MockProvider) -> MockProvider:
    """Provider with a repository that has no config document yet."""
    provider.add_file(REPO, "README.md", "# Site\n")
    return provider


class TestEnsureConfig:
    def test_creates_default_document(self, repo: MockProvider):
        assert ensure_config(repo, REPO, BRANCH) is True
        assert repo.read_file(REPO, CONFIG_FILE_NAME) == CONFIG_FILE_TEMPLATE
        assert json.loads(CONFIG_FILE_TEMPLATE) == {"collections": [], "templates": []}

    def test_commit_message_skips_ci(self, repo: MockProvider):
        ensure_config(repo, REPO, BRANCH)
        assert repo.commits[-1].message.startswith("[skip ci]")

    def test_idempotent(self, repo: MockProvider):
        assert ensure_config(repo, REPO, BRANCH) is True
        first = repo.read_file(REPO, CONFIG_FILE_NAME)

        assert ensure_config(repo, REPO, BRANCH) is False

        assert repo.call_count("put_blob") == 1
        assert repo.read_file(REPO, CONFIG_FILE_NAME) == first

    def test_existing_document_untouched(self, blog: MockProvider):
        before = blog.read_file(REPO, CONFIG_FILE_NAME)
        assert ensure_config(blog, REPO, BRANCH) is False
        assert blog.read_file(REPO, CONFIG_FILE_NAME) == before


class TestReadConfig:
    def test_absent_reads_as_default(self, repo: MockProvider):
        conf, sha = read_config_document(repo, REPO, BRANCH)
        assert conf == ProjectConfig()
        assert sha is None
        assert repo.call_count("put_blob") == 0

    def test_existing_document(self, blog: MockProvider):
        conf = read_config(blog, REPO, BRANCH)
        assert conf.media_folder == "images"
        assert conf.get_collection("blog").route == "/posts"
        assert conf.get_template("post").fields[0].field == "title"
        assert conf.get_collection("nope") is None

    def test_sha_matches_blob(self, blog: MockProvider):
        _conf, sha = read_config_document(blog, REPO, BRANCH)
        assert sha == blob_sha(blog.read_file(REPO, CONFIG_FILE_NAME))

    def test_invalid_json(self, repo: MockProvider):
        repo.add_file(REPO, CONFIG_FILE_NAME, "{not json")
        with pytest.raises(ConfigDocumentError):
            read_config(repo, REPO, BRANCH)

    def test_wrong_shape(self, repo: MockProvider):
        repo.add_file(REPO, CONFIG_FILE_NAME, '{"collections": [{"name": "no id"}]}')
        with pytest.raises(ConfigDocumentError):
            read_config(repo, REPO, BRANCH)

    def test_not_an_object(self, repo: MockProvider):
        repo.add_file(REPO, CONFIG_FILE_NAME, "[]")
        with pytest.raises(ConfigDocumentError):
            read_config(repo, REPO, BRANCH)

    def test_empty_file_reads_as_default(self, repo: MockProvider):
        repo.add_file(REPO, CONFIG_FILE_NAME, "")
        assert read_config(repo, REPO, BRANCH) == ProjectConfig()


class TestUpdateConfig:
    def test_replaces_document(self, repo: MockProvider):
        ensure_config(repo, REPO, BRANCH)
        conf = ProjectConfig(
            media_folder="/",
            collections=[ProjectCollection(id="news", name="News", route="news")],
        )

        new_sha = update_config(repo, REPO, BRANCH, conf)

        stored = json.loads(repo.read_file(REPO, CONFIG_FILE_NAME))
        assert stored["mediaFolder"] == "/"
        assert stored["collections"][0]["route"] == "news"
        assert new_sha == blob_sha(repo.read_file(REPO, CONFIG_FILE_NAME))
        assert read_config(repo, REPO, BRANCH) == conf

    def test_creates_when_absent(self, repo: MockProvider):
        update_config(repo, REPO, BRANCH, ProjectConfig())
        assert repo.read_file(REPO, CONFIG_FILE_NAME) == dump_config(ProjectConfig())

    def test_explicit_base_sha(self, blog: MockProvider):
        conf, sha = read_config_document(blog, REPO, BRANCH)
        conf.media_folder = "assets"
        update_config(blog, REPO, BRANCH, conf, base_sha=sha)
        assert read_config(blog, REPO, BRANCH).media_folder == "assets"

    def test_stale_base_sha_conflicts(self, blog: MockProvider):
        conf, stale_sha = read_config_document(blog, REPO, BRANCH)

        # someone else edits the document in between
        external = ProjectConfig(media_folder="theirs")
        update_config(blog, REPO, BRANCH, external, base_sha=stale_sha)

        conf.media_folder = "mine"
        with pytest.raises(ConflictError):
            update_config(blog, REPO, BRANCH, conf, base_sha=stale_sha)

        assert read_config(blog, REPO, BRANCH).media_folder == "theirs"

    def test_omits_unset_media_folder(self, repo: MockProvider):
        update_config(repo, REPO, BRANCH, ProjectConfig())
        assert "mediaFolder" not in json.loads(repo.read_file(REPO, CONFIG_FILE_NAME))

    def test_unknown_keys_survive_rewrite(self, repo: MockProvider):
        repo.add_file(REPO, CONFIG_FILE_NAME, json.dumps({
            "mediaFolder": "img",
            "siteUrl": "https://example.org",
            "collections": [{"id": "blog", "name": "Blog", "route": "posts", "sortBy": "order"}],
            "templates": [{"id": "post", "name": "Post", "icon": "pen", "fields": [
                {"name": "Title", "placeholder": "Untitled"},
            ]}],
        }))
        conf, sha = read_config_document(repo, REPO, BRANCH)
        conf.media_folder = "static"

        update_config(repo, REPO, BRANCH, conf, base_sha=sha)

        written = json.loads(repo.read_file(REPO, CONFIG_FILE_NAME))
        assert written["mediaFolder"] == "static"
        assert written["siteUrl"] == "https://example.org"
        assert written["collections"][0]["sortBy"] == "order"
        assert written["templates"][0]["icon"] == "pen"
        assert written["templates"][0]["fields"][0]["placeholder"] == "Untitled"

    def test_non_text_field_defaults(self, repo: MockProvider):
        repo.add_file(REPO, CONFIG_FILE_NAME, json.dumps({
            "templates": [{"id": "post", "name": "Post", "fields": [
                {"name": "Order", "field": "number", "default": 0},
                {"name": "Draft", "field": "checkbox", "default": False},
            ]}],
        }))
        fields = read_config(repo, REPO, BRANCH).get_template("post").fields
        assert [(f.default, type(f.default)) for f in fields] == [(0, int), (False, bool)]
        written = json.loads(dump_config(read_config(repo, REPO, BRANCH)))
        assert written["templates"][0]["fields"][1]["default"] is False


class TestDeleteConfig:
    def test_absent_is_noop(self, repo: MockProvider):
        assert delete_config(repo, REPO, BRANCH) is False
        assert repo.call_count("delete_blob") == 0

    def test_deletes_with_skip_marker(self, blog: MockProvider):
        assert delete_config(blog, REPO, BRANCH) is True
        assert blog.read_file(REPO, CONFIG_FILE_NAME) is None
        assert blog.commits[-1].message.startswith("[skip ci]")

    def test_full_lifecycle(self, repo: MockProvider):
        ensure_config(repo, REPO, BRANCH)
        conf = read_config(repo, REPO, BRANCH)
        conf.media_folder = "img"
        update_config(repo, REPO, BRANCH, conf)
        assert read_config(repo, REPO, BRANCH).media_folder == "img"
        assert delete_config(repo, REPO, BRANCH) is True
        assert read_config(repo, REPO, BRANCH) == ProjectConfig()
