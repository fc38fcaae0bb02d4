"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import textwrap

import pytest

from pressroom.adapters.mock import MockProvider
from pressroom.adapters.registry import InMemoryProjectRegistry
from tests.helpers import BRANCH, REPO, post


@pytest.fixture
def provider() -> MockProvider:
    """An empty in-memory provider."""
    return MockProvider(default_branch=BRANCH)


@pytest.fixture
def blog(provider: MockProvider) -> MockProvider:
    """Provider seeded with a three-post collection, listed out of order."""
    provider.add_file(REPO, "README.md", "# Site\n")
    provider.add_file(REPO, "posts/c.md", post("Gamma", 2))
    provider.add_file(REPO, "posts/a.md", post("Alpha", 0))
    provider.add_file(REPO, "posts/b.md", post("Beta", 1))
    provider.add_file(REPO, "posts/drafts/d.md", post("Delta", 3))
    provider.add_file(REPO, "posts/cover.png", "PNG")
    provider.add_file(REPO, "pressroom.config.json", textwrap.dedent("""\
        {
          "mediaFolder": "images",
          "collections": [
            {"id": "blog", "name": "Blog", "route": "/posts", "template": "post"}
          ],
          "templates": [
            {"id": "post", "name": "Post", "fields": [
              {"name": "Title", "field": "title", "default": "", "hidden": false}
            ]}
          ]
        }
    """))
    provider.add_file(REPO, "images/logo.png", "PNG")
    provider.add_file(REPO, "images/notes.md", "# not media\n")
    return provider


@pytest.fixture
def registry() -> InMemoryProjectRegistry:
    return InMemoryProjectRegistry()
