"""
Tests for the web API — app factory and JSON routes.
"""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from pressroom.adapters.mock import MockProvider, blob_sha
from pressroom.adapters.registry import InMemoryProjectRegistry
from pressroom.core.errors import ProviderError
from pressroom.core.services.config_ops import CONFIG_FILE_NAME
from pressroom.ui.web.server import create_app
from tests.helpers import REPO


@pytest.fixture
def project_id(registry: InMemoryProjectRegistry) -> int:
    return registry.create(user="ann", title="Site", repo=REPO)


@pytest.fixture
def client(blog: MockProvider, registry: InMemoryProjectRegistry) -> FlaskClient:
    app = create_app(provider=blog, registry=registry, max_workers=2)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppFactory:
    def test_blueprints(self, blog: MockProvider, registry: InMemoryProjectRegistry):
        app = create_app(provider=blog, registry=registry)
        assert {"projects", "collections", "config", "media"} <= set(app.blueprints)
        assert app.config["PROVIDER"] is blog
        assert app.config["REGISTRY"] is registry

    def test_unknown_project(self, client: FlaskClient):
        resp = client.get("/api/projects/42/config")
        assert resp.status_code == 404
        assert "42" in resp.get_json()["error"]


class TestProjectsRoutes:
    def test_create_and_list(self, client: FlaskClient, blog: MockProvider):
        for title in ("zine", "Atlas"):
            resp = client.post("/api/projects", json={"user": "bob", "title": title, "repo": REPO})
            assert resp.status_code == 201

        resp = client.get("/api/users/bob/projects")
        assert [p["title"] for p in resp.get_json()["projects"]] == ["Atlas", "zine"]

    def test_create_missing_fields(self, client: FlaskClient):
        resp = client.post("/api/projects", json={"user": "bob"})
        assert resp.status_code == 400
        assert "title" in resp.get_json()["error"]

    def test_create_requires_json_object(self, client: FlaskClient):
        resp = client.post("/api/projects", data="nope", content_type="text/plain")
        assert resp.status_code == 400

    def test_get(self, client: FlaskClient, project_id: int):
        resp = client.get(f"/api/projects/{project_id}")
        assert resp.get_json()["project"]["repo"] == REPO

    def test_delete_tears_down(self, client: FlaskClient, blog: MockProvider, project_id: int):
        resp = client.delete(f"/api/projects/{project_id}")
        assert resp.status_code == 200
        assert blog.read_file(REPO, CONFIG_FILE_NAME) is None
        assert client.get(f"/api/projects/{project_id}").status_code == 404


class TestCollectionsRoutes:
    def test_documents_in_order(self, client: FlaskClient, project_id: int):
        resp = client.get(f"/api/projects/{project_id}/collections/blog")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["branch"] == "main"
        assert data["collection"]["route"] == "/posts"
        assert [d["path"] for d in data["documents"]] == ["posts/a.md", "posts/b.md", "posts/c.md"]

    def test_unknown_collection(self, client: FlaskClient, project_id: int):
        resp = client.get(f"/api/projects/{project_id}/collections/nope")
        assert resp.status_code == 404

    def test_missing_blob(self, client: FlaskClient, blog: MockProvider, project_id: int):
        blog.set_missing("posts/b.md")
        resp = client.get(f"/api/projects/{project_id}/collections/blog")
        assert resp.status_code == 404
        assert "posts/b.md" in resp.get_json()["error"]

    def test_provider_failure(self, client: FlaskClient, blog: MockProvider, project_id: int):
        blog.set_failure("get_tree", ProviderError("host down", status=503))
        resp = client.get(f"/api/projects/{project_id}/collections/blog")
        assert resp.status_code == 502

    def test_reorder(self, client: FlaskClient, blog: MockProvider, project_id: int):
        docs = client.get(f"/api/projects/{project_id}/collections/blog").get_json()["documents"]
        docs.reverse()

        resp = client.put(f"/api/projects/{project_id}/collections/blog/order", json={"documents": docs})
        assert resp.status_code == 200
        assert resp.get_json()["commit"]["message"] == "Updated order for files in /posts"

        after = client.get(f"/api/projects/{project_id}/collections/blog").get_json()["documents"]
        assert [d["path"] for d in after] == ["posts/c.md", "posts/b.md", "posts/a.md"]
        assert blog.call_count("commit") == 1

    def test_reorder_duplicate_documents(self, client: FlaskClient, blog: MockProvider, project_id: int):
        docs = client.get(f"/api/projects/{project_id}/collections/blog").get_json()["documents"]
        resp = client.put(
            f"/api/projects/{project_id}/collections/blog/order",
            json={"documents": [docs[0], *docs]},
        )
        assert resp.status_code == 400
        assert blog.call_count("commit") == 0

    def test_reorder_bad_body(self, client: FlaskClient, project_id: int):
        resp = client.put(f"/api/projects/{project_id}/collections/blog/order", json={"documents": "x"})
        assert resp.status_code == 400

    def test_reorder_invalid_document(self, client: FlaskClient, project_id: int):
        resp = client.put(
            f"/api/projects/{project_id}/collections/blog/order",
            json={"documents": [{"title": "No path"}]},
        )
        assert resp.status_code == 400
        assert resp.get_json()["details"]


class TestConfigRoutes:
    def test_get(self, client: FlaskClient, blog: MockProvider, project_id: int):
        data = client.get(f"/api/projects/{project_id}/config").get_json()
        assert data["config"]["mediaFolder"] == "images"
        assert data["sha"] == blob_sha(blog.read_file(REPO, CONFIG_FILE_NAME))

    def test_ensure_existing(self, client: FlaskClient, project_id: int):
        resp = client.post(f"/api/projects/{project_id}/config")
        assert resp.status_code == 200
        assert resp.get_json() == {"created": False}

    def test_update_with_stale_sha(self, client: FlaskClient, project_id: int):
        data = client.get(f"/api/projects/{project_id}/config").get_json()
        config = data["config"]
        config["mediaFolder"] = "static"

        first = client.put(f"/api/projects/{project_id}/config", json={"config": config, "sha": data["sha"]})
        assert first.status_code == 200

        second = client.put(f"/api/projects/{project_id}/config", json={"config": config, "sha": data["sha"]})
        assert second.status_code == 409

    def test_invalid_document(self, client: FlaskClient, blog: MockProvider, project_id: int):
        blog.add_file(REPO, CONFIG_FILE_NAME, "{not json")
        resp = client.get(f"/api/projects/{project_id}/config")
        assert resp.status_code == 422

    def test_delete_then_create(self, client: FlaskClient, project_id: int):
        assert client.delete(f"/api/projects/{project_id}/config").get_json() == {"deleted": True}
        assert client.delete(f"/api/projects/{project_id}/config").get_json() == {"deleted": False}

        resp = client.post(f"/api/projects/{project_id}/config")
        assert resp.status_code == 201


class TestMediaRoutes:
    def test_list(self, client: FlaskClient, project_id: int):
        data = client.get(f"/api/projects/{project_id}/media").get_json()
        assert data["folder"] == "images"
        assert [f["path"] for f in data["files"]] == ["images/logo.png"]

    def test_rename(self, client: FlaskClient, blog: MockProvider, project_id: int):
        resp = client.put(f"/api/projects/{project_id}/media", json={
            "path": "images/logo.png", "sha": blob_sha("PNG"), "operation": "rename", "name": "brand.png",
        })
        assert resp.status_code == 200
        assert blog.read_file(REPO, "images/brand.png") == "PNG"

    def test_move_stale_sha(self, client: FlaskClient, project_id: int):
        resp = client.put(f"/api/projects/{project_id}/media", json={
            "path": "images/logo.png", "sha": blob_sha("old"), "operation": "move", "folder": "static",
        })
        assert resp.status_code == 409

    def test_unknown_operation(self, client: FlaskClient, project_id: int):
        resp = client.put(f"/api/projects/{project_id}/media", json={
            "path": "images/logo.png", "sha": "x", "operation": "copy",
        })
        assert resp.status_code == 400

    def test_delete(self, client: FlaskClient, blog: MockProvider, project_id: int):
        resp = client.delete(f"/api/projects/{project_id}/media", json={"path": "images/logo.png"})
        assert resp.status_code == 200
        assert blog.read_file(REPO, "images/logo.png") is None
