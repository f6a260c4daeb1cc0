"""API tests using FastAPI TestClient, run once per storage backend."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conceptos.app import create_app

API = "/api/conceptos"


@pytest.fixture()
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def _create(client, name="Recursion", description="A function calling itself"):
    return client.post(API, json={"name": name, "description": description})


def test_crud_scenario(client):
    resp = _create(client)
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"] == 1
    assert created["name"] == "Recursion"
    assert created["description"] == "A function calling itself"

    resp = client.get(f"{API}/1")
    assert resp.status_code == 200
    assert resp.json() == created

    resp = client.delete(f"{API}/1")
    assert resp.status_code == 200
    assert resp.json() == {"mensaje": "Concepto eliminado", "id": 1}

    resp = client.get(f"{API}/1")
    assert resp.status_code == 404
    body = resp.json()
    assert body["id"] == 1
    assert body["error"]


def test_list(client):
    assert client.get(API).json() == []
    _create(client, "a")
    _create(client, "b")
    assert [c["name"] for c in client.get(API).json()] == ["a", "b"]


def test_create_with_empty_name_is_rejected(client):
    resp = client.post(API, json={"name": "", "description": "x"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Error al crear concepto"
    assert body["mensaje"]
    assert client.get(f"{API}/stats").json()["count"] == 0


def test_create_accepts_spanish_body(client):
    resp = client.post(API, json={"nombre": "Cola", "descripcion": "FIFO"})
    assert resp.status_code == 201
    assert resp.json()["name"] == "Cola"


def test_malformed_json_is_400(client):
    resp = client.post(API, content=b"{broken", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "JSON inválido"

    _create(client)
    resp = client.put(f"{API}/1", content=b"[1, 2]", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_update(client):
    _create(client, "Old", "keep")
    resp = client.put(f"{API}/1", json={"name": "New"})
    assert resp.status_code == 200
    body = resp.json()
    assert (body["id"], body["name"], body["description"]) == (1, "New", "keep")

    resp = client.put(f"{API}/1", json={"name": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Error al actualizar concepto"

    resp = client.put(f"{API}/77", json={"name": "x"})
    assert resp.status_code == 404
    assert resp.json()["id"] == 77


def test_delete_unknown_is_404(client):
    resp = client.delete(f"{API}/3")
    assert resp.status_code == 404
    assert resp.json()["id"] == 3


def test_delete_all(client):
    _create(client, "a")
    _create(client, "b")
    resp = client.delete(API)
    assert resp.status_code == 200
    assert resp.json() == {"mensaje": "Todos los conceptos eliminados", "cantidad": 2}
    assert client.get(API).json() == []
    assert client.get(f"{API}/stats").json()["count"] == 0


def test_search(client):
    _create(client, "Binary Tree", "hierarchical")
    _create(client, "List", "a TREE-less structure")
    _create(client, "Hash", "buckets")
    resp = client.get(f"{API}/buscar", params={"q": "tree"})
    assert resp.status_code == 200
    assert sorted(c["name"] for c in resp.json()) == ["Binary Tree", "List"]
    assert client.get(f"{API}/buscar", params={"q": "graph"}).json() == []


def test_search_without_q_is_400(client):
    resp = client.get(f"{API}/buscar")
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_stats(client):
    _create(client, "a")
    _create(client, "b")
    assert client.get(f"{API}/stats").json() == {"count": 2, "max_id": 2}


def test_non_numeric_id_is_route_not_found(client):
    resp = client.get(f"{API}/abc")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Ruta no encontrada", "ruta": f"{API}/abc", "metodo": "GET"}


def test_unknown_route_and_method(client):
    assert client.get("/api/otra").status_code == 404
    resp = client.patch(API, json={})
    assert resp.status_code == 404
    assert resp.json()["metodo"] == "PATCH"


def test_options_preflight(client):
    for path in (API, f"{API}/1", "/whatever"):
        resp = client.options(path)
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_headers_on_every_response(client):
    assert client.get(API).headers["access-control-allow-origin"] == "*"
    resp = client.get(f"{API}/404")
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in resp.headers["access-control-allow-methods"]


def test_persistence_failure_is_500(client):
    class Broken:
        def list_all(self):
            from conceptos.core.errors import PersistenceError

            raise PersistenceError("disk on fire")

    client.app.state.concept_service.repository = Broken()
    resp = client.get(API)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Error interno del servidor"}


def test_unexpected_failure_is_500_and_server_keeps_running(client):
    original = client.app.state.concept_service.repository

    class Exploding:
        def stats(self):
            raise ZeroDivisionError("boom")

    client.app.state.concept_service.repository = Exploding()
    resp = client.get(f"{API}/stats")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Error interno del servidor"}
    assert resp.headers["access-control-allow-origin"] == "*"

    client.app.state.concept_service.repository = original
    assert client.get(API).status_code == 200


def test_responses_carry_spanish_keys_for_the_browser_client(client):
    body = _create(client, "Pila", "LIFO").json()
    assert body["nombre"] == "Pila"
    assert body["descripcion"] == "LIFO"
    listed = client.get(API).json()[0]
    assert (listed["nombre"], listed["descripcion"]) == ("Pila", "LIFO")


def test_id_beyond_64_bits_is_not_found(client):
    huge = "9" * 25
    for method in ("get", "delete"):
        resp = getattr(client, method)(f"{API}/{huge}")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Concepto no encontrado"
    resp = client.put(f"{API}/{huge}", json={"name": "x"})
    assert resp.status_code == 404


def test_trailing_slash_is_route_not_found(client):
    resp = client.get(f"{API}/", follow_redirects=False)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Ruta no encontrada"


def test_search_with_blank_q_is_not_rejected(client):
    _create(client, "merge sort")
    _create(client, "mergesort")
    resp = client.get(f"{API}/buscar", params={"q": " sort"})
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["merge sort"]
    assert client.get(f"{API}/buscar", params={"q": ""}).status_code == 400
