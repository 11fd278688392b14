"""End-to-end tests for the HTTP boundary."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from userql.config import ServiceConfig, SeedUser
from userql.database import Database
from userql.resolvers import GREETING
from userql.service import create_app
from userql.storage import InMemoryUserStore


class BrokenStore(InMemoryUserStore):
    def ping(self) -> None:
        raise RuntimeError("database is locked")


class GraphQLServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tempdir = tempfile.TemporaryDirectory()
        db_path = Path(self._tempdir.name) / "userql.sqlite3"
        self.database = Database(db_path)
        self.database.initialize()
        self.app = create_app(store=self.database, config=ServiceConfig(storage="sqlite"))

    def tearDown(self) -> None:
        self._tempdir.cleanup()

    def test_hello_query(self) -> None:
        with TestClient(self.app) as client:
            response = client.post("/graphql", json={"query": "{ hello }"})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json(), {"data": {"hello": GREETING}})

    def test_create_list_and_fetch_user(self) -> None:
        with TestClient(self.app) as client:
            created = client.post(
                "/graphql",
                json={
                    "query": "mutation CreateUser($name: String!, $email: String!) "
                    "{ createUser(name: $name, email: $email) { id name email } }",
                    "variables": {"name": "Grace", "email": "grace@example.com"},
                },
            )
            self.assertEqual(created.status_code, 200, created.text)
            record = created.json()["data"]["createUser"]
            self.assertEqual(record["name"], "Grace")

            listing = client.post("/graphql", json={"query": "query { users { id name email } }"})
            self.assertEqual(listing.json(), {"data": {"users": [record]}})

            fetched = client.post(
                "/graphql",
                json={"query": f'query {{ user(id: "{record["id"]}") {{ id }} }}'},
            )
            self.assertEqual(fetched.json(), {"data": {"user": record}})

    def test_errors_are_returned_with_status_200(self) -> None:
        with TestClient(self.app) as client:
            response = client.post("/graphql", json={"query": "query { hello"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"errors": [{"message": "Invalid query"}]})

    def test_undecodable_body_is_rejected_with_400(self) -> None:
        with TestClient(self.app) as client:
            response = client.post(
                "/graphql",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )
        self.assertEqual(response.status_code, 400)
        payload = response.json()
        self.assertEqual(list(payload), ["errors"])
        self.assertTrue(payload["errors"][0]["message"])

    def test_body_without_query_is_rejected_with_400(self) -> None:
        with TestClient(self.app) as client:
            missing = client.post("/graphql", json={"variables": {}})
            wrong_type = client.post("/graphql", json=["{ hello }"])
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(wrong_type.status_code, 400)
        self.assertIn("errors", missing.json())

    def test_console_is_served_as_html(self) -> None:
        with TestClient(self.app) as client:
            response = client.get("/graphql")
        self.assertEqual(response.status_code, 200)
        self.assertIn("text/html", response.headers["content-type"])
        self.assertIn("<textarea", response.text)
        self.assertIn("createUser", response.text)

    def test_health_reports_database_status(self) -> None:
        with TestClient(self.app) as client:
            response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["database"], "connected")
        self.assertIn("timestamp", payload)

    def test_health_reports_storage_failure(self) -> None:
        app = create_app(store=BrokenStore())
        with TestClient(app) as client:
            response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "error: database is locked")

    def test_index_lists_endpoints(self) -> None:
        with TestClient(self.app) as client:
            response = client.get("/")
        self.assertEqual(response.json()["endpoints"], {"graphql": "/graphql", "health": "/health"})

    def test_cors_preflight(self) -> None:
        with TestClient(self.app) as client:
            response = client.options(
                "/graphql",
                headers={
                    "Origin": "https://example.com",
                    "Access-Control-Request-Method": "POST",
                    "Access-Control-Request-Headers": "Content-Type",
                },
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")
        self.assertIn("POST", response.headers["access-control-allow-methods"])

    def test_default_app_uses_seeded_memory_store(self) -> None:
        config = ServiceConfig(storage="memory", seed_users=(SeedUser("Seeded", "seeded@example.com"),))
        app = create_app(config=config)
        with TestClient(app) as client:
            response = client.post("/graphql", json={"query": 'query { user(id: "1") { id name } }'})
        self.assertEqual(response.json()["data"]["user"]["name"], "Seeded")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
