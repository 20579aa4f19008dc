"""End-to-end HTTP tests: login, token verifier, admin gate, envelopes and CRUD routes."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from fastapi.testclient import TestClient

from pipeline_api.core.security import create_access_token, decode_access_token
from pipeline_api.main import create_app
from pipeline_api.models import ChangeRequest, Pipeline
from tests.support import (
    TEST_PASSWORD,
    make_engine,
    make_session_factory,
    make_settings,
    pipeline_body,
    seed_pipeline,
    seed_user,
    token_for,
)


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.session_factory = make_session_factory(self.engine)
        self.settings = make_settings()
        self.client = TestClient(create_app(self.settings, self.session_factory))
        # Capture plain values while the seeding session is open.
        with self.session_factory() as db:
            seed = seed_pipeline(db)
            admin = seed_user(db, email="admin@example.com", role="admin", name="Admin")
            self.user_token = token_for(seed["sales"], self.settings)
            self.admin_token = token_for(admin, self.settings)
            self.ids = {
                "pipeline": seed["pipeline"].uuid,
                "pipeline_id": seed["pipeline"].id,
                "category": seed["category"].uuid,
                "category_id": seed["category"].id,
                "end_user_id": seed["end_user"].id,
                "sales_id": seed["sales"].id,
                "sales_uuid": seed["sales"].uuid,
                "pic_id": seed["pic"].id,
            }

    def tearDown(self) -> None:
        self.client.close()
        self.engine.dispose()

    def auth(self, token: str | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {token or self.user_token}"}


class TestLogin(ApiTestCase):
    def test_valid_credentials_return_token_with_stored_role(self) -> None:
        resp = self.client.post(
            "/api/login", json={"email": "admin@example.com", "password": TEST_PASSWORD}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status_code"], 200)
        self.assertEqual(body["message"], "Authentication success")
        claims = decode_access_token(body["payload"]["token"], self.settings)
        self.assertEqual(claims["role"], "admin")
        self.assertEqual(claims["email"], "admin@example.com")
        self.assertEqual(claims["name"], "Admin")

    def test_token_id_is_public_uuid(self) -> None:
        resp = self.client.post(
            "/api/login", json={"email": "budi@example.com", "password": TEST_PASSWORD}
        )
        claims = decode_access_token(resp.json()["payload"]["token"], self.settings)
        self.assertEqual(claims["id"], self.ids["sales_uuid"])

    def test_wrong_password_is_404(self) -> None:
        resp = self.client.post(
            "/api/login", json={"email": "admin@example.com", "password": "Wrong!pass1"}
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Invalid email or password")

    def test_unknown_email_is_404(self) -> None:
        resp = self.client.post(
            "/api/login", json={"email": "nobody@example.com", "password": TEST_PASSWORD}
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Invalid email or password")

    def test_missing_fields_is_400(self) -> None:
        resp = self.client.post("/api/login", json={"email": "admin@example.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "All data are required")

    def test_other_stored_role_logs_in_and_uses_protected_routes(self) -> None:
        with self.session_factory() as db:
            seed_user(db, email="manager@example.com", role="manager", name="Sari")
        resp = self.client.post(
            "/api/login", json={"email": "manager@example.com", "password": TEST_PASSWORD}
        )
        self.assertEqual(resp.status_code, 200)
        token = resp.json()["payload"]["token"]
        self.assertEqual(decode_access_token(token, self.settings)["role"], "manager")
        resp = self.client.get("/api/pipelines", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["payload"]), 1)



class TestTokenVerifier(ApiTestCase):
    def test_missing_token_is_403(self) -> None:
        resp = self.client.get("/api/pipelines")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Access denied, no token provided")

    def test_bad_signature_is_401(self) -> None:
        forged = create_access_token(
            {"id": self.ids["sales_uuid"], "email": "admin@example.com", "name": "Admin", "role": "admin"},
            make_settings(JWT_SECRET="not-the-server-secret"),
        )
        resp = self.client.get("/api/pipelines", headers=self.auth(forged))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Unauthorized")

    def test_expired_token_is_401(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=1)
        expired = jwt.encode(
            {"id": "x", "email": "a@b.com", "name": "A", "role": "user", "exp": past, "iat": past},
            "test-secret",
            algorithm="HS256",
        )
        resp = self.client.get("/api/pipelines", headers=self.auth(expired))
        self.assertEqual(resp.status_code, 401)

    def test_unrecognised_role_is_treated_as_standard(self) -> None:
        exp = datetime.now(UTC) + timedelta(minutes=5)
        token = jwt.encode(
            {"id": "x", "email": "a@b.com", "name": "A", "role": "superuser", "exp": exp},
            "test-secret",
            algorithm="HS256",
        )
        resp = self.client.get("/api/pipelines", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        resp = self.client.put("/api/approve-change-request/missing", headers=self.auth(token))
        self.assertEqual(resp.status_code, 403)


    def test_health_is_public(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()["payload"]
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["environment"], "test")
        self.assertEqual(payload["database"], "connected")


class TestPipelineRoutes(ApiTestCase):
    def test_list_returns_denormalised_rows(self) -> None:
        resp = self.client.get("/api/pipelines", headers=self.auth())
        self.assertEqual(resp.status_code, 200)
        rows = resp.json()["payload"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["sales_name"], "Budi")
        self.assertEqual(rows[0]["categories"], "IT Infrastructure")

    def test_create_is_201(self) -> None:
        resp = self.client.post("/api/pipelines", json=pipeline_body(self.ids), headers=self.auth())
        self.assertEqual(resp.status_code, 201)
        created = resp.json()["payload"]
        self.assertEqual(created["project_name"], "Migrasi Cloud")
        self.assertEqual(created["id_user_sales"], self.ids["sales_id"])
        self.assertEqual(len(created["uuid"]), 36)

    def test_create_missing_field_is_400(self) -> None:
        resp = self.client.post(
            "/api/pipelines", json={"project_name": "Half a deal"}, headers=self.auth()
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "All data are required")
        self.assertEqual(body["payload"], "Data error")

    def test_empty_status_counts_as_missing(self) -> None:
        body = pipeline_body(self.ids, status="")
        resp = self.client.post("/api/pipelines", json=body, headers=self.auth())
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "All data are required")

    def test_null_field_counts_as_missing(self) -> None:
        for field in ("status", "id_end_user", "product_price", "estimated_closed_date"):
            with self.subTest(field=field):
                body = pipeline_body(self.ids, **{field: None})
                resp = self.client.post("/api/pipelines", json=body, headers=self.auth())
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["message"], "All data are required")

    def test_zero_id_counts_as_missing(self) -> None:
        body = pipeline_body(self.ids, id_category_project=0)
        resp = self.client.post("/api/pipelines", json=body, headers=self.auth())
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "All data are required")

    def test_negative_id_is_invalid(self) -> None:
        body = pipeline_body(self.ids, id_pic_project=-3)
        resp = self.client.post("/api/pipelines", json=body, headers=self.auth())
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid data")
        with self.session_factory() as db:
            self.assertEqual(db.query(Pipeline).count(), 1)

    def test_update_unknown_is_404(self) -> None:
        body = pipeline_body(self.ids, status="LOST")
        resp = self.client.put("/api/pipelines/missing", json=body, headers=self.auth())
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Pipeline not found")

    def test_delete_unknown_is_404(self) -> None:
        resp = self.client.delete("/api/pipelines/does-not-exist", headers=self.auth())
        self.assertEqual(resp.status_code, 404)
        body = resp.json()
        self.assertEqual(body["message"], "Pipeline not found")
        self.assertEqual(body["payload"], "Data not found")

    def test_delete_known_then_get_is_404(self) -> None:
        uuid = self.ids["pipeline"]
        resp = self.client.delete(f"/api/pipelines/{uuid}", headers=self.auth())
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], f"Pipeline {uuid} removed")
        resp = self.client.get(f"/api/pipelines/{uuid}", headers=self.auth())
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Pipeline not found")


class TestUserRoutes(ApiTestCase):
    def _body(self, **overrides: str) -> dict[str, str]:
        body = {
            "name": "Citra",
            "email": "citra@example.com",
            "role": "user",
            "birthdate": "1995-05-05",
            "password": "N3w!secret",
        }
        body.update(overrides)
        return body

    def test_create_hides_password(self) -> None:
        resp = self.client.post("/api/users", json=self._body(), headers=self.auth())
        self.assertEqual(resp.status_code, 201)
        payload = resp.json()["payload"]
        self.assertEqual(payload["email"], "citra@example.com")
        self.assertEqual(payload["birthdate"], "1995-05-05")
        self.assertNotIn("password", payload)

    def test_weak_password_reports_first_rule(self) -> None:
        resp = self.client.post(
            "/api/users", json=self._body(password="alllowercase"), headers=self.auth()
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "Password must contain at least one number")
        self.assertEqual(body["payload"], "Password error")

    def test_bad_email_is_400(self) -> None:
        resp = self.client.post(
            "/api/users", json=self._body(email="not-an-email"), headers=self.auth()
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Email format is invalid")

    def test_unknown_role_is_rejected(self) -> None:
        resp = self.client.post("/api/users", json=self._body(role="root"), headers=self.auth())
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid data")

    def test_duplicate_email_is_400(self) -> None:
        resp = self.client.post(
            "/api/users", json=self._body(email="admin@example.com"), headers=self.auth()
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Data violates a database constraint")

    def test_update_rehashes_and_new_password_logs_in(self) -> None:
        created = self.client.post("/api/users", json=self._body(), headers=self.auth()).json()
        uuid = created["payload"]["uuid"]
        resp = self.client.put(
            f"/api/users/{uuid}",
            json=self._body(name="Citra D.", password="Chang3d!pw"),
            headers=self.auth(),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["payload"]["name"], "Citra D.")
        login = self.client.post(
            "/api/login", json={"email": "citra@example.com", "password": "Chang3d!pw"}
        )
        self.assertEqual(login.status_code, 200)

    def test_delete_unknown_is_404(self) -> None:
        resp = self.client.delete("/api/users/missing", headers=self.auth())
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "User not found")


class TestCatalogRoutes(ApiTestCase):
    def test_end_user_crud(self) -> None:
        body = {"name": "PT. Maju", "address": "Jakarta", "pic_name": "Sari", "phone_number": "021"}
        created = self.client.post("/api/endusers", json=body, headers=self.auth())
        self.assertEqual(created.status_code, 201)
        uuid = created.json()["payload"]["uuid"]
        self.assertEqual(self.client.get(f"/api/endusers/{uuid}", headers=self.auth()).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/endusers/{uuid}", headers=self.auth()).status_code, 200)
        missing = self.client.get(f"/api/endusers/{uuid}", headers=self.auth())
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "End user not found")

    def test_category_paths(self) -> None:
        uuid = self.ids["category"]
        for prefix in ("/api/project-categories", "/api/categories"):
            with self.subTest(prefix=prefix):
                resp = self.client.get(f"{prefix}/{uuid}", headers=self.auth())
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(resp.json()["payload"]["name"], "IT Infrastructure")

    def test_category_update_and_delete(self) -> None:
        uuid = self.ids["category"]
        resp = self.client.put(
            f"/api/project-categories/{uuid}", json={"name": "Cloud"}, headers=self.auth()
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Categories updated")
        resp = self.client.delete("/api/project-categories/missing", headers=self.auth())
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Categories not found")


class TestChangeRequestRoutes(ApiTestCase):
    def _create(self) -> str:
        resp = self.client.post(
            "/api/change-request",
            json={
                "id_pipeline": self.ids["pipeline_id"],
                "id_end_user": self.ids["end_user_id"],
                "new_status": "LOST",
                "note": "Budget cut",
            },
            headers=self.auth(),
        )
        self.assertEqual(resp.status_code, 201)
        payload = resp.json()["payload"]
        self.assertEqual(payload["request_status"], "PENDING")
        return payload["uuid"]

    def _state(self, request_uuid: str) -> tuple[str, str]:
        with self.session_factory() as db:
            pipeline = db.query(Pipeline).filter(Pipeline.uuid == self.ids["pipeline"]).one()
            request = db.query(ChangeRequest).filter(ChangeRequest.uuid == request_uuid).one()
            return pipeline.status, request.request_status

    def test_create_requires_fields(self) -> None:
        resp = self.client.post(
            "/api/change-request", json={"new_status": "LOST"}, headers=self.auth()
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "All data are required")

    def test_null_or_zero_pipeline_id_is_missing(self) -> None:
        for value in (None, 0):
            with self.subTest(value=value):
                resp = self.client.post(
                    "/api/change-request",
                    json={
                        "id_pipeline": value,
                        "id_end_user": self.ids["end_user_id"],
                        "new_status": "LOST",
                    },
                    headers=self.auth(),
                )
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["message"], "All data are required")

    def test_list_shows_requester(self) -> None:
        self._create()
        rows = self.client.get("/api/change-request", headers=self.auth()).json()["payload"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["user_request"], "Budi")
        self.assertEqual(rows[0]["current_status"], "ON GOING")

    def test_non_admin_approval_is_403_and_changes_nothing(self) -> None:
        request_uuid = self._create()
        resp = self.client.put(f"/api/approve-change-request/{request_uuid}", headers=self.auth())
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Forbidden")
        self.assertEqual(self._state(request_uuid), ("ON GOING", "PENDING"))

    def test_admin_approval(self) -> None:
        request_uuid = self._create()
        resp = self.client.put(
            f"/api/approve-change-request/{request_uuid}", headers=self.auth(self.admin_token)
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Change Request updated")
        self.assertEqual(body["payload"], 1)
        self.assertEqual(self._state(request_uuid), ("LOST", "APPROVED"))
        detail = self.client.get(f"/api/change-request/{request_uuid}", headers=self.auth()).json()
        self.assertEqual(detail["payload"]["user_approve"], "Admin")

    def test_reapproval_is_409_and_keeps_later_pipeline_edit(self) -> None:
        request_uuid = self._create()
        approve_url = f"/api/approve-change-request/{request_uuid}"
        resp = self.client.put(approve_url, headers=self.auth(self.admin_token))
        self.assertEqual(resp.status_code, 200)
        resp = self.client.put(
            f"/api/pipelines/{self.ids['pipeline']}",
            json=pipeline_body(self.ids, status="WON"),
            headers=self.auth(),
        )
        self.assertEqual(resp.status_code, 200)
        resp = self.client.put(approve_url, headers=self.auth(self.admin_token))
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["message"], "Change Request already approved")
        self.assertEqual(self._state(request_uuid), ("WON", "APPROVED"))

    def test_admin_approval_of_unknown_is_404(self) -> None:
        resp = self.client.put(
            "/api/approve-change-request/missing", headers=self.auth(self.admin_token)
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Change Request not found")


if __name__ == "__main__":
    unittest.main()
