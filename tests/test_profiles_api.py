"""Profile routes: self-service, admin edits with read-back, role gating and broadcasts."""

import io
from unittest.mock import AsyncMock, patch

from PIL import Image
from starlette.concurrency import run_in_threadpool

from app.realtime import PROFILE_UPDATED
from app.services import storage
from support import ApiTestCase


class TestProfileAdminRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_h = self.admin_headers()
        self.app.state.hub.sio.emit = AsyncMock()
        signup = self.client.post(
            "/api/auth/signup",
            json={"email": "a@b.com", "password": "secret1", "firstName": "A", "lastName": "B"},
        ).json()
        self.new_id = signup["user"]["id"]
        self.new_h = {"Authorization": f"Bearer {signup['token']}"}

    def test_admin_put_status_is_visible_on_read_back(self) -> None:
        response = self.client.put(
            f"/api/profiles/{self.new_id}", json={"status": "approved"}, headers=self.admin_h
        )
        self.assertEqual(response.status_code, 200)
        read = self.client.get(f"/api/profiles/{self.new_id}", headers=self.admin_h)
        self.assertEqual(read.json()["status"], "approved")
        self.app.state.hub.sio.emit.assert_any_await(PROFILE_UPDATED, response.json())

    def test_admin_put_null_role_is_rejected(self) -> None:
        response = self.client.put(
            f"/api/profiles/{self.new_id}", json={"role": None}, headers=self.admin_h
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"][0]["path"], "role")
        read = self.client.get(f"/api/profiles/{self.new_id}", headers=self.admin_h)
        self.assertEqual(read.json()["role"], "resident")
        self.app.state.hub.sio.emit.assert_not_awaited()

    def test_resident_cannot_approve_and_state_is_unchanged(self) -> None:
        for method, path, body in (
            ("put", f"/api/profiles/{self.new_id}", {"status": "approved"}),
            ("post", f"/api/profiles/{self.new_id}/approve", {"grantAdmin": True}),
            ("put", f"/api/profiles/{self.new_id}/role", {"role": "admin"}),
            ("post", "/api/profiles/bulk/approve", {"ids": [self.new_id]}),
        ):
            response = self.client.request(method, path, json=body, headers=self.new_h)
            self.assertEqual(response.status_code, 403, path)
            self.assertEqual(response.json()["code"], "FORBIDDEN")
        me = self.client.get("/api/profiles/me", headers=self.new_h).json()
        self.assertEqual((me["status"], me["role"]), ("pending", "resident"))
        self.app.state.hub.sio.emit.assert_not_awaited()

    def test_approve_with_grant_admin(self) -> None:
        response = self.client.post(
            f"/api/profiles/{self.new_id}/approve",
            json={"grantAdmin": True},
            headers=self.admin_h,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role"], "admin")
        # The promoted member can now use admin routes with the same token
        self.assertEqual(
            self.client.get("/api/profiles/pending", headers=self.new_h).status_code, 200
        )

    def test_approve_without_body(self) -> None:
        response = self.client.post(
            f"/api/profiles/{self.new_id}/approve", headers=self.admin_h
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "approved")

    def test_pending_list_and_reject(self) -> None:
        pending = self.client.get("/api/profiles/pending", headers=self.admin_h).json()
        self.assertEqual([p["id"] for p in pending], [self.new_id])
        self.client.post(f"/api/profiles/{self.new_id}/reject", headers=self.admin_h)
        self.assertEqual(
            self.client.get("/api/profiles/pending", headers=self.admin_h).json(), []
        )

    def test_filters(self) -> None:
        admins = self.client.get("/api/profiles?role=admin", headers=self.admin_h).json()
        self.assertEqual({p["role"] for p in admins}, {"admin"})
        pending = self.client.get("/api/profiles?status=pending", headers=self.admin_h).json()
        self.assertEqual([p["id"] for p in pending], [self.new_id])

    def test_bulk_approve_reports_ids(self) -> None:
        response = self.client.post(
            "/api/profiles/bulk/approve",
            json={"ids": [self.new_id, "missing"]},
            headers=self.admin_h,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"processed": 2, "succeeded": [self.new_id], "failed": ["missing"]}
        )

    def test_delete_removes_account(self) -> None:
        response = self.client.delete(f"/api/profiles/{self.new_id}", headers=self.admin_h)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.client.get(f"/api/profiles/{self.new_id}", headers=self.admin_h).status_code,
            404,
        )
        # The deleted member's token no longer resolves
        response = self.client.get("/api/profiles/me", headers=self.new_h)
        self.assertEqual(response.json()["code"], "USER_NOT_FOUND")

    def test_unknown_profile_is_404(self) -> None:
        response = self.client.post("/api/profiles/nope/approve", headers=self.admin_h)
        self.assertEqual(response.status_code, 404)


class TestProfileSelfService(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.member = self.create_member("ama@example.org")
        self.headers = self.headers_for(self.member)

    def test_update_me_ignores_role_and_status(self) -> None:
        response = self.client.put(
            "/api/profiles/me",
            json={"phone": "+228 90 00 00 00", "role": "admin", "status": "rejected"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["phone"], "+228 90 00 00 00")
        self.assertEqual((body["role"], body["status"]), ("resident", "approved"))

    def test_patch_me_is_partial(self) -> None:
        response = self.client.patch(
            "/api/profiles/me", json={"hospital": "CHU Sylvanus Olympio"}, headers=self.headers
        )
        self.assertEqual(response.json()["hospital"], "CHU Sylvanus Olympio")
        self.assertEqual(response.json()["firstName"], "Ama")

    def test_update_me_cannot_clear_name(self) -> None:
        response = self.client.put(
            "/api/profiles/me", json={"firstName": None}, headers=self.headers
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"][0]["path"], "firstName")
        me = self.client.get("/api/profiles/me", headers=self.headers).json()
        self.assertEqual(me["firstName"], "Ama")

    def test_avatar_processing_runs_in_threadpool(self) -> None:
        buffer = io.BytesIO()
        Image.new("RGB", (40, 40)).save(buffer, format="PNG")
        with patch("app.services.storage.run_in_threadpool", wraps=run_in_threadpool) as offload:
            response = self.client.post(
                "/api/profiles/me/avatar",
                files={"avatar": ("me.png", buffer.getvalue(), "image/png")},
                headers=self.headers,
            )
        self.assertEqual(response.status_code, 200)
        offload.assert_awaited_once()
        self.assertIs(offload.call_args.args[0], storage._render_avatar)

    def test_avatar_is_cropped_to_square_jpeg(self) -> None:
        buffer = io.BytesIO()
        Image.new("RGBA", (800, 600), (200, 10, 10, 255)).save(buffer, format="PNG")
        response = self.client.post(
            "/api/profiles/me/avatar",
            files={"avatar": ("me.png", buffer.getvalue(), "image/png")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        url = response.json()["avatar"]
        self.assertTrue(url.startswith("/uploads/avatars/"))
        stored = self.settings.UPLOAD_DIR + url[len("/uploads"):]
        with Image.open(stored) as image:
            self.assertEqual(image.size, (500, 500))
            self.assertEqual(image.format, "JPEG")

    def test_avatar_rejects_non_image(self) -> None:
        response = self.client.post(
            "/api/profiles/me/avatar",
            files={"avatar": ("notes.txt", b"hello", "text/plain")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_FILE_TYPE")

    def test_avatar_rejects_corrupt_image(self) -> None:
        response = self.client.post(
            "/api/profiles/me/avatar",
            files={"avatar": ("me.png", b"not really a png", "image/png")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_IMAGE")
