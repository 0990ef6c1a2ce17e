"""Tests for the role and permission administration API."""

from __future__ import annotations

from django.test import TestCase

from access_control.models import Permission, Role, TypePermission
from tests.utils import auth_client, create_user, seed_catalog_basics


class AdminApiTestCase(TestCase):
    @classmethod
    def setUpTestData(cls):
        """Seed the base matrix and one identity per role."""
        cls.roles, cls.types = seed_catalog_basics()
        cls.admin = create_user("admin", cls.roles["Super Admin"])
        cls.editor = create_user("editor", cls.roles["Editor"])
        cls.viewer = create_user("viewer", cls.roles["Viewer"])
        cls.permission_ids = {
            permission.name: permission.pk for permission in Permission.objects.all()
        }


class RoleApiTests(AdminApiTestCase):
    def test_role_admin_requires_manage_roles(self):
        response = auth_client(self.editor).get("/admin/roles/")
        self.assertEqual(response.status_code, 403)
        self.assertIn("manage_roles", response.json()["errors"][0])

    def test_list_roles_with_matrix(self):
        response = auth_client(self.admin).get("/admin/roles/")
        self.assertEqual(response.status_code, 200)
        roles = {row["name"]: row for row in response.json()["data"]}
        self.assertEqual(set(roles), {"Super Admin", "Editor", "Viewer"})

        editor_rows = {row["type_name"]: row for row in roles["Editor"]["type_permissions"]}
        self.assertTrue(editor_rows["Article"]["can_edit"])
        self.assertFalse(editor_rows["Article"]["can_delete"])

    def test_create_role_and_duplicate(self):
        client = auth_client(self.admin)
        created = client.post("/admin/roles/", {"name": "Auditor", "description": "Audits"}, format="json")
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["data"]["permissions"], [])

        duplicate = client.post("/admin/roles/", {"name": "Auditor"}, format="json")
        self.assertEqual(duplicate.status_code, 409)

    def test_roles_cannot_be_deleted_over_the_api(self):
        response = auth_client(self.admin).delete(f"/admin/roles/{self.roles['Viewer'].pk}/")
        self.assertEqual(response.status_code, 405)

    def test_missing_role_is_404(self):
        self.assertEqual(auth_client(self.admin).get("/admin/roles/999999/").status_code, 404)


class GlobalPermissionApiTests(AdminApiTestCase):
    def test_list_permission_catalog(self):
        response = auth_client(self.admin).get("/admin/permissions/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["name"] for row in response.json()["data"]], ["manage_types", "manage_roles"])

    def test_replace_global_permissions(self):
        client = auth_client(self.admin)
        url = f"/admin/roles/{self.roles['Editor'].pk}/permissions/"

        response = client.put(url, {"permission_ids": [self.permission_ids["manage_types"]]}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["permissions"], ["manage_types"])

        # The editor can now manage types on its next request.
        created = auth_client(self.editor).post("/types/", {"name": "Recipe"}, format="json")
        self.assertEqual(created.status_code, 201)

    def test_unknown_permission_id_is_rejected_atomically(self):
        editor = self.roles["Editor"]
        url = f"/admin/roles/{editor.pk}/permissions/"
        client = auth_client(self.admin)
        client.put(url, {"permission_ids": [self.permission_ids["manage_types"]]}, format="json")

        response = client.put(
            url, {"permission_ids": [self.permission_ids["manage_roles"], 999999]}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(list(editor.permissions.values_list("name", flat=True)), ["manage_types"])

    def test_payload_must_be_a_list_of_ids(self):
        url = f"/admin/roles/{self.roles['Editor'].pk}/permissions/"
        response = auth_client(self.admin).put(url, {"permission_ids": "manage_types"}, format="json")
        self.assertEqual(response.status_code, 400)


class TypePermissionApiTests(AdminApiTestCase):
    def _url(self, role, element_type_id):
        return f"/admin/roles/{role.pk}/type-permissions/{element_type_id}/"

    def test_upsert_matrix_cell(self):
        client = auth_client(self.admin)
        viewer = self.roles["Viewer"]
        event = self.types["Event"]
        flags = {"can_view": True, "can_create": True, "can_edit": False, "can_delete": False}

        first = client.put(self._url(viewer, event.pk), flags, format="json")
        second = client.put(self._url(viewer, event.pk), flags, format="json")

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.json()["data"], first.json()["data"])
        self.assertEqual(second.json()["data"]["type_name"], "Event")
        self.assertEqual(TypePermission.objects.filter(role=viewer, element_type=event).count(), 1)

        # Viewer can now create events.
        created = auth_client(self.viewer).post(
            "/elements/", {"element_type": event.pk, "name": "Launch"}, format="json"
        )
        self.assertEqual(created.status_code, 201)

    def test_all_four_flags_are_required(self):
        response = auth_client(self.admin).put(
            self._url(self.roles["Viewer"], self.types["Event"].pk), {"can_view": True}, format="json"
        )
        self.assertEqual(response.status_code, 400)

    def test_unknown_role_or_type_is_404(self):
        flags = {"can_view": True, "can_create": False, "can_edit": False, "can_delete": False}
        client = auth_client(self.admin)
        self.assertEqual(client.put(self._url(self.roles["Viewer"], 999999), flags, format="json").status_code, 404)
        missing_role = Role(pk=999999)
        self.assertEqual(
            client.put(self._url(missing_role, self.types["Event"].pk), flags, format="json").status_code, 404
        )

    def test_editor_cannot_change_matrix(self):
        flags = {"can_view": True, "can_create": True, "can_edit": True, "can_delete": True}
        response = auth_client(self.editor).put(
            self._url(self.roles["Editor"], self.types["Article"].pk), flags, format="json"
        )
        self.assertEqual(response.status_code, 403)


class UserRoleApiTests(AdminApiTestCase):
    def test_list_users(self):
        response = auth_client(self.admin).get("/admin/users/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            {row["username"] for row in response.json()["data"]}, {"admin", "editor", "viewer"}
        )

    def test_reassign_role_applies_on_next_request(self):
        viewer_client = auth_client(self.viewer)
        payload = {"element_type": self.types["Article"].pk, "name": "Promoted"}
        self.assertEqual(viewer_client.post("/elements/", payload, format="json").status_code, 403)

        response = auth_client(self.admin).put(
            f"/admin/users/{self.viewer.pk}/role/", {"role_id": self.roles["Editor"].pk}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["role_name"], "Editor")

        self.assertEqual(viewer_client.post("/elements/", payload, format="json").status_code, 201)

    def test_reassign_to_unknown_role_is_404(self):
        response = auth_client(self.admin).put(
            f"/admin/users/{self.viewer.pk}/role/", {"role_id": 999999}, format="json"
        )
        self.assertEqual(response.status_code, 404)

    def test_user_admin_requires_manage_roles(self):
        response = auth_client(self.editor).put(
            f"/admin/users/{self.editor.pk}/role/", {"role_id": self.roles["Super Admin"].pk}, format="json"
        )
        self.assertEqual(response.status_code, 403)
