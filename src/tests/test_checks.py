"""System check tests for views guarded by a global permission."""

from __future__ import annotations

from unittest import mock

from django.test import SimpleTestCase

from access_control import checks
from catalog.views import ElementTypeViewSet


class GlobalPermissionCheckTests(SimpleTestCase):
    def test_project_views_pass(self):
        self.assertEqual(checks.global_permission_views_name_known_permission(None), [])

    def test_unknown_permission_name_is_reported(self):
        with mock.patch.object(ElementTypeViewSet, "global_permission", "launch_rockets"):
            errors = checks.global_permission_views_name_known_permission(None)
        self.assertEqual([error.id for error in errors], ["access_control.E002"])

    def test_missing_permission_name_is_reported(self):
        with mock.patch.object(ElementTypeViewSet, "global_permission", None):
            errors = checks.global_permission_views_name_known_permission(None)
        self.assertEqual([error.id for error in errors], ["access_control.E001"])
