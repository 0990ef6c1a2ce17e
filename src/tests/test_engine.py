"""Decision engine tests on hand-built actor snapshots."""

from __future__ import annotations

from unittest import mock

from django.test import SimpleTestCase

from access_control.engine import DenyReason, decide, decide_element, decide_global, decide_link
from access_control.exceptions import NotFound
from access_control.grants import Action, TypeGrant
from access_control.visibility import allowed_type_ids, filter_viewable
from tests.utils import make_actor

ARTICLE, PRODUCT, EVENT = 1, 2, 3


class DecideTests(SimpleTestCase):
    """Type-scoped decisions against the TypePermission matrix."""

    def setUp(self):
        # Editor: view/create/edit on Article, nothing on Product.
        self.editor = make_actor(grants=[(ARTICLE, True, True, True, False)])

    def test_editor_can_create_and_edit_granted_type(self):
        self.assertTrue(decide(self.editor, Action.VIEW, ARTICLE))
        self.assertTrue(decide(self.editor, Action.CREATE, ARTICLE))
        self.assertTrue(decide(self.editor, Action.EDIT, ARTICLE))

    def test_missing_flag_is_insufficient_permission(self):
        decision = decide(self.editor, Action.DELETE, ARTICLE)
        self.assertFalse(decision)
        self.assertEqual(decision.reason, DenyReason.INSUFFICIENT_TYPE_PERMISSION)
        self.assertIn("can_delete", decision.detail)

    def test_no_row_is_default_deny(self):
        for action in Action:
            decision = decide(self.editor, action, PRODUCT)
            self.assertFalse(decision)
            self.assertEqual(decision.reason, DenyReason.NO_GRANT_FOR_TYPE)

    def test_anonymous_is_unauthenticated(self):
        decision = decide(None, Action.VIEW, ARTICLE)
        self.assertFalse(decision)
        self.assertEqual(decision.reason, DenyReason.UNAUTHENTICATED)

    def test_write_flags_require_view(self):
        blind = make_actor(grants=[(EVENT, False, True, True, True)])
        for action in (Action.VIEW, Action.CREATE, Action.EDIT, Action.DELETE):
            self.assertFalse(decide(blind, action, EVENT))

    def test_type_id_may_arrive_as_string(self):
        self.assertTrue(decide(self.editor, Action.VIEW, str(ARTICLE)))
        self.assertEqual(decide(self.editor, Action.VIEW, "abc").reason, DenyReason.NO_GRANT_FOR_TYPE)

    def test_decisions_are_deterministic(self):
        first = decide(self.editor, Action.DELETE, ARTICLE)
        second = decide(self.editor, Action.DELETE, ARTICLE)
        self.assertEqual(first, second)


class GrantTests(SimpleTestCase):
    def test_allows_maps_action_to_flag(self):
        grant = TypeGrant(ARTICLE, can_view=True, can_edit=True)
        self.assertTrue(grant.allows(Action.VIEW))
        self.assertTrue(grant.allows(Action.EDIT))
        self.assertFalse(grant.allows(Action.CREATE))
        self.assertFalse(grant.allows(Action.DELETE))

    def test_actor_snapshot_is_read_only(self):
        actor = make_actor(grants=[(ARTICLE, True, False, False, False)])
        with self.assertRaises(TypeError):
            actor.type_permissions[PRODUCT] = TypeGrant(PRODUCT, True)
        with self.assertRaises(AttributeError):
            actor.role_id = 99


class DecideGlobalTests(SimpleTestCase):
    def test_held_permission_is_allowed(self):
        actor = make_actor(permissions=["manage_types"])
        self.assertTrue(decide_global(actor, "manage_types"))

    def test_missing_permission_is_denied(self):
        actor = make_actor(permissions=["manage_types"])
        decision = decide_global(actor, "manage_roles")
        self.assertFalse(decision)
        self.assertEqual(decision.reason, DenyReason.MISSING_GLOBAL_PERMISSION)
        self.assertIn("manage_roles", decision.detail)

    def test_type_grants_do_not_imply_global_permissions(self):
        actor = make_actor(grants=[(ARTICLE, True, True, True, True)])
        self.assertFalse(decide_global(actor, "manage_types"))

    def test_anonymous_is_unauthenticated(self):
        self.assertEqual(decide_global(None, "manage_types").reason, DenyReason.UNAUTHENTICATED)


@mock.patch("access_control.engine.lookups.element_type_id")
class ElementDecisionTests(SimpleTestCase):
    """Element-level decisions resolve the type through the lookup collaborator."""

    def setUp(self):
        self.actor = make_actor(
            grants=[
                (ARTICLE, True, True, True, False),
                (PRODUCT, True, False, False, False),
            ]
        )
        self.types = {10: ARTICLE, 11: ARTICLE, 20: PRODUCT}

    def test_decide_element_uses_element_type(self, lookup):
        lookup.side_effect = self.types.get
        self.assertTrue(decide_element(self.actor, Action.EDIT, 10))
        self.assertFalse(decide_element(self.actor, Action.EDIT, 20))

    def test_missing_element_raises_not_found_before_deciding(self, lookup):
        lookup.side_effect = self.types.get
        no_grants = make_actor()
        with self.assertRaises(NotFound):
            decide_element(no_grants, Action.VIEW, 999)

    def test_anonymous_is_denied_without_lookup(self, lookup):
        decision = decide_element(None, Action.VIEW, 10)
        self.assertEqual(decision.reason, DenyReason.UNAUTHENTICATED)
        lookup.assert_not_called()

    def test_link_requires_edit_on_both_sides(self, lookup):
        lookup.side_effect = self.types.get
        self.assertTrue(decide_link(self.actor, 10, 11))

        decision = decide_link(self.actor, 10, 20)
        self.assertFalse(decision)
        self.assertEqual(decision.reason, DenyReason.INSUFFICIENT_TYPE_PERMISSION)
        self.assertIn("target", decision.detail)

    def test_link_denied_when_source_lacks_edit(self, lookup):
        lookup.side_effect = self.types.get
        decision = decide_link(self.actor, 20, 10)
        self.assertFalse(decision)
        self.assertIn("source", decision.detail)

    def test_link_with_missing_endpoint_is_not_found(self, lookup):
        lookup.side_effect = self.types.get
        with self.assertRaises(NotFound):
            decide_link(self.actor, 10, 999)
        with self.assertRaises(NotFound):
            decide_link(self.actor, 999, 10)


class VisibilityTests(SimpleTestCase):
    class Candidate:
        def __init__(self, pk, type_id):
            self.pk = pk
            self.type_id = type_id

    def test_only_viewable_types_are_kept_in_order(self):
        actor = make_actor(
            grants=[
                (ARTICLE, True, False, False, False),
                (PRODUCT, False, True, True, True),
            ]
        )
        candidates = [
            self.Candidate(1, ARTICLE),
            self.Candidate(2, PRODUCT),
            self.Candidate(3, EVENT),
            self.Candidate(4, ARTICLE),
        ]
        kept = filter_viewable(actor, candidates)
        self.assertEqual([candidate.pk for candidate in kept], [1, 4])
        self.assertEqual(allowed_type_ids(actor), frozenset({ARTICLE}))

    def test_custom_type_accessor(self):
        actor = make_actor(grants=[(EVENT, True, False, False, False)])
        rows = [{"id": 1, "type": EVENT}, {"id": 2, "type": ARTICLE}]
        kept = filter_viewable(actor, rows, type_of=lambda row: row["type"])
        self.assertEqual(kept, [{"id": 1, "type": EVENT}])

    def test_anonymous_and_grantless_see_nothing(self):
        candidates = [self.Candidate(1, ARTICLE)]
        self.assertEqual(filter_viewable(None, candidates), [])
        self.assertEqual(filter_viewable(make_actor(), candidates), [])
