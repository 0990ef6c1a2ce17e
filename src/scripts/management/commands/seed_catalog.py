"""Seed roles, element types, the type-permission matrix, and demo identities."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from access_control import services as access_services
from access_control.models import Permission, Role, TypePermission
from access_control.registry import MANAGE_ROLES, MANAGE_TYPES
from catalog import services as catalog_services
from catalog.models import ElementType, InteractionType

SEED_PERMISSIONS = {
    MANAGE_TYPES: "Can create and edit element types",
    MANAGE_ROLES: "Can manage roles and permissions",
}

SEED_ROLES = {
    "Super Admin": "Full system access",
    "Editor": "Can manage content but not schema",
    "Viewer": "Read-only access",
}

SEED_TYPES = {
    "Article": [
        {"module": "content", "label": "Main Content"},
        {"module": "urls_embeds", "label": "Related Links"},
    ],
    "Product": [
        {"module": "product_info", "label": "Product Details"},
        {"module": "content", "label": "Description"},
        {"module": "file", "label": "Datasheet"},
    ],
    "Event": [
        {"module": "content", "label": "Details"},
        {"module": "place", "label": "Venue"},
        {"module": "time_tracking", "label": "Schedule"},
    ],
}

# view, create, edit, delete
SEED_MATRIX = {
    "Super Admin": (True, True, True, True),
    "Editor": (True, True, True, False),
    "Viewer": (True, False, False, False),
}

SEED_INTERACTION_TYPES = [
    {"name": "like", "icon": "thumb-up", "description": "Mark an element as liked", "once_per_user": True},
    {"name": "favorite", "icon": "star", "description": "Bookmark an element", "once_per_user": True},
    {"name": "comment", "icon": "chat", "description": "Leave a comment", "once_per_user": False},
]

DEMO_USERS = {
    "admin": ("admin@example.com", "Super Admin"),
    "editor": ("editor@example.com", "Editor"),
    "viewer": ("viewer@example.com", "Viewer"),
}


def create_seed_permissions() -> dict:
    """Make sure the global permission catalog exists; return a name->Permission map."""
    permissions = {}
    for name, description in SEED_PERMISSIONS.items():
        permission, _ = Permission.objects.get_or_create(name=name, defaults={"description": description})
        permissions[name] = permission
    return permissions


def create_seed_roles(permissions: dict) -> dict:
    """Create the base roles; only Super Admin holds global permissions."""
    roles = {}
    for name, description in SEED_ROLES.items():
        role, _ = Role.objects.get_or_create(name=name, defaults={"description": description})
        roles[name] = role
    access_services.grant_global_permissions(
        roles["Super Admin"].pk, [permission.pk for permission in permissions.values()]
    )
    return roles


def create_seed_types() -> dict:
    """Create the demo element types with their modules."""
    types = {}
    for name, properties in SEED_TYPES.items():
        element_type = ElementType.objects.filter(name=name).first()
        if element_type is None:
            element_type = catalog_services.create_element_type(name, f"{name} elements", properties)
        types[name] = element_type
    return types


def create_seed_type_permissions(roles: dict, types: dict) -> None:
    for role_name, (can_view, can_create, can_edit, can_delete) in SEED_MATRIX.items():
        for element_type in types.values():
            access_services.set_type_permission(
                roles[role_name].pk,
                element_type.pk,
                can_view=can_view,
                can_create=can_create,
                can_edit=can_edit,
                can_delete=can_delete,
            )


def create_seed_interaction_types() -> dict:
    interaction_types = {}
    for entry in SEED_INTERACTION_TYPES:
        defaults = {key: value for key, value in entry.items() if key != "name"}
        interaction_type, _ = InteractionType.objects.get_or_create(name=entry["name"], defaults=defaults)
        interaction_types[entry["name"]] = interaction_type
    return interaction_types


def create_demo_users(roles: dict) -> dict:
    """Create one identity per base role, without usable passwords."""
    User = get_user_model()
    users = {}
    for username, (email, role_name) in DEMO_USERS.items():
        user = User.objects.filter(username=username).first()
        if user is None:
            user = User.objects.create_user(username=username, email=email, role=roles[role_name])
        users[username] = user
    return users


class Command(BaseCommand):
    """Management command to seed the demo catalog and its access matrix."""

    help = (
        "Seed base roles, element types, type permissions, interaction types and demo users. "
        "Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Clear seeded roles, types and demo users before running the seeder.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding catalog data...")
        permissions = create_seed_permissions()
        roles = create_seed_roles(permissions)
        types = create_seed_types()
        create_seed_type_permissions(roles, types)
        create_seed_interaction_types()
        users = create_demo_users(roles)
        self.stdout.write(self.style.SUCCESS("Catalog seed completed."))
        for username, user in users.items():
            self.stdout.write(f"  {username}: id={user.pk} role={user.role.name}")

    def _reset_seeded_data(self) -> None:
        """Remove the demo identities, types and base roles.

        Type permissions go with their roles and types. The permission catalog
        is left in place since it belongs to the schema.
        """
        self.stdout.write("Resetting previously seeded catalog data...")

        User = get_user_model()
        User.objects.filter(username__in=list(DEMO_USERS)).delete()
        TypePermission.objects.filter(role__name__in=list(SEED_ROLES)).delete()
        for element_type in ElementType.objects.filter(name__in=list(SEED_TYPES)):
            catalog_services.delete_element_type(element_type)
        Role.objects.filter(name__in=list(SEED_ROLES)).delete()
        InteractionType.objects.filter(name__in=[entry["name"] for entry in SEED_INTERACTION_TYPES]).delete()

        self.stdout.write(self.style.WARNING("Seeded catalog data cleared."))
