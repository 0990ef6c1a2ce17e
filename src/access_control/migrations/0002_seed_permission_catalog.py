from django.db import migrations

PERMISSION_CATALOG = [
    ("manage_types", "Can create and edit element types"),
    ("manage_roles", "Can manage roles and permissions"),
]


def seed_permissions(apps, schema_editor):
    Permission = apps.get_model("access_control", "Permission")
    for name, description in PERMISSION_CATALOG:
        Permission.objects.get_or_create(name=name, defaults={"description": description})


def unseed_permissions(apps, schema_editor):
    Permission = apps.get_model("access_control", "Permission")
    Permission.objects.filter(name__in=[name for name, _ in PERMISSION_CATALOG]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("access_control", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_permissions, unseed_permissions),
    ]
