"""Settings used by the test suite: in-memory SQLite and quiet logging."""

from core.settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"] = {  # noqa: F405
    name: {**config, "level": "WARNING"} for name, config in LOGGING["loggers"].items()  # noqa: F405
}
