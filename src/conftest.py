import os

# Settings are cached per process, so these must be in place before the first get_settings()
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.pop("MONGO_URL", None)
