"""Test package. Settings are read at import time, so test defaults are set here first."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MAIL_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["APP_ENV"] = "dev"
