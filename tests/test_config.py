"""Unit tests for traintrack.core.config.Settings validation."""

import unittest

from pydantic import ValidationError

from traintrack.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_log_level_normalized(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")

    def test_rejects_unknown_database_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://localhost/traintrack")

    def test_rejects_out_of_range_bcrypt_rounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3)

    def test_prod_requires_distinct_secrets(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(
                APP_ENV="prod",
                ACCESS_TOKEN_SECRET="same",
                REFRESH_TOKEN_SECRET="same",
                PASSWORD_RESET_SECRET="other",
            )
        settings = Settings(
            APP_ENV="prod",
            ACCESS_TOKEN_SECRET="a",
            REFRESH_TOKEN_SECRET="b",
            PASSWORD_RESET_SECRET="c",
        )
        self.assertEqual(settings.APP_ENV, "prod")


if __name__ == "__main__":
    unittest.main()
