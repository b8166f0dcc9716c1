"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment whenever a provider builds them
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")

logfire.configure(send_to_logfire=False, console=False)
