import os
import sys
import random
from datetime import datetime, timedelta, timezone

import pytest

# Make the package importable when tests run from a plain checkout
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from csrftoken.domain.services.csrf.authenticator import Authenticator


@pytest.fixture
def secret_key() -> bytes:
    return b"K" * 64


@pytest.fixture
def lifetime() -> timedelta:
    return timedelta(hours=1)


@pytest.fixture
def window_start() -> datetime:
    """An instant that falls exactly on an hour window boundary."""
    return datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def authenticator(secret_key, lifetime) -> Authenticator:
    return Authenticator(
        key=secret_key,
        token_length=32,
        lifetime=lifetime,
        rng=random.Random(20240101),
    )
