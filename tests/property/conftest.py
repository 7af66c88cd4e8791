from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

# Matching is quadratic in the list sizes drawn here; runs stay reproducible
# and slow generation is let through.
settings.register_profile(
    "diagharness-ci",
    derandomize=True,
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "diagharness-exhaustive",
    parent=settings.get_profile("diagharness-ci"),
    derandomize=False,
    max_examples=2000,
)


def pytest_configure(config: pytest.Config) -> None:
    # An explicit --hypothesis-profile wins over the CI default.
    if config.getoption("hypothesis_profile", default=None) is None:
        settings.load_profile("diagharness-ci")
