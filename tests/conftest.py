from __future__ import annotations

from collections.abc import Iterator

import pytest

from desensitize import RedactionRegistry, reset_default_registry


@pytest.fixture(autouse=True)
def _fresh_default_registry() -> Iterator[RedactionRegistry]:
    yield reset_default_registry()
    reset_default_registry()
