from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.hub_builder import HubBuilder


@pytest.fixture
def hub_builder(tmp_path: Path) -> HubBuilder:
    """Provide a reusable hub builder rooted at the pytest tmp_path."""
    return HubBuilder(tmp_path)
