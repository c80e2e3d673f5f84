from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from nsdoc.models import Project
from tests._fixtures.sample_project import SAMPLE_METADATA, sample_project


@pytest.fixture
def project() -> Project:
    """Provide the shared sample project with source links configured."""
    return sample_project()


@pytest.fixture
def metadata_payload() -> Dict[str, Any]:
    """A fresh copy of the sample metadata so tests can mutate it."""
    return copy.deepcopy(SAMPLE_METADATA)


@pytest.fixture
def metadata_file(tmp_path: Path, metadata_payload: Dict[str, Any]) -> Path:
    """Write the sample metadata as JSON under tmp_path."""
    path = tmp_path / "api.json"
    path.write_text(json.dumps(metadata_payload), encoding="utf-8")
    return path
