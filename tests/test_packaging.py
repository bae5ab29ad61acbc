"""
Tests for the packaging metadata.
"""

import sys
import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


class TestPythonRequirement:
    def test_requires_tarfile_filters(self):
        # tarfile.extractall(filter=...) first shipped in 3.11.4
        meta = tomllib.loads(PYPROJECT.read_text())
        assert meta["project"]["requires-python"] == ">=3.11.4"

    def test_interpreter_meets_requirement(self):
        assert sys.version_info >= (3, 11, 4)
