from pathlib import Path
from typing import Dict, List

import pytest

from tmin.cutter import SourceUnit
from tests.infrastructure import write


@pytest.fixture
def make_units(tmp_path: Path):
    """Write inputs under in/ and return SourceUnits whose working copies live under out/."""

    def _make(files: Dict[str, str]) -> List[SourceUnit]:
        units = []
        for name, text in files.items():
            src = write(tmp_path / "in" / name, text)
            units.append(SourceUnit(src, tmp_path / "out" / name))
        return units

    return _make
