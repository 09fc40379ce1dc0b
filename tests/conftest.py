import importlib.util
import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def test_root_dir():
    return Path(__file__).resolve().parent


@pytest.fixture()
def seeded_random():
    """Deterministic source for the random fill."""
    return random.Random(0xb10b)


@pytest.fixture()
def blob_script(test_root_dir):
    """Import scripts/blob.py, it isn't part of the package."""
    path = test_root_dir / '..' / 'scripts' / 'blob.py'
    spec = importlib.util.spec_from_file_location('blob_script', str(path))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    return module
