import logging
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so `linsolver`, `backend` and `main` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib

matplotlib.use("Agg")

from linsolver import settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path: Path):
    """Point the settings store at a throwaway file for every test."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(settings, "_DATA_DIR", str(data_dir))
    monkeypatch.setattr(settings, "_DATA_FILE", str(data_dir / "linsolver.json"))
    return data_dir


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers added by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger("linsolver")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
