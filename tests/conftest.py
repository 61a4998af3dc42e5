"""Shared fixtures for duview tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_duview_logger():
    """Undo handlers installed by the CLI so caplog sees records."""
    yield
    logger = logging.getLogger("duview")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/
        big/      a.bin (300), b.bin (100)
        mid/      c.bin (200), nested/d.bin (10)
        small.txt (50)
    """
    root = tmp_path / "root"
    (root / "big").mkdir(parents=True)
    (root / "mid" / "nested").mkdir(parents=True)
    (root / "big" / "a.bin").write_bytes(b"a" * 300)
    (root / "big" / "b.bin").write_bytes(b"b" * 100)
    (root / "mid" / "c.bin").write_bytes(b"c" * 200)
    (root / "mid" / "nested" / "d.bin").write_bytes(b"d" * 10)
    (root / "small.txt").write_bytes(b"s" * 50)
    return root
