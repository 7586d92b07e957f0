"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import pathlib
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
@pytest.fixture
def png_path(tmp_path: pathlib.Path) -> pathlib.Path:
	"""
	Write a small solid red PNG and return its path.
	"""
	path = tmp_path / "swatch.png"
	image = PIL.Image.new("RGB", (8, 4), (255, 0, 0))
	image.save(path, format="PNG")
	return path
