import os
import sys

import pytest

# Make the top-level modules importable without installing the project
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
	sys.path.insert(0, PROJECT_ROOT)

from huffman_core import HuffmanLogic  # noqa: E402
from huffman_service import HuffmanService  # noqa: E402


@pytest.fixture
def logic():
	return HuffmanLogic()


@pytest.fixture
def service():
	return HuffmanService()
