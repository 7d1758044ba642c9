"""Common utilities for tests."""

from tests.mock_utils import patch_mockfirestore

patch_mockfirestore()

__all__ = ["patch_mockfirestore"]
