"""Unit tests for common/settings.py."""

import importlib
import os
import unittest

import common.settings

_VARS = (
    'LOG_LEVEL',
    'MAX_PLAYERS',
    'MIN_PLAYERS',
    'STARTING_RESOURCES',
    'VICTORY_POINTS_TO_WIN',
    'ACTION_LOG_LIMIT',
)


class TestSettings(unittest.TestCase):
    """Tests for shared application settings."""

    def setUp(self) -> None:
        """Remove any overrides so defaults are exercised."""
        self._backup = {name: os.environ.pop(name, None) for name in _VARS}

    def tearDown(self) -> None:
        """Restore the environment and reload the module."""
        for name, value in self._backup.items():
            os.environ.pop(name, None)
            if value is not None:
                os.environ[name] = value
        importlib.reload(common.settings)

    def test_defaults(self) -> None:
        """Settings fall back to the standard game parameters."""
        importlib.reload(common.settings)
        self.assertEqual(common.settings.LOG_LEVEL, 'INFO')
        self.assertEqual(common.settings.MAX_PLAYERS, 4)
        self.assertEqual(common.settings.MIN_PLAYERS, 2)
        self.assertEqual(common.settings.STARTING_RESOURCES, 0)
        self.assertEqual(common.settings.VICTORY_POINTS_TO_WIN, 10)
        self.assertEqual(common.settings.ACTION_LOG_LIMIT, 50)

    def test_starting_resources_reads_from_env(self) -> None:
        """STARTING_RESOURCES is parsed as an integer."""
        os.environ['STARTING_RESOURCES'] = '10'
        importlib.reload(common.settings)
        self.assertEqual(common.settings.STARTING_RESOURCES, 10)

    def test_log_level_is_uppercased(self) -> None:
        """LOG_LEVEL accepts lowercase names."""
        os.environ['LOG_LEVEL'] = 'debug'
        importlib.reload(common.settings)
        self.assertEqual(common.settings.LOG_LEVEL, 'DEBUG')


if __name__ == '__main__':
    unittest.main()
