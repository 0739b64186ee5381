"""Unit tests for common/app.py."""

import contextlib
import logging
import unittest
import unittest.mock
from collections.abc import AsyncGenerator

import fastapi
import fastapi.testclient

import common.app
import common.log


class TestCreateApp(unittest.TestCase):
    """Tests for the create_app factory."""

    def tearDown(self) -> None:
        logging.getLogger().setLevel(logging.WARNING)

    def test_title_is_set(self) -> None:
        """create_app returns a FastAPI app carrying the given title."""
        app = common.app.create_app('hexsettle-test')
        self.assertIsInstance(app, fastapi.FastAPI)
        self.assertEqual(app.title, 'hexsettle-test')

    def test_health_endpoint(self) -> None:
        """/health answers both GET and HEAD."""
        client = fastapi.testclient.TestClient(common.app.create_app('t'))
        response = client.get('/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'healthy'})
        self.assertEqual(client.head('/health').status_code, 200)

    def test_logging_configured(self) -> None:
        """Building an app configures logging once."""
        with unittest.mock.patch.object(common.log, 'configure_logging') as configure:
            common.app.create_app('t')
        configure.assert_called_once_with()

    def test_lifespan_forwarded(self) -> None:
        """Extra keyword arguments reach FastAPI and the lifespan runs."""
        events: list[str] = []

        @contextlib.asynccontextmanager
        async def lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None, None]:
            events.append('start')
            yield
            events.append('stop')

        app = common.app.create_app('t', lifespan=lifespan)
        with fastapi.testclient.TestClient(app):
            self.assertEqual(events, ['start'])
        self.assertEqual(events, ['start', 'stop'])


if __name__ == '__main__':
    unittest.main()
