"""
Unit tests for database connection handling.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.core.config import Settings
from app.core.database import DatabaseHandle, close_db, connect_with_retry, init_db


def _refused():
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


def _working_connection():
    connection = AsyncMock()
    context = MagicMock()
    context.__aenter__.return_value = connection
    context.__aexit__.return_value = False
    return context


@pytest.fixture
def mock_sleep():
    with patch("app.core.database.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


class TestConnectWithRetry:
    """Tests for connect_with_retry."""

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self, mock_sleep):
        engine = MagicMock()
        engine.connect.return_value = _working_connection()

        result = await connect_with_retry(engine, attempts=3, delay_seconds=2.0)

        assert result.ok is True
        assert result.attempts == 1
        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_recovers_after_failure(self, mock_sleep):
        engine = MagicMock()
        engine.connect.side_effect = [_refused(), _working_connection()]

        result = await connect_with_retry(engine, attempts=3, delay_seconds=2.0)

        assert result.ok is True
        assert result.attempts == 2
        mock_sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_gives_up_without_raising(self, mock_sleep):
        engine = MagicMock()
        engine.connect.side_effect = _refused()

        result = await connect_with_retry(engine, attempts=3, delay_seconds=0.5)

        assert result.ok is False
        assert result.attempts == 3
        assert "connection refused" in result.reason
        assert engine.connect.call_count == 3
        # no sleep after the final attempt
        assert mock_sleep.await_count == 2


class TestInitDb:
    """Tests for init_db and close_db."""

    @pytest.mark.asyncio
    async def test_marks_handle_ready(self, mock_sleep):
        engine = MagicMock()
        engine.connect.return_value = _working_connection()
        engine.dispose = AsyncMock()
        handle = DatabaseHandle(engine=engine, session_maker=MagicMock())

        result = await init_db(handle, Settings(db_create_tables=False))

        assert result.ok is True
        assert handle.ready is True

        await close_db(handle)

        engine.dispose.assert_awaited_once()
        assert handle.ready is False

    @pytest.mark.asyncio
    async def test_unreachable_database(self, mock_sleep):
        engine = MagicMock()
        engine.connect.side_effect = _refused()
        handle = DatabaseHandle(engine=engine, session_maker=MagicMock())

        result = await init_db(handle, Settings(db_connect_retries=2, db_connect_retry_delay=0))

        assert result.ok is False
        assert result.attempts == 2
        assert handle.ready is False
