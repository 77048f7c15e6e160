"""Integration tests for AvalonTrackerService."""

import pytest
import pytest_asyncio

from avalon_tracker.service import AvalonTrackerService
from avalon_tracker.core.enums import Alignment
from avalon_tracker.core.errors import DecodingError, NotFoundError
from avalon_tracker.core.standings import Record
from tests.factories import SAMPLE_SHEET


@pytest.mark.integration
class TestAvalonTrackerService:
    """Test suite for the service operations."""

    @pytest_asyncio.fixture
    async def service(self, test_config, db_manager):
        service = AvalonTrackerService(test_config, database_manager=db_manager)
        await service.start()
        yield service
        await service.stop()

    @pytest.mark.asyncio
    async def test_import_and_standings(self, service, sample_sheet_path):
        game_ids = await service.import_games(sample_sheet_path)

        assert len(game_ids) == 2
        standings = await service.standings()
        assert standings["player1"] == Record(1, 1)
        assert standings["player5"] == Record(2, 0)

    @pytest.mark.asyncio
    async def test_load_imported_game(self, service, sample_sheet_path, sample_game):
        first_id, _ = await service.import_games(sample_sheet_path)
        assert await service.load_game(first_id) == sample_game

    @pytest.mark.asyncio
    async def test_load_unknown_game(self, service):
        with pytest.raises(NotFoundError):
            await service.load_game("missing")

    @pytest.mark.asyncio
    async def test_delete_game(self, service, sample_sheet_path):
        first_id, second_id = await service.import_games(sample_sheet_path)

        await service.delete_game(first_id)

        assert await service.database.list_game_ids() == [second_id]
        standings = await service.standings()
        assert standings["player5"] == Record(1, 0)
        with pytest.raises(NotFoundError):
            await service.delete_game(first_id)

    @pytest.mark.asyncio
    async def test_bad_sheet_stores_nothing(self, service, tmp_path):
        """A bad game anywhere in the sheet aborts the whole import."""
        path = tmp_path / "bad.yaml"
        path.write_text(
            SAMPLE_SHEET
            + "\n- players: {alice: jester}\n  quests: []\n  result: {winner: good, type: quest}\n",
            encoding="utf-8",
        )

        with pytest.raises(DecodingError, match="game 3"):
            await service.import_games(path)

        assert await service.database.count_games() == 0

    @pytest.mark.asyncio
    async def test_standings_by_alignment(self, service, sample_sheet_path):
        await service.import_games(sample_sheet_path)

        by_alignment = await service.standings_by_alignment()

        assert by_alignment[Alignment.EVIL]["player5"] == Record(1, 0)
        assert by_alignment[Alignment.GOOD]["player5"] == Record(1, 0)

    @pytest.mark.asyncio
    async def test_injected_manager_survives_stop(self, test_config, db_manager):
        service = AvalonTrackerService(test_config, database_manager=db_manager)
        await service.start()
        await service.stop()

        assert await db_manager.count_games() == 0

    @pytest.mark.asyncio
    async def test_database_requires_start(self, test_config):
        service = AvalonTrackerService(test_config)
        with pytest.raises(RuntimeError, match="not started"):
            service.database

    @pytest.mark.asyncio
    async def test_context_manager_owns_manager(self, test_config, sample_sheet_path):
        async with AvalonTrackerService(test_config) as service:
            await service.init_db()
            await service.import_games(sample_sheet_path)
            assert len(await service.standings()) == 6

        with pytest.raises(RuntimeError):
            service.database
