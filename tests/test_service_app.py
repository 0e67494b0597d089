"""
Tests for the service and application facades.
"""
import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest

from path_agent.app import PathAgentApp
from path_agent.exceptions import AppNotInitializedError
from path_agent.inference import SimulatedInferenceBackend
from path_agent.service import PathResolutionService

from conftest import DESKTOP, FakeFileSystem, ScriptedBackend


@pytest.fixture
def app(drive_config, wsl):
    app = PathAgentApp(
        config=drive_config,
        filesystem=FakeFileSystem({DESKTOP: [("Games", True)]}),
        backend=SimulatedInferenceBackend(),
        translator=wsl,
    )
    app.initialize()
    return app


class TestPathAgentApp:
    """Tests for PathAgentApp."""

    def test_requires_initialize(self, drive_config):
        app = PathAgentApp(config=drive_config)
        with pytest.raises(RuntimeError):
            app.resolve("desktop")
        with pytest.raises(RuntimeError):
            app.performance_report()

    def test_initialize_configures_logging_when_enabled(self, drive_config, wsl):
        drive_config.configure_logging = True
        drive_config.log_level = "DEBUG"
        app = PathAgentApp(config=drive_config, filesystem=FakeFileSystem(), translator=wsl)

        with patch("path_agent.app.setup_logging") as setup:
            app.initialize()

        setup.assert_called_once_with("DEBUG")

    def test_initialize_leaves_logging_alone_by_default(self, drive_config, wsl):
        app = PathAgentApp(config=drive_config, filesystem=FakeFileSystem(), translator=wsl)

        with patch("path_agent.app.setup_logging") as setup:
            app.initialize()

        setup.assert_not_called()

    def test_initialize_is_idempotent(self, app):
        service = app.service
        app.initialize()
        assert app.service is service

    def test_resolve(self, app):
        assert app.resolve("desktop") == [DESKTOP, "/mnt/c/Users/tester/Desktop"]

    def test_resolve_unknown_returns_query(self, app):
        assert app.resolve("zzqx nothing here") == ["zzqx nothing here"]

    def test_simulated_backend_answer_is_verified(self, app):
        result = app.resolve_detailed("zzqx game saves")
        assert result.method == "ai_inference"
        assert result.paths == [DESKTOP + "\\Games"]

    def test_aresolve(self, app):
        paths = asyncio.run(app.aresolve("downloads"))
        assert paths[0] == "C:\\Users\\tester\\Downloads"

    def test_performance_report_shape(self, app):
        app.resolve("desktop")
        report = app.performance_report()

        assert report["metrics"]["total_queries"] == 1
        assert report["metrics"]["hardcoded_hits"] == 1
        assert set(report["cache_sizes"]) == {"ai_cache", "scan_cache", "discovery_cache"}
        assert report["learning"]["tracked_queries"] == 1


class TestPathResolutionService:
    """Tests for PathResolutionService."""

    def test_requires_orchestrator(self, drive_config):
        service = PathResolutionService(drive_config)
        with pytest.raises(AppNotInitializedError):
            service.resolve("desktop")

    def test_pipeline_failure_returns_query(self, drive_config):
        orchestrator = Mock()
        orchestrator.resolve = AsyncMock(side_effect=RuntimeError("boom"))
        service = PathResolutionService(drive_config)
        service.set_orchestrator(orchestrator)

        assert service.resolve("anything", {"known_dirs": {}}) == ["anything"]
        orchestrator.resolve.assert_awaited_once_with("anything", {"known_dirs": {}})

    def test_report_usage_feeds_frequent_paths(self, app):
        service = app.service
        service.report_usage(DESKTOP)
        service.report_usage(DESKTOP)
        service.report_usage("D:\\work")

        report = service.performance_report()

        assert report["frequent_paths"][0] == {"path": DESKTOP, "count": 2}

    def test_reset_learning(self, app):
        service = app.service
        app.resolve("desktop")
        service.report_usage(DESKTOP)

        service.reset_learning()

        assert service.metrics_snapshot().total_queries == 0
        assert service.state.learner.stats()["tracked_paths"] == 0
        assert len(service.state.ai_cache) == 0

    def test_ai_answers_are_cached_across_calls(self, drive_config, wsl):
        games = DESKTOP + "\\Games"
        backend = ScriptedBackend([games])
        app = PathAgentApp(
            config=drive_config,
            filesystem=FakeFileSystem({DESKTOP: [("Games", True)]}),
            backend=backend,
            translator=wsl,
        )
        app.initialize()

        assert app.resolve("qqq") == [games]
        assert app.resolve("qqq") == [games]
        assert backend.call_count == 1
        assert app.service.metrics_snapshot().ai_cache_hits == 1
