"""
Tests for the application entry point.

Loading configuration is an explicit step. Importing the module must not
load it, and serving the app must load it exactly once.
"""

import importlib

import pytest
from fastapi import FastAPI

import asset_manager.main as main_module
from asset_manager.config import get_settings, is_initialized

NOTICE = "Global configuration load complete"


class TestImport:
    """Importing the entry point has no configuration side effects."""

    def test_import_does_not_load_configuration(self, capsys):
        importlib.reload(main_module)

        assert not is_initialized()
        assert NOTICE not in capsys.readouterr().out


class TestBuildApp:
    """Tests for the load-then-build step."""

    def test_build_app_loads_configuration_once(self, monkeypatch, capsys):
        monkeypatch.setenv("APP_NAME", "Inventory")

        app = main_module.build_app()

        assert isinstance(app, FastAPI)
        assert app.state.settings is get_settings()
        assert app.title == "Inventory"
        assert capsys.readouterr().out.count(NOTICE) == 1


class TestResolvePort:
    """Tests for turning PORT into a port number."""

    def test_numeric_port(self):
        assert main_module.resolve_port("9090") == 9090

    def test_unknown_service_name_exits_cleanly(self):
        with pytest.raises(SystemExit) as exc_info:
            main_module.resolve_port("no-such-service-name")

        assert "no-such-service-name" in str(exc_info.value)


class TestMain:
    """Tests for serving the app."""

    def test_main_serves_the_built_app_without_reloading_config(self, monkeypatch, capsys):
        monkeypatch.setenv("HOST", "0.0.0.0")
        monkeypatch.setenv("PORT", "9090")
        calls = []
        monkeypatch.setattr(
            main_module.uvicorn,
            "run",
            lambda app, **kwargs: calls.append((app, kwargs)),
        )

        main_module.main()

        assert len(calls) == 1
        app, kwargs = calls[0]
        assert isinstance(app, FastAPI)
        assert app.state.settings is get_settings()
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9090
        assert capsys.readouterr().out.count(NOTICE) == 1
