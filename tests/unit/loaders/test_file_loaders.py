"""Unit tests for JsonFileConfigLoader and DotEnvConfigLoader."""
from __future__ import annotations

import asyncio
import json
import threading
from unittest.mock import MagicMock, patch

import pytest

from mp_envkit.kernel.errors import VariableError
from mp_envkit.kernel.types import Ok
from mp_envkit.loaders import DotEnvConfigLoader, JsonFileConfigLoader


def _write_json(tmp_path, payload, name="config.json"):
    path = tmp_path / name
    path.write_text(json.dumps(payload) if not isinstance(payload, str) else payload)
    return path


class TestJsonFileConfigLoader:
    def test_reads_and_stringifies_values(self, tmp_path):
        path = _write_json(tmp_path, {"PORT": 8080, "DEBUG": True, "TAGS": ["a", "b"], "EMPTY": ""})

        async def run():
            loader = JsonFileConfigLoader(path, logger=None)
            assert await loader.get("PORT") == Ok("8080")
            assert await loader.get("DEBUG") == Ok("true")
            assert await loader.get("TAGS") == Ok('["a","b"]')
            assert await loader.get("EMPTY") == Ok(None)
            res = await loader.get_value_result("PORT")
            assert res.unwrap().path == "key:PORT"

        asyncio.run(run())

    def test_default_file_name(self):
        assert JsonFileConfigLoader().file_name == "config.json"

    def test_missing_file_is_silent_by_default(self, tmp_path):
        async def run():
            logger = MagicMock()
            loader = JsonFileConfigLoader(tmp_path / "nope.json", logger=logger)
            assert await loader.get("PORT") == Ok(None)
            logger.debug.assert_any_call(f"ConfigLoader[json-file]: file {tmp_path / 'nope.json'} not found")

        asyncio.run(run())

    def test_missing_file_strict_is_error(self, tmp_path):
        async def run():
            loader = JsonFileConfigLoader(tmp_path / "nope.json", is_silent=False, logger=None)
            res = await loader.get("PORT")
            assert res.is_err()
            assert isinstance(res.error, VariableError)
            assert "not found" in str(res.error)

        asyncio.run(run())

    def test_invalid_json_silent_logs_error(self, tmp_path):
        path = _write_json(tmp_path, "{broken")

        async def run():
            logger = MagicMock()
            loader = JsonFileConfigLoader(path, logger=logger)
            assert await loader.get("PORT") == Ok(None)
            message = logger.error.call_args.args[0]
            assert message.startswith(f"ConfigVariables[json-file]: Failed to parse JSON from {path}")

        asyncio.run(run())

    def test_invalid_json_strict_is_error(self, tmp_path):
        path = _write_json(tmp_path, "{broken")

        async def run():
            loader = JsonFileConfigLoader(path, is_silent=False, logger=None)
            assert (await loader.get("PORT")).is_err()

        asyncio.run(run())

    def test_non_object_document_yields_no_values(self, tmp_path):
        path = _write_json(tmp_path, [1, 2, 3])

        async def run():
            logger = MagicMock()
            loader = JsonFileConfigLoader(path, logger=logger)
            assert await loader.size() == Ok(0)
            logger.error.assert_called_once_with(f"ConfigVariables[json-file]: Invalid JSON data from {path}")

        asyncio.run(run())

    def test_file_is_read_off_the_event_loop(self, tmp_path, monkeypatch):
        path = _write_json(tmp_path, {"PORT": 1})
        threads = []

        def recording_read(target):
            threads.append(threading.get_ident())
            return target.read_bytes() if target.exists() else None

        monkeypatch.setattr("mp_envkit.loaders.file._read_if_exists", recording_read)

        async def run():
            assert await JsonFileConfigLoader(path, logger=None).get("PORT") == Ok("1")
            assert await JsonFileConfigLoader(tmp_path / "nope.json", logger=None).get("PORT") == Ok(None)

        asyncio.run(run())
        assert len(threads) == 2
        assert threading.get_ident() not in threads

    def test_unreadable_path_is_error(self, tmp_path):
        async def run():
            res = await JsonFileConfigLoader(tmp_path, logger=None).get("PORT")
            assert res.is_err()
            assert isinstance(res.error, VariableError)
            assert isinstance(res.error.cause, OSError)

        asyncio.run(run())

    def test_reload_picks_up_changes(self, tmp_path):
        path = _write_json(tmp_path, {"PORT": "1"})

        async def run():
            loader = JsonFileConfigLoader(path, logger=None)
            assert await loader.get("PORT") == Ok("1")
            _write_json(tmp_path, {"PORT": "2"})
            assert await loader.get("PORT") == Ok("1")
            await loader.reload()
            assert await loader.get("PORT") == Ok("2")

        asyncio.run(run())


class TestFileWatch:
    def test_watch_requires_watchdog(self, tmp_path):
        path = _write_json(tmp_path, {"PORT": "1"})

        async def run():
            loader = JsonFileConfigLoader(path, watch=True, logger=None)
            with patch(
                "mp_envkit.loaders.file._require_watchdog",
                side_effect=ImportError("Install 'mp-envkit[watch]'"),
            ):
                with pytest.raises(ImportError, match="watch"):
                    await loader.get("PORT")

        asyncio.run(run())

    def test_watch_starts_observer_and_close_stops_it(self, tmp_path):
        path = _write_json(tmp_path, {"PORT": "1"})
        observer = MagicMock()
        observers = MagicMock()
        observers.Observer.return_value = observer
        events = MagicMock()
        events.FileSystemEventHandler = object

        async def run():
            loader = JsonFileConfigLoader(path, watch=True, logger=None)
            with patch("mp_envkit.loaders.file._require_watchdog", return_value=(events, observers)):
                await loader.get("PORT")
                await loader.reload()
            observer.schedule.assert_called_once()
            assert observer.schedule.call_args.args[1] == str(tmp_path.resolve())
            observer.start.assert_called_once_with()
            await loader.close()
            observer.stop.assert_called_once_with()
            observer.join.assert_called_once_with()

        asyncio.run(run())

    def test_schedule_reload_without_watcher_is_noop(self, tmp_path):
        loader = JsonFileConfigLoader(tmp_path / "config.json", logger=None)
        loader._schedule_reload()
        assert loader._timer is None

    def test_change_event_reloads_after_debounce(self, tmp_path, monkeypatch):
        path = _write_json(tmp_path, {"PORT": "1"})
        monkeypatch.setattr("mp_envkit.loaders.file.WATCH_DEBOUNCE_SECONDS", 0.01)
        observers = MagicMock()
        events = MagicMock()
        events.FileSystemEventHandler = object

        async def run():
            loader = JsonFileConfigLoader(path, watch=True, logger=None)
            with patch("mp_envkit.loaders.file._require_watchdog", return_value=(events, observers)):
                assert await loader.get("PORT") == Ok("1")
                _write_json(tmp_path, {"PORT": "2"})
                loader._on_fs_event()
                loader._on_fs_event()
                await asyncio.sleep(0.1)
            assert await loader.get("PORT") == Ok("2")
            await loader.close()

        asyncio.run(run())


class TestDotEnvConfigLoader:
    def test_reads_dotenv_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text('PORT=8080\n# comment\nNAME="hello world"\nEMPTY=\nexport TOKEN=abc\n')

        async def run():
            loader = DotEnvConfigLoader(path, logger=None)
            assert await loader.get("PORT") == Ok("8080")
            assert await loader.get("NAME") == Ok("hello world")
            assert await loader.get("TOKEN") == Ok("abc")
            assert await loader.get("EMPTY") == Ok(None)

        asyncio.run(run())

    def test_does_not_touch_process_environment(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MP_ENVKIT_DOTENV_ONLY", raising=False)
        path = tmp_path / ".env"
        path.write_text("MP_ENVKIT_DOTENV_ONLY=1\n")

        async def run():
            loader = DotEnvConfigLoader(path, logger=None)
            assert await loader.get("MP_ENVKIT_DOTENV_ONLY") == Ok("1")

        asyncio.run(run())
        import os

        assert "MP_ENVKIT_DOTENV_ONLY" not in os.environ

    def test_loader_type_and_default_file(self):
        loader = DotEnvConfigLoader()
        assert loader.loader_type == "dotenv"
        assert loader.file_name == ".env"

    def test_missing_dotenv_dependency(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("A=1\n")

        async def run():
            loader = DotEnvConfigLoader(path, logger=None)
            with patch(
                "mp_envkit.loaders.dotenv._require_dotenv",
                side_effect=ImportError("Install 'mp-envkit[dotenv]'"),
            ):
                with pytest.raises(ImportError, match="dotenv"):
                    await loader.get("A")

        asyncio.run(run())
