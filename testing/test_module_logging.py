"""Unit tests for module-based logging system."""

import logging
import tempfile
from pathlib import Path

from core.logging import (
    MODULE_TO_LOG,
    ModuleDispatchHandler,
    ThirdPartyHandler,
    end_run,
    get_current_run_id,
    module_to_log_name,
    start_run,
)
from core.logging.run_manager import (
    _compute_log_name,
    _module_log_cache,
    should_rotate,
)


def make_record(name: str, message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestModuleToLogName:
    """Tests for module_to_log_name() function."""

    def test_exact_match(self):
        """Module names that exactly match a prefix."""
        assert module_to_log_name("processes.engine") == "engine"
        assert module_to_log_name("core.cognitive") == "cognitive"

    def test_submodule_match(self):
        """Submodules should match their parent prefix."""
        assert module_to_log_name("core.cognitive.adapter") == "cognitive"
        assert module_to_log_name("core.cognitive.embedding") == "cognitive"
        assert module_to_log_name("processes.systematic_screening.process") == "screening"
        assert module_to_log_name("processes.shared.csv_export") == "processes-shared"

    def test_engine_modules_share_a_log(self):
        assert module_to_log_name("processes.recording") == "engine"
        assert module_to_log_name("processes.registry") == "engine"

    def test_longest_prefix_wins(self):
        """When multiple prefixes match, the longest one wins."""
        # "processes.systematic_screening" is longer than "processes"
        assert module_to_log_name("processes.systematic_screening.assessment") == "screening"
        assert module_to_log_name("processes.context") == "processes"

    def test_fallback_to_misc(self):
        """Unmapped modules should fall back to 'misc'."""
        assert module_to_log_name("unknown.module") == "misc"
        assert module_to_log_name("processesx.engine") == "misc"
        assert module_to_log_name("__main__") == "misc"

    def test_caching(self):
        """Results should be cached for performance."""
        _module_log_cache.clear()

        result1 = module_to_log_name("core.cognitive.test_module")
        assert "core.cognitive.test_module" in _module_log_cache

        result2 = module_to_log_name("core.cognitive.test_module")
        assert result1 == result2


class TestComputeLogName:
    """Tests for _compute_log_name() internal function."""

    def test_all_mappings_valid(self):
        """All MODULE_TO_LOG entries should produce valid log names."""
        for prefix, log_name in MODULE_TO_LOG.items():
            result = _compute_log_name(prefix)
            assert result == log_name, f"Expected {prefix} -> {log_name}, got {result}"


class TestRunLifecycle:
    """Tests for start_run/end_run lifecycle."""

    def test_start_run_sets_id(self):
        end_run()
        assert get_current_run_id() is None

        start_run("test-run-123")
        assert get_current_run_id() == "test-run-123"

        end_run()
        assert get_current_run_id() is None

    def test_multiple_start_runs(self):
        """Starting a new run should replace the previous one."""
        start_run("run-1")
        assert get_current_run_id() == "run-1"

        start_run("run-2")
        assert get_current_run_id() == "run-2"

        end_run()


class TestShouldRotate:
    """Tests for should_rotate() function."""

    def test_no_rotation_without_run(self):
        end_run()
        assert should_rotate("test-log") is False

    def test_rotates_once_per_log(self):
        start_run("test-run")
        assert should_rotate("screening") is True
        assert should_rotate("screening") is False
        end_run()

    def test_different_logs_rotate_independently(self):
        start_run("test-run")
        assert should_rotate("screening") is True
        assert should_rotate("engine") is True
        assert should_rotate("screening") is False
        assert should_rotate("engine") is False
        end_run()

    def test_new_run_resets_rotation(self):
        start_run("run-1")
        assert should_rotate("screening") is True
        end_run()

        start_run("run-2")
        assert should_rotate("screening") is True
        end_run()


class TestModuleDispatchHandler:
    """Tests for ModuleDispatchHandler."""

    def test_routes_to_correct_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir)
            handler = ModuleDispatchHandler(log_dir)
            handler.setFormatter(logging.Formatter("%(message)s"))

            handler.emit(make_record("processes.systematic_screening.process", "Screening message"))
            handler.emit(make_record("processes.engine", "Engine message"))
            handler.emit(make_record("elsewhere", "Misc message"))
            handler.close()

            assert "Screening message" in (log_dir / "screening.log").read_text()
            assert "Engine message" in (log_dir / "engine.log").read_text()
            assert "Misc message" in (log_dir / "misc.log").read_text()

    def test_rotation_on_new_run(self):
        """Handler should rotate files when a new run starts."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir)
            handler = ModuleDispatchHandler(log_dir)
            handler.setFormatter(logging.Formatter("%(message)s"))

            start_run("run-1")
            handler.emit(make_record("processes.engine", "Run 1 message"))
            end_run()

            start_run("run-2")
            handler.emit(make_record("processes.engine", "Run 2 message"))
            end_run()

            handler.close()

            current = (log_dir / "engine.log").read_text()
            previous = (log_dir / "engine.previous.log").read_text()
            assert "Run 2 message" in current
            assert "Run 1 message" not in current
            assert "Run 1 message" in previous

    def test_close_releases_streams(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            handler = ModuleDispatchHandler(Path(tmpdir))
            handler.setFormatter(logging.Formatter("%(message)s"))

            for module in ["processes.engine", "core.cognitive", "processes.cli"]:
                handler.emit(make_record(module, f"Message from {module}"))
            assert len(handler._streams) == 3

            handler.close()
            assert len(handler._streams) == 0


class TestThirdPartyHandler:
    """Tests for ThirdPartyHandler."""

    def test_writes_to_single_file(self):
        """All third-party logs should go to run-3p.log."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir)
            handler = ThirdPartyHandler(log_dir)
            handler.setFormatter(logging.Formatter("%(message)s"))

            for lib in ["httpx", "anthropic", "langchain_core"]:
                handler.emit(make_record(lib, f"Message from {lib}"))
            handler.close()

            content = (log_dir / "run-3p.log").read_text()
            assert "httpx" in content
            assert "anthropic" in content
            assert "langchain_core" in content

    def test_rotation_on_new_run(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir)
            handler = ThirdPartyHandler(log_dir)
            handler.setFormatter(logging.Formatter("%(message)s"))

            start_run("run-1")
            handler.emit(make_record("httpx", "Run 1 httpx message"))
            end_run()

            start_run("run-2")
            handler.emit(make_record("httpx", "Run 2 httpx message"))
            end_run()

            handler.close()

            assert "Run 2" in (log_dir / "run-3p.log").read_text()
            assert "Run 1" in (log_dir / "run-3p.previous.log").read_text()
