"""Tests for caller resolution and qualified-name splitting."""
import logging
import sys

from seqlog.core.logger.caller import (
    SENTINEL_FILE,
    CallerContext,
    StackCallerResolver,
    short_file_name,
    split_function_name,
)


class _Probe:
    def where(self):
        return StackCallerResolver().resolve(0), sys._getframe().f_lineno

    def via_helper(self):
        return self._helper()

    def _helper(self):
        # skip this helper: report whoever called it
        return StackCallerResolver().resolve(1)


def _module_function():
    return StackCallerResolver().resolve(0)


class TestSplitFunctionName:
    def test_plain_function(self):
        assert split_function_name("app.jobs", "run") == ("app.jobs", "run")

    def test_method_is_composite(self):
        assert split_function_name("app.jobs", "Worker.run") == ("app.jobs", "Worker.run")

    def test_nested_class_keeps_outer_in_package(self):
        assert split_function_name("app.jobs", "Outer.Inner.run") == ("app.jobs.Outer", "Inner.run")

    def test_nested_function_drops_locals_marker(self):
        assert split_function_name("app.jobs", "outer.<locals>.inner") == ("app.jobs.outer", "inner")

    def test_class_inside_function(self):
        assert split_function_name("app", "build.<locals>.Local.go") == ("app.build", "Local.go")

    def test_empty_module(self):
        assert split_function_name("", "main") == ("", "main")


class TestShortFileName:
    def test_strips_directories(self):
        assert short_file_name("/srv/app/jobs/worker.py") == "worker.py"

    def test_bare_name_unchanged(self):
        assert short_file_name("worker.py") == "worker.py"

    def test_trailing_separator(self):
        assert short_file_name("/srv/app/") == ""


class TestStackCallerResolver:
    def test_method_call(self):
        ctx, line = _Probe().where()
        assert ctx.function_name == "_Probe.where"
        assert ctx.package_path == __name__
        assert ctx.source_file == "test_caller.py"
        assert ctx.line_number == line

    def test_module_function(self):
        ctx = _module_function()
        assert ctx.function_name == "_module_function"
        assert ctx.package_path == __name__

    def test_skip_reports_outer_frame(self):
        ctx = _Probe().via_helper()
        assert ctx.function_name == "_Probe.via_helper"

    def test_nested_function(self):
        def inner():
            return StackCallerResolver().resolve(0)

        ctx = inner()
        assert ctx.function_name == "inner"
        assert ctx.package_path.startswith(__name__)

    def test_unavailable_frame_falls_back(self):
        ctx = StackCallerResolver().resolve(100_000)
        assert ctx == CallerContext.unknown()
        assert ctx.source_file == SENTINEL_FILE
        assert ctx.line_number == 0


class TestFromRecord:
    def test_record_fields(self):
        record = logging.LogRecord(
            "app.db", logging.INFO, "/srv/app/db.py", 12, "connected", None, None, func="connect"
        )
        ctx = CallerContext.from_record(record)
        assert ctx == CallerContext("app.db", "connect", "db.py", 12)

    def test_root_logger_uses_module(self):
        record = logging.LogRecord("root", logging.INFO, "/srv/tool.py", 3, "x", None, None, func="main")
        assert CallerContext.from_record(record).package_path == "tool"
