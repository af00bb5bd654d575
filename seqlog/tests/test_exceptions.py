"""Unit tests for the exception types."""
from __future__ import annotations

import unittest

from seqlog.core.exceptions import (
    ConfigurationError,
    ErrorLogged,
    FatalLogged,
    LevelSignal,
    SeqlogError,
    SinkError,
)
from seqlog.core.logger.caller import CallerContext
from seqlog.core.logger.levels import LogLevel


class TestSeqlogError(unittest.TestCase):
    def test_default_codes(self) -> None:
        self.assertEqual(SeqlogError("x").code, "ERROR")
        self.assertEqual(ConfigurationError("x").code, "CONFIGURATION_ERROR")
        self.assertEqual(SinkError("x").code, "SINK_ERROR")
        self.assertEqual(ErrorLogged("x").code, "ERROR_LOGGED")
        self.assertEqual(FatalLogged("x").code, "FATAL_LOGGED")

    def test_code_override(self) -> None:
        self.assertEqual(SinkError("x", code="DISK_FULL").code, "DISK_FULL")

    def test_to_dict_with_cause(self) -> None:
        cause = OSError(28, "No space left on device")
        err = SinkError("write failed", details={"path": "app.0.log"}, cause=cause)
        out = err.to_dict()
        self.assertEqual(out["message"], "write failed")
        self.assertEqual(out["details"], {"path": "app.0.log"})
        self.assertIn("No space left", out["cause"])
        self.assertIsInstance(out["cause_traceback"], list)

    def test_to_dict_minimal(self) -> None:
        self.assertEqual(SeqlogError("m").to_dict(), {"message": "m", "code": "ERROR"})

    def test_str_and_repr(self) -> None:
        err = ConfigurationError("bad size")
        self.assertEqual(str(err), "bad size")
        self.assertIn("CONFIGURATION_ERROR", repr(err))


class TestLevelSignal(unittest.TestCase):
    def test_carries_level_and_context(self) -> None:
        ctx = CallerContext("app", "main", "main.py", 1)
        sig = ErrorLogged("failed", level=LogLevel.ERROR, context=ctx)
        self.assertIsInstance(sig, LevelSignal)
        self.assertIsInstance(sig, SeqlogError)
        self.assertIs(sig.level, LogLevel.ERROR)
        self.assertIs(sig.context, ctx)
        self.assertEqual(str(sig), "failed")


if __name__ == "__main__":
    unittest.main()
