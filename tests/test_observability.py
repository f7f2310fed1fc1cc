import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.core import observability  # noqa: E402


class ObservabilityTests(unittest.TestCase):
    def test_configure_logging_initializes_sentry_only_with_dsn(self):
        with patch.object(observability, "settings", SimpleNamespace(log_level="INFO", sentry_dsn=None)), patch(
            "resume_match.core.observability.sentry_sdk.init"
        ) as init, patch("resume_match.core.observability.logging.basicConfig") as basic_config:
            observability.configure_logging()
        init.assert_not_called()
        basic_config.assert_called_once_with(level="INFO", format="%(message)s")

        dsn = "https://public@example.ingest.sentry.io/1"
        with patch.object(observability, "settings", SimpleNamespace(log_level="INFO", sentry_dsn=dsn)), patch(
            "resume_match.core.observability.sentry_sdk.init"
        ) as init, patch("resume_match.core.observability.logging.basicConfig"):
            observability.configure_logging("DEBUG")
        init.assert_called_once_with(dsn=dsn)

    def test_report_defect_forwards_to_sentry(self):
        exc = RuntimeError("boom")
        with patch("resume_match.core.observability.sentry_sdk.capture_exception") as capture:
            observability.report_defect(exc)
        capture.assert_called_once_with(exc)

    def test_report_defect_swallows_reporting_errors(self):
        with patch(
            "resume_match.core.observability.sentry_sdk.capture_exception",
            side_effect=ValueError("transport down"),
        ):
            observability.report_defect(RuntimeError("boom"))

    def test_clip(self):
        self.assertEqual(observability.clip("abcdef", 3), "abc...")
        self.assertEqual(observability.clip("abc", 3), "abc")
        with patch.object(observability, "settings", SimpleNamespace(log_text_max_chars=4)):
            self.assertEqual(observability.clip("abcdefgh"), "abcd...")


if __name__ == "__main__":
    unittest.main()
