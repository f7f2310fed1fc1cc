import sys
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.core.config import scoring  # noqa: E402
from resume_match.core.config.scoring import get_scoring_config, get_scoring_value  # noqa: E402
from resume_match.scoring.basic import BASIC_CONFIDENCE  # noqa: E402


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("overall.floor"), 20)
        self.assertEqual(get_scoring_value("overall.ceiling"), 95)
        self.assertEqual(get_scoring_value("confidence.bonus.skill_relevance"), 0.3)

    def test_missing_paths_return_default(self):
        self.assertIsNone(get_scoring_value("overall.missing"))
        self.assertEqual(get_scoring_value("overall.floor.nested", 7), 7)
        self.assertEqual(get_scoring_value("", "fallback"), "fallback")

    def test_confidence_tiers_are_ordered(self):
        ai = get_scoring_value("confidence.ai")
        contextual = get_scoring_value("confidence.ai_contextual")
        rule_based_cap = get_scoring_value("confidence.rule_based_cap")
        self.assertGreater(contextual, ai)
        self.assertGreaterEqual(contextual, rule_based_cap)
        self.assertGreater(get_scoring_value("confidence.rule_based_base"), BASIC_CONFIDENCE)

    def test_override_path_replaces_bundled_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("overall:\n  floor: 10\n", encoding="utf-8")
            with patch.object(scoring, "settings", SimpleNamespace(scoring_config_path=str(path))):
                self.assertEqual(get_scoring_value("overall.floor"), 10)
                self.assertEqual(get_scoring_value("overall.ceiling", 95), 95)
        scoring.load_scoring_config.cache_clear()
        self.assertEqual(get_scoring_value("overall.floor"), 20)

    def test_invalid_config_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                scoring.load_scoring_config(path)
            with self.assertRaises(RuntimeError):
                scoring.load_scoring_config(Path(tmp) / "missing.yaml")


if __name__ == "__main__":
    unittest.main()
