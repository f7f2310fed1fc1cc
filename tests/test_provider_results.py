import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.ai.errors import MalformedProviderResult, ProviderInvocationFailed  # noqa: E402
from resume_match.ai.providers.coercion import (  # noqa: E402
    _clamp_int,
    _safe_str_list,
    coerce_provider_result,
    parse_json_payload,
)


class ParseJsonPayloadTests(unittest.TestCase):
    def test_extracts_object_from_fenced_reply(self):
        content = 'Here you go:\n```json\n{"pillars": {"core_skills": 20}}\n```'
        self.assertEqual(parse_json_payload(content), {"pillars": {"core_skills": 20}})

    def test_rejects_text_without_object(self):
        with self.assertRaises(MalformedProviderResult) as ctx:
            parse_json_payload("I could not analyze this resume.")
        self.assertEqual(ctx.exception.code, "malformed_provider_result")

    def test_rejects_invalid_json(self):
        with self.assertRaises(MalformedProviderResult):
            parse_json_payload("{pillars: nope}")

    def test_malformed_result_is_an_invocation_failure(self):
        self.assertTrue(issubclass(MalformedProviderResult, ProviderInvocationFailed))


class CoercionHelperTests(unittest.TestCase):
    def test_clamp_int_handles_garbage(self):
        self.assertEqual(_clamp_int("17.6", 0, 0, 40), 18)
        self.assertEqual(_clamp_int("abc", 5, 0, 40), 5)
        self.assertEqual(_clamp_int(None, 0, 0, 40), 0)
        self.assertEqual(_clamp_int(float("inf"), 3, 0, 40), 3)
        self.assertEqual(_clamp_int(-12, 0, 0, 40), 0)
        self.assertEqual(_clamp_int(400, 0, 0, 40), 40)

    def test_safe_str_list_drops_blanks_and_duplicates(self):
        self.assertEqual(_safe_str_list([" a ", "", None, "a", "b"], max_items=5), ["a", "b"])
        self.assertEqual(_safe_str_list("not a list", max_items=5), [])
        self.assertEqual(_safe_str_list(["x", "y", "z"], max_items=2), ["x", "y"])


class CoerceProviderResultTests(unittest.TestCase):
    def test_pillars_are_clamped_and_overall_recomputed(self):
        raw = {
            "overall_score": 99,
            "pillars": {
                "core_skills": {"score": 55, "matched": ["python", "python", "aws"]},
                "relevant_experience": {"score": "22", "candidate_years": 6, "jd_years": 5},
                "tools_methodologies": {"score": -4},
                "education_credentials": {"score": 9.4, "degree": "Master's degree"},
            },
            "recommendations": ["Quantify impact", "", "Quantify impact"],
        }
        result = coerce_provider_result(raw, service_name="Gemini", confidence=0.9)

        self.assertEqual(result.pillars.core_skills.score, 40)
        self.assertEqual(result.pillars.core_skills.matched, ["python", "aws"])
        self.assertEqual(result.pillars.relevant_experience.score, 22)
        self.assertEqual(result.pillars.tools_methodologies.score, 0)
        self.assertEqual(result.pillars.education_credentials.score, 9)
        self.assertEqual(result.overall_score, 71)
        self.assertEqual(result.recommendations, ["Quantify impact"])
        self.assertEqual(result.analysis_method, "ai")
        self.assertEqual(result.service_name, "Gemini")

    def test_flat_payload_and_bare_scores_are_accepted(self):
        raw = {"core_skills": 30, "relevant_experience": 20, "tools_methodologies": 10, "education_credentials": 5}
        result = coerce_provider_result(raw, service_name="OpenAI", confidence=0.9)
        self.assertEqual(result.pillars.scores(), raw)
        self.assertEqual(result.overall_score, 65)

    def test_missing_fields_default(self):
        result = coerce_provider_result({}, service_name="Claude", confidence=0.95)
        self.assertEqual(result.overall_score, 0)
        self.assertEqual(result.pillars.education_credentials.degree, "Not specified")
        self.assertEqual(result.confidence, 0.95)
        self.assertEqual(result.recommendations, [])

    def test_string_payload_is_parsed(self):
        result = coerce_provider_result('{"pillars": {"core_skills": 12}}', service_name="OpenAI", confidence=0.9)
        self.assertEqual(result.overall_score, 12)

    def test_recommendations_are_capped(self):
        raw = {"recommendations": [f"tip {i}" for i in range(20)]}
        result = coerce_provider_result(raw, service_name="OpenAI", confidence=0.9, max_recommendations=3)
        self.assertEqual(result.recommendations, ["tip 0", "tip 1", "tip 2"])

    def test_non_mapping_is_rejected(self):
        with self.assertRaises(MalformedProviderResult):
            coerce_provider_result(["pillars"], service_name="OpenAI", confidence=0.9)
        with self.assertRaises(MalformedProviderResult):
            coerce_provider_result(None, service_name="OpenAI", confidence=0.9)


if __name__ == "__main__":
    unittest.main()
