import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.taxonomy import get_default_taxonomy_provider  # noqa: E402
from resume_match.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonym_normalization_resolves_canonical_term(self):
        taxonomy = LocalTaxonomy()
        normalized, canonical = taxonomy.normalize_skill("  K8s ")
        self.assertEqual(normalized, "k8s")
        self.assertEqual(canonical, "kubernetes")

    def test_known_skill_is_its_own_canonical_form(self):
        taxonomy = LocalTaxonomy()
        self.assertEqual(taxonomy.normalize_skill("JavaScript"), ("javascript", "javascript"))
        self.assertEqual(taxonomy.normalize_skill("Underwater Basketry"), ("underwater basketry", None))

    def test_vocabulary_groups_are_lowercase_and_unique(self):
        taxonomy = LocalTaxonomy()
        skills = taxonomy.skills()
        self.assertIn("python", skills)
        self.assertIn("kubernetes", taxonomy.tools())
        self.assertEqual(len(skills), len(set(skills)))
        self.assertTrue(all(skill == skill.lower() for skill in skills))
        self.assertIn("technology", taxonomy.industries())

    def test_ambiguous_short_synonyms_are_not_mapped(self):
        synonyms = LocalTaxonomy().synonyms()
        self.assertNotIn("go", synonyms)
        self.assertNotIn("ts", synonyms)
        self.assertEqual(synonyms["js"], "javascript")

    def test_default_provider_is_cached(self):
        self.assertIs(get_default_taxonomy_provider(), get_default_taxonomy_provider())

    def test_rejects_non_mapping_vocabulary(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "vocabulary.json"
            path.write_text("[]", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                LocalTaxonomy(path)


if __name__ == "__main__":
    unittest.main()
