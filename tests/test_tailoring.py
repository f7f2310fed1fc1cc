import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.schemas.analysis import PILLAR_CAPS  # noqa: E402
from resume_match.schemas.provider import JobDescriptor  # noqa: E402
from resume_match.scoring.engine import ScoringEngine  # noqa: E402
from resume_match.scoring.tailoring import (  # noqa: E402
    analyze_job_match,
    job_specific_recommendations,
    requirement_is_met,
    tailor_result,
)

RESUME = """John Smith
john.smith@example.com

EXPERIENCE
Software developer with 2 years of experience.
- Developed Python services and React dashboards
- Worked on AWS deployments

EDUCATION
Some coursework at City College
"""

JOB = "We are hiring a backend engineer with 4 years of experience. Must know Python, React, AWS and Docker."

DESCRIPTOR = JobDescriptor(
    title="Backend Engineer",
    company="Acme",
    required_skills=["Python", "React", "AWS"],
    experience_years=2,
    requirements=["Develop Python services", "Deploy workloads on AWS"],
)


class JobMatchTests(unittest.TestCase):
    def test_matches_and_bonuses(self):
        match = analyze_job_match(RESUME, DESCRIPTOR)
        self.assertEqual(match.target_role, "Backend Engineer")
        self.assertEqual(match.skills_match.match_percentage, 100)
        self.assertTrue(match.experience_match.meets_requirement)
        self.assertEqual(match.requirements_match.matched_requirements, ["Develop Python services"])
        self.assertEqual(match.requirements_match.match_percentage, 50)
        self.assertEqual(
            match.bonuses,
            {"core_skills": 5, "relevant_experience": 3, "tools_methodologies": 2},
        )

    def test_skill_aliases_resolve_through_taxonomy(self):
        descriptor = JobDescriptor(required_skills=["K8s", "Rust"])
        match = analyze_job_match("Ran production Kubernetes clusters", descriptor)
        self.assertEqual(match.skills_match.matched_skills, ["K8s"])
        self.assertEqual(match.skills_match.missing_skills, ["Rust"])
        self.assertEqual(match.skills_match.match_percentage, 50)
        self.assertEqual(match.bonuses["core_skills"], 1)

    def test_experience_gap_bonus(self):
        match = analyze_job_match("3 years of experience", JobDescriptor(experience_years=4))
        self.assertFalse(match.experience_match.meets_requirement)
        self.assertEqual(match.experience_match.gap, 1)
        self.assertEqual(match.bonuses["relevant_experience"], 1)

        match = analyze_job_match("1 year of experience", JobDescriptor(experience_years=6))
        self.assertEqual(match.bonuses["relevant_experience"], 0)

    def test_experience_falls_back_to_date_span(self):
        match = analyze_job_match("Software Engineer, Acme\n2015 - 2023 built APIs", JobDescriptor(experience_years=5))
        self.assertEqual(match.experience_match.candidate, 8)
        self.assertTrue(match.experience_match.meets_requirement)
        self.assertEqual(match.experience_match.gap, 0)
        self.assertEqual(match.bonuses["relevant_experience"], 3)

    def test_requirement_word_threshold(self):
        self.assertTrue(requirement_is_met("python services", "Develop Python services"))
        self.assertFalse(requirement_is_met("python", "Develop Python services"))
        self.assertIsNone(requirement_is_met("anything", "on it"))

    def test_job_specific_recommendations(self):
        descriptor = JobDescriptor(
            required_skills=["Rust", "Go", "Elixir", "Haskell"],
            experience_years=8,
            requirements=["Operate Kafka clusters", "Mentor junior engineers"],
        )
        match = analyze_job_match("2 years of experience with Python", descriptor)
        self.assertEqual(
            job_specific_recommendations(match),
            [
                "Add these required skills: Rust, Go, Elixir",
                "Highlight relevant experience to address the 6-year experience gap",
                "Address these key requirements: Operate Kafka clusters; Mentor junior engineers",
            ],
        )


class TailorResultTests(unittest.TestCase):
    def setUp(self):
        self.base = ScoringEngine().analyze(RESUME, JOB)

    def test_each_pillar_gains_its_bonus(self):
        tailored = tailor_result(self.base, RESUME, DESCRIPTOR)
        bonuses = tailored.job_specific.bonuses
        base_scores = self.base.pillars.scores()
        expected = {
            name: min(PILLAR_CAPS[name], score + bonuses.get(name, 0))
            for name, score in base_scores.items()
        }
        self.assertLessEqual(sum(expected.values()), 95)
        self.assertEqual(tailored.pillars.scores(), expected)
        self.assertEqual(tailored.overall_score, sum(expected.values()))
        self.assertEqual(tailored.overall_score, self.base.overall_score + 10)

    def test_confidence_and_recommendations(self):
        tailored = tailor_result(self.base, RESUME, DESCRIPTOR)
        self.assertEqual(tailored.confidence, round(min(0.9, self.base.confidence + 0.1), 2))
        self.assertLessEqual(len(tailored.recommendations), 8)
        self.assertEqual(len(tailored.recommendations), len(set(tailored.recommendations)))
        self.assertEqual(tailored.recommendations[0], "Address these key requirements: Deploy workloads on AWS")

    def test_base_result_is_not_mutated(self):
        before = self.base.model_dump()
        tailor_result(self.base, RESUME, DESCRIPTOR)
        self.assertEqual(self.base.model_dump(), before)

    def test_tailoring_never_lowers_the_score(self):
        engine = ScoringEngine()
        descriptors = [
            JobDescriptor(),
            DESCRIPTOR,
            JobDescriptor(required_skills=["Haskell"], experience_years=20, requirements=["Fly airplanes daily"]),
        ]
        resumes = ["", RESUME, "Python " * 500]
        for resume in resumes:
            base = engine.analyze(resume, JOB)
            for descriptor in descriptors:
                with self.subTest(resume=resume[:20], descriptor=descriptor.title):
                    tailored = tailor_result(base, resume, descriptor)
                    self.assertGreaterEqual(tailored.overall_score, base.overall_score)
                    self.assertLessEqual(tailored.overall_score, 95)
                    self.assertEqual(tailored.overall_score, tailored.pillars.total())


if __name__ == "__main__":
    unittest.main()
