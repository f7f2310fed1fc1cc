from .basic import basic_analysis
from .engine import ScoringEngine
from .format_analyzer import FormatAnalyzer, compatibility_summary
from .tailoring import analyze_job_match, tailor_result

__all__ = [
    "ScoringEngine",
    "FormatAnalyzer",
    "compatibility_summary",
    "analyze_job_match",
    "tailor_result",
    "basic_analysis",
]
