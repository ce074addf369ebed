"""Display names of the built-in SonarQube metrics.

Quality gate conditions only carry a metric key. Custom metrics (plugins,
admin-defined) are not in the catalog and are shown by key.
"""

import logging

logger = logging.getLogger(__name__)

CORE_METRICS: dict[str, str] = {
    # Size
    "lines": "Lines",
    "ncloc": "Lines of Code",
    "new_lines": "Lines on New Code",
    "statements": "Statements",
    "functions": "Functions",
    "classes": "Classes",
    "files": "Files",
    "directories": "Directories",
    "comment_lines": "Comment Lines",
    "comment_lines_density": "Comments (%)",
    # Complexity
    "complexity": "Cyclomatic Complexity",
    "cognitive_complexity": "Cognitive Complexity",
    # Issues
    "violations": "Issues",
    "new_violations": "New Issues",
    "blocker_violations": "Blocker Issues",
    "critical_violations": "Critical Issues",
    "major_violations": "Major Issues",
    "minor_violations": "Minor Issues",
    "info_violations": "Info Issues",
    "new_blocker_violations": "New Blocker Issues",
    "new_critical_violations": "New Critical Issues",
    "new_major_violations": "New Major Issues",
    "new_minor_violations": "New Minor Issues",
    "new_info_violations": "New Info Issues",
    "false_positive_issues": "False Positive Issues",
    "open_issues": "Open Issues",
    "reopened_issues": "Reopened Issues",
    "confirmed_issues": "Confirmed Issues",
    # Reliability
    "bugs": "Bugs",
    "new_bugs": "New Bugs",
    "reliability_rating": "Reliability Rating",
    "new_reliability_rating": "Reliability Rating on New Code",
    "reliability_remediation_effort": "Reliability Remediation Effort",
    "new_reliability_remediation_effort": "Reliability Remediation Effort on New Code",
    # Security
    "vulnerabilities": "Vulnerabilities",
    "new_vulnerabilities": "New Vulnerabilities",
    "security_rating": "Security Rating",
    "new_security_rating": "Security Rating on New Code",
    "security_remediation_effort": "Security Remediation Effort",
    "new_security_remediation_effort": "Security Remediation Effort on New Code",
    "security_hotspots": "Security Hotspots",
    "new_security_hotspots": "New Security Hotspots",
    "security_hotspots_reviewed": "Security Hotspots Reviewed",
    "new_security_hotspots_reviewed": "Security Hotspots Reviewed on New Code",
    "security_review_rating": "Security Review Rating",
    "new_security_review_rating": "Security Review Rating on New Code",
    # Maintainability
    "code_smells": "Code Smells",
    "new_code_smells": "New Code Smells",
    "sqale_rating": "Maintainability Rating",
    "new_maintainability_rating": "Maintainability Rating on New Code",
    "sqale_index": "Technical Debt",
    "new_technical_debt": "Added Technical Debt",
    "sqale_debt_ratio": "Technical Debt Ratio",
    "new_sqale_debt_ratio": "Technical Debt Ratio on New Code",
    "effort_to_reach_maintainability_rating_a": "Effort to Reach Maintainability Rating A",
    # Coverage
    "coverage": "Coverage",
    "new_coverage": "Coverage on New Code",
    "line_coverage": "Line Coverage",
    "new_line_coverage": "Line Coverage on New Code",
    "branch_coverage": "Condition Coverage",
    "new_branch_coverage": "Condition Coverage on New Code",
    "lines_to_cover": "Lines to Cover",
    "new_lines_to_cover": "Lines to Cover on New Code",
    "uncovered_lines": "Uncovered Lines",
    "new_uncovered_lines": "Uncovered Lines on New Code",
    "conditions_to_cover": "Conditions to Cover",
    "new_conditions_to_cover": "Conditions to Cover on New Code",
    "uncovered_conditions": "Uncovered Conditions",
    "new_uncovered_conditions": "Uncovered Conditions on New Code",
    "tests": "Unit Tests",
    "test_errors": "Unit Test Errors",
    "test_failures": "Unit Test Failures",
    "skipped_tests": "Skipped Unit Tests",
    "test_success_density": "Unit Test Success (%)",
    # Duplications
    "duplicated_lines": "Duplicated Lines",
    "new_duplicated_lines": "Duplicated Lines on New Code",
    "duplicated_lines_density": "Duplicated Lines (%)",
    "new_duplicated_lines_density": "Duplicated Lines (%) on New Code",
    "duplicated_blocks": "Duplicated Blocks",
    "new_duplicated_blocks": "Duplicated Blocks on New Code",
    "duplicated_files": "Duplicated Files",
    # Gate
    "alert_status": "Quality Gate Status",
}


def get_metric_name(metric_key: str) -> str:
    """Return the display name of a metric, or the key itself when unknown."""
    name = CORE_METRICS.get(metric_key)
    if name is None:
        logger.debug("Using key as name for custom metric '%s'", metric_key)
        return metric_key
    return name
