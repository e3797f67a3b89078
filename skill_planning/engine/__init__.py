"""Skills-based team ↔ project matching engine.

Sub-modules:
- requirements    – project required-skill resolution
- compatibility   – team ↔ requirement scoring
- gaps            – cross-team project skill gaps
- coverage        – organisation-wide skill coverage
- team_filter     – ad-hoc skill search over teams
- recommendations – ranked team recommendations
- score_cache     – memo table for compatibility results
"""
