"""Team formation engine.

Sub-modules:
- allocation   – greedy balanced partition of a participant pool
- statistics   – formation summary counts
- team_balance – diversity & coverage report for formed teams
"""
