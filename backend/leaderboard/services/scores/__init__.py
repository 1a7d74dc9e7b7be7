"""Score domain services: ledger, ranking, ingress and claim settlement.

This package contains the score workflow that HTTP routes call into,
keeping request parsing and rendering separated from the state changes
of unclaimed scores and leaderboard entries.
"""
