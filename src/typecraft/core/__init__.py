"""Core layer: sentinel, errors, results, predicates, constraints.

This layer depends only on stdlib.
It must never import from types, config or telemetry at module level;
``Failure.to_report`` loads ``typecraft.reports`` on first use.
"""
