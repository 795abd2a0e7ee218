"""CLI tools for Festival Match.

- ``python -m src.cli.festivals`` (or ``python -m src.cli``): catalog
  listing, date-string parsing, cache sweeps, and account helpers for
  local development.
"""
