"""Diagnostics package.

Light-weight command-line checks and tables; year_lengths needs the
optional diagnostics extras (numpy, matplotlib).
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "year_lengths"]
