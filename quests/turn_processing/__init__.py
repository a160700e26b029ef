"""Card-selection processing helpers.

This package centralizes validation of hand selections so stage building,
attacks and hand trimming all reject bad input the same way and show up
consistently in logs.
"""
