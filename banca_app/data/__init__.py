"""
Operation input module.

Validation of raw operation form input and construction of Operation
records from it.
"""
