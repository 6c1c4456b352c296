"""
Race Formulas

Race strategy formulas (tire grip decay, fuel saving, aero speed limits,
overtaking probability, rolling pace) over race-simulation CSV data.
"""

__version__ = "0.1.0"
