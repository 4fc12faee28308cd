"""
Loan Simulation Engine

Core calculation modules for comparing home-loan offers across banks.
All calculations are pure functions over immutable inputs.
"""

from app.calculations import rates, banks, amortization, simulation

__all__ = ["rates", "banks", "amortization", "simulation"]
