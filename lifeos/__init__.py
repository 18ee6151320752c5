"""
LifeOS Engine - Source Package

A personal analytics engine that turns daily life-tracking records
(health, psychology, income, expenses, investments) into scores,
a net worth time series and a gamified avatar state.

DESIGN PRINCIPLES:
1. Scoring is a pure function of its inputs
2. Invalid input fails loudly, missing input degrades predictably
3. Tables are data, not branching code
4. Every score can explain how it was calculated
5. Money amounts snapshot the exchange rate they were written with
"""

__version__ = "1.0.0"
__author__ = "LifeOS Team"
