"""Salary Calc - Italian net pay and employer cost simulator."""

__version__ = "0.3.0"
