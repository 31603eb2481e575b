"""Time & wage computation engine.

This package is organized by feature modules (shifts, attendance, overtime,
payroll, ...) with pure calculators at the core and SOLID service/repository
layers around them.
"""
