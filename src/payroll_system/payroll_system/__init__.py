"""Payroll System package.

Feature modules (staff, attendance, grace, payroll, ...) with a thin Flask
controller layer over service and repository layers.
"""
