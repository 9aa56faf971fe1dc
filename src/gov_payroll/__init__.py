"""Village government payroll backend.

This package is organized by feature modules (positions, employees, attendance,
overtime, salary, reports, users) with a thin Flask controller layer on top of
service/repository layers.
"""
