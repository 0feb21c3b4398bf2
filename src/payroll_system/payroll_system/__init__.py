"""Payroll System package.

This package is organized by feature modules (payroll, ledger) with a thin
Flask controller layer and service/repository layers underneath.
"""
