"""HRMS backend package.

Organized by feature modules (organizations, users, shifts, attendance, ...)
with a thin Flask controller layer over service/repository layers.
"""
