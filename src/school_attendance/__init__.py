"""School attendance package.

This package is organized by feature modules (users, courses, attendance,
certificates, ...) with a thin Flask controller layer over service and
repository layers.
"""
