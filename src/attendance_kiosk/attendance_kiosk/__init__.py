"""Attendance Kiosk package.

This package is organized by feature modules (students, classes, sessions,
attendance, ...) with a thin Flask controller layer and service/repository layers.
"""
