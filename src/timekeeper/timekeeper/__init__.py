"""timekeeper package.

Attendance time-accounting and reporting backend, organized by feature
modules (users, attendance, leaves, daily_log, stats, reports) with a thin
Flask controller layer over service/repository layers.
"""
