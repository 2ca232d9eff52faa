"""Attendance Engine package.

Feature modules (schedules, calendar, attendance, reports, ...) each carry
a domain model, a repository interface with a MySQL implementation, a
service layer and a thin Flask controller.
"""
