"""Reporting - Read-only enrollment queries."""

from learntrack.reporting.reports import EnrollmentReports

__all__ = ["EnrollmentReports"]
