"""Worklog Portal package.

This package is organized by feature modules (users, worklogs, reports,
departments) with a thin Flask controller layer over service and repository
layers. Persistent state lives in the backend REST API; repositories talk to it
through :mod:`worklog_portal.api.client`.
"""
