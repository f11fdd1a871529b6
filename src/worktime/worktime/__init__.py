"""Worktime package.

Feature modules (users, attendance, commitments, reports, sync) each carry a
model, a repository protocol with its MySQL implementation, a service and a
thin Flask controller. The reporting engine under ``reports`` is pure.
"""
