"""Pydantic schemas package.

Folder intent:
  common.py     — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  category.py   — vendor categories, with and without their vendors
  vendor.py     — vendor DTOs
  outreach.py   — message log, pending actions, workflow request bodies
  email.py      — email drafting context/results and delivery options/results
  dashboard.py  — derived budget stats, category overview, recent activity
"""
