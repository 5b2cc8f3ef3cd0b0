"""Repositories package — all SQLAlchemy queries live here.

Files:
  base.py          — generic CRUD + change events published on commit
  category.py      — categories loaded with vendors and selected vendor
  vendor.py        — vendors by category
  conversation.py  — message history per vendor
  action.py        — pending / needing-input actions
"""
