"""v1 router package — all /api/v1/* endpoints live here.

Files:
  categories.py  — vendor categories and the selected vendor
  vendors.py     — vendor CRUD and the needing-input list
  outreach.py    — per-vendor message log and negotiation steps
  actions.py     — pending AI actions
  emails.py      — AI drafting and email delivery
  dashboard.py   — budget stats, category overview, recent activity
  changes.py     — WebSocket change feed

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
