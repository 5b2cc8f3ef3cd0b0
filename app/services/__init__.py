"""Services package — all business logic lives here, never in routers.

Files:
  vendor.py           — vendor CRUD
  category.py         — categories, vendor selection, human-input follow-ups
  outreach.py         — outreach workflow: message log, actions, status changes
  vendor_emails.py    — draft / analyze / send AI emails for a vendor
  email_generator.py  — OpenAI drafting with template fallback
  email_delivery.py   — Resend delivery
  dashboard.py        — budget stats, category overview, recent activity

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
