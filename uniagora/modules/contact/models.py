# Supabase table: contact_submissions
# Anyone may insert; only admins read and delete (see modules/admin).

"""
Expected Supabase table structure:

contact_submissions:
- id: uuid (primary key)
- name: text (not null)
- email: text (not null)
- subject: text (not null) - general, report, bug, suggestion
- message: text (not null)
- created_at: timestamp (default: now())
"""
