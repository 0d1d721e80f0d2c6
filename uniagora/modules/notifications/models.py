# Supabase table: notifications
# Rows are created by database triggers (new message, verification decision, ...);
# this application only reads, marks read and deletes them.

"""
Expected Supabase table structure:

notifications:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null) - recipient
- title: text (not null)
- content: text (not null)
- link: text (nullable) - in-app path to open on click
- is_read: boolean (default: false)
- created_at: timestamp (default: now())

Realtime: the table is part of the supabase_realtime publication so clients
can subscribe to INSERTs filtered by user_id.
"""
