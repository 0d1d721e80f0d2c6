# Supabase table: messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

messages:
- id: uuid (primary key)
- conversation_id: uuid (foreign key to conversations.id, not null)
- sender_id: uuid (foreign key to profiles.id, not null)
- text: text (not null)
- created_at: timestamp (default: now())

Messages are append-only: never edited or deleted by this application.
RLS restricts reads and inserts to the conversation's participants, which is
why every call runs with the caller's bearer token.
"""
