# Supabase tables: conversations, conversation_participants
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

conversations:
- id: uuid (primary key)
- created_at: timestamp (default: now())

conversation_participants:
- id: uuid (primary key)
- conversation_id: uuid (foreign key to conversations.id, not null)
- user_id: uuid (foreign key to profiles.id, not null)
- unique constraint on (conversation_id, user_id)

Stored procedure (defined in the database, not here):

get_or_create_conversation(p_id1 uuid, p_id2 uuid) returns uuid
- returns the id of the conversation both users participate in,
  creating the conversation and both participant rows if none exists.
"""
