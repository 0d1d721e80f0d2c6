# Supabase tables: community_posts, community_comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

community_posts:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null) - author
- title: text (not null)
- category: text (not null) - General, Academic, Freelancing, Events, Market Talk
- content: text (not null)
- created_at: timestamp (default: now())

community_comments:
- id: uuid (primary key)
- post_id: uuid (foreign key to community_posts.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id, not null)
- content: text (not null)
- created_at: timestamp (default: now())
"""
