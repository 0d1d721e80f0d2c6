# Supabase tables: services, service_reviews
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

services:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null) - owning freelancer
- title: text (not null)
- category: text (not null)
- description: text (not null)
- price_range: text (nullable) - free-form price hint, e.g. "N2,000 - N5,000"
- image_url: text (nullable) - public URL under services/
- is_featured: boolean (default: false) - set by admins
- created_at: timestamp (default: now())

service_reviews:
- id: uuid (primary key)
- service_id: uuid (foreign key to services.id, not null)
- user_id: uuid (foreign key to profiles.id, not null)
- rating: integer (not null, 1..5)
- comment: text (not null)
- created_at: timestamp (default: now())
- unique constraint on (service_id, user_id)
"""
