# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- full_name: text (not null)
- phone_number: text (nullable) - stored with country prefix, e.g. +2348012345678
- university: text (default: 'Unspecified University')
- is_freelancer: boolean (default: false)
- verification_status: text (default: 'unverified') - values: unverified, pending, verified
- image_url: text (nullable) - public URL under profiles/
- verification_document_url: text (nullable) - public URL under verifications/<user_id>/
- created_at: timestamp (default: now())

Profiles are created at signup, edited by their owner and have their
verification_status toggled by an admin. They are never deleted here.
"""
