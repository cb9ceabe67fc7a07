# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- name: text (nullable)
- email: text (nullable) - copied from auth.users on first session
- github_url: text (nullable)
- avatar_url: text (nullable)
- bio: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

A profile row is created the first time a user's session is handled
(see AuthService.handle_user_session) and is only ever mutated by its owner.
"""
