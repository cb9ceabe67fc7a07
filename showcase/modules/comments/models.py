# Supabase tables: project_comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

project_comments:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null) - author
- project_id: uuid (foreign key to projects.id, not null, on delete cascade)
- content: text (not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
