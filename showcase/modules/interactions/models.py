# Supabase tables: project_likes, project_bookmarks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

project_likes:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- project_id: uuid (foreign key to projects.id, not null, on delete cascade)
- created_at: timestamp (default: now())
- unique constraint on (user_id, project_id)

project_bookmarks:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- project_id: uuid (foreign key to projects.id, not null, on delete cascade)
- created_at: timestamp (default: now())
- unique constraint on (user_id, project_id)

A row existing means liked/bookmarked. Rows are only ever inserted or
deleted, never updated. projects.likes_count is adjusted alongside the like
rows but is not kept consistent with them.
"""
