# Supabase tables: projects, project_tags
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

projects:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, nullable) - owner/submitter
- title: text (not null)
- description: text (nullable)
- tech_stack: text[] (nullable) - ordered, no duplicates
- category: text (nullable) - one of CATEGORIES in schemas.py
- thumbnail_url: text (nullable)
- github_url: text (nullable)
- demo_url: text (nullable)
- featured: boolean (not null, default: false) - set by club admins in the dashboard of the store
- likes_count: integer (not null, default: 0) - denormalized, adjusted by the like toggle
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

project_tags:
- id: uuid (primary key)
- project_id: uuid (foreign key to projects.id, not null)
- tag: text (not null)
- created_at: timestamp (default: now())

project_tags is part of the schema but nothing reads or writes it yet.
"""
