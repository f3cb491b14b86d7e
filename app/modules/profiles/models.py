# Supabase tables: user_profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)
# DDL: supabase/migrations/20240101000000_create_user_profiles.sql

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, references auth.users.id ON DELETE CASCADE)
- email: text (not null) - copied from auth.users on signup
- role: text (not null, CHECK role IN ('student', 'teacher'))
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now(), maintained by update trigger)

Row level security:
- select/update/insert only where auth.uid() = id

Triggers:
- on_auth_user_created: AFTER INSERT ON auth.users inserts (id, email, 'student')
- update_user_profiles_updated_at: BEFORE UPDATE sets updated_at = now()

The display name is not a column; it is kept in auth.users.user_metadata.display_name.
"""

# PostgREST error codes handled by the role lookup fallback
UNDEFINED_TABLE = "42P01"
NO_ROWS = "PGRST116"
