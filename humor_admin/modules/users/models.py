# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- username: text (nullable)
- is_superadmin: boolean (default: false)
- created_datetime_utc: timestamptz (default: now())

One profile row exists per auth user. The admin site only ever flips
is_superadmin; rows are created and removed alongside auth.users.
"""
