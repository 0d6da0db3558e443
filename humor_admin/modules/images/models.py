# Supabase table: images
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

images:
- id: uuid (primary key)
- url: text (nullable) - original upload location
- cdn_url: text (nullable) - preferred for previews when present
- is_common_use: boolean (nullable)
- created_datetime_utc: timestamptz (default: now())
"""
