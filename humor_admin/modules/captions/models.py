# Supabase table: captions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

captions:
- id: uuid (primary key)
- content: text
- like_count: integer (maintained by the voting backend, read-only here)
- is_public: boolean
- created_datetime_utc: timestamptz (default: now())

caption_votes (read-only, counted on the dashboard):
- id: uuid (primary key)
- caption_id: uuid (references captions.id, not enforced by this app)
- vote_value: smallint (+1 or -1)
- created_datetime_utc: timestamptz (default: now())
"""
