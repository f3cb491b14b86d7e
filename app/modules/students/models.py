# Supabase tables: user_profiles (role = 'student'), auth.users
# Students are ordinary auth users whose user_profiles.role is 'student'.
# Reads across other users' rows need the service role client: the
# user_profiles RLS policies only expose a caller's own row.

"""
Student roster view over user_profiles:
- id: uuid
- email: text
- created_at: timestamptz
- last_sign_in: not tracked (always null)
"""

TEMP_PASSWORD_LENGTH = 8
