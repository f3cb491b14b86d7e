# Supabase Auth
# This module uses Supabase's built-in authentication system
# Supabase Auth handles:
# - User registration (auth.users table)
# - User login, refresh and session management
# - JWT token generation and validation
# - Password hashing and security
#
# The user's role lives in public.user_profiles (see app/modules/profiles/models.py);
# the on_auth_user_created trigger inserts that row with role 'student'.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (options.data lands in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.refresh_session() - Exchange a refresh token for a new session
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.admin.update_user_by_id() / auth.admin.create_user() - service role only
"""
