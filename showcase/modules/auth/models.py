# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (display name stored as user_metadata.name)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.get_session() - Current session of the client, if any
- auth.on_auth_state_change() - Session change subscription
- auth.admin.sign_out(jwt) - Logout a single session

The public side of a user lives in the profiles table (see modules/profiles).
"""
