# Supabase Auth
# Accounts live in Supabase's auth.users table; this module never stores credentials.
# Signup additionally creates the public `profiles` row (see modules/profiles/models.py).

"""
Supabase Auth calls used here:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Resolve the current user from a JWT
- auth.sign_out() - Logout users
- auth.reset_password_for_email() - Send the password reset link
- auth.admin.update_user_by_id() - Set a new password (service role)

Admin console access is granted by e-mail (ADMIN_EMAILS) or by
app_metadata.type == ADMIN_METADATA_TYPE, which only the service role can set.
"""
