"""Subject lines and bodies for account emails."""

CONFIRMATION_SUBJECT = "Confirm your email address - Tessera"

CONFIRMATION_TEXT = """Hello,

Thanks for signing up. Please confirm your email address by opening the link
below (valid for {expires_in_hours} hours):
{confirmation_link}

If you didn't create an account, you can safely ignore this email.

-- Tessera
"""

CONFIRMATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .button {{ display: inline-block; padding: 12px 24px; background: #2563eb; color: white; text-decoration: none; border-radius: 6px; }}
        .footer {{ margin-top: 30px; color: #6b7280; font-size: 14px; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>Confirm your email address</h2>
        <p>Thanks for signing up.</p>
        <p>Click the button below to confirm your email address. This link is valid for {expires_in_hours} hours.</p>
        <p style="margin: 30px 0;">
            <a href="{confirmation_link}" class="button">Confirm email</a>
        </p>
        <p>Or copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #6b7280;">{confirmation_link}</p>
        <div class="footer">
            <p>If you didn't create an account, you can safely ignore this email.</p>
            <p>-- Tessera</p>
        </div>
    </div>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "Your password reset code - Tessera"

PASSWORD_RESET_TEXT = """Hello,

You requested a password reset for your Tessera account.

Your reset code is: {code}

The code is valid for {expires_in_minutes} minutes and can be used once.

If you didn't request this, you can safely ignore this email.

-- Tessera
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .code {{ font-size: 32px; letter-spacing: 8px; font-weight: bold; }}
        .footer {{ margin-top: 30px; color: #6b7280; font-size: 14px; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>Password Reset Request</h2>
        <p>You requested a password reset for your Tessera account.</p>
        <p>Enter this code to choose a new password. It is valid for {expires_in_minutes} minutes.</p>
        <p class="code" style="margin: 30px 0;">{code}</p>
        <div class="footer">
            <p>If you didn't request this, you can safely ignore this email.</p>
            <p>-- Tessera</p>
        </div>
    </div>
</body>
</html>
"""
