"""Jinja2 templates for the coach invitation email.

Variables: athlete_name, folder_name, coach_email, permissions (list of
labels, possibly empty), deep_link, web_link.
"""

SUBJECT_TEMPLATE = "{{ athlete_name }} invited you to collaborate on PlayerPath"

TEXT_TEMPLATE = """\
Hi there,

{{ athlete_name }} has invited you to collaborate on PlayerPath!

You've been invited to access the shared folder: "{{ folder_name }}"

{% if permissions %}
As a coach, you'll be able to:
{% for permission in permissions %}
✓ {{ permission }}
{% endfor %}

{% endif %}
To accept this invitation:

1. Download the PlayerPath app from the App Store if you haven't already
2. Sign up or sign in with this email: {{ coach_email }}
3. Your pending invitation will appear automatically

Or tap this link to open the invitation directly:
{{ deep_link }}

Web link: {{ web_link }}

This invitation was sent to {{ coach_email }}. If you didn't expect this invitation, you can safely ignore this email.

Thanks,
The PlayerPath Team

---
PlayerPath - Simplifying baseball video analysis for athletes and coaches
"""

HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>PlayerPath Coach Invitation</title>
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; line-height: 1.6; color: #333; background-color: #f5f5f5; margin: 0; padding: 0; }
    .container { max-width: 600px; margin: 40px auto; background: white; border-radius: 12px; overflow: hidden; box-shadow: 0 2px 8px rgba(0,0,0,0.1); }
    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 40px 30px; text-align: center; }
    .header h1 { margin: 0; font-size: 28px; font-weight: 600; }
    .header p { margin: 10px 0 0 0; font-size: 16px; opacity: 0.9; }
    .content { padding: 40px 30px; }
    .folder-name { background: #f0f4ff; border-left: 4px solid #667eea; padding: 16px 20px; margin: 20px 0; border-radius: 4px; }
    .folder-name strong { color: #667eea; font-size: 18px; }
    .permissions { margin: 24px 0; }
    .permissions h3, .instructions h3 { margin: 0 0 12px 0; font-size: 16px; color: #555; }
    .permission-list { list-style: none; padding: 0; margin: 0; }
    .permission-list li { padding: 8px 0; }
    .check { color: #10b981; font-weight: bold; margin-right: 8px; }
    .cta-button { display: inline-block; background: #667eea; color: white; text-decoration: none; padding: 16px 40px; border-radius: 8px; font-weight: 600; font-size: 16px; margin: 24px 0; }
    .instructions { background: #f9fafb; border-radius: 8px; padding: 20px; margin: 24px 0; }
    .instructions ol { margin: 0; padding-left: 20px; }
    .instructions li { margin: 8px 0; color: #666; }
    .footer { padding: 30px; text-align: center; color: #999; font-size: 14px; background: #f9fafb; }
    .footer a { color: #667eea; text-decoration: none; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>&#9918; You're Invited to PlayerPath</h1>
      <p>Coach collaboration invitation</p>
    </div>

    <div class="content">
      <p style="font-size: 16px; margin-bottom: 8px;">Hi there,</p>

      <p style="font-size: 16px; line-height: 1.8;">
        <strong>{{ athlete_name }}</strong> has invited you to collaborate on PlayerPath!
      </p>

      <div class="folder-name">
        <strong>&quot;{{ folder_name }}&quot;</strong>
      </div>

      {% if permissions %}
      <div class="permissions">
        <h3>As a coach, you'll be able to:</h3>
        <ul class="permission-list">
          {% for permission in permissions %}
          <li><span class="check">&#10003;</span>{{ permission }}</li>
          {% endfor %}
        </ul>
      </div>
      {% endif %}

      <div style="text-align: center; margin: 32px 0;">
        <a href="{{ deep_link }}" class="cta-button">Accept Invitation</a>
      </div>

      <div class="instructions">
        <h3>How to get started:</h3>
        <ol>
          <li>Download the PlayerPath app from the App Store (if you haven't already)</li>
          <li>Sign up or sign in using: <strong>{{ coach_email }}</strong></li>
          <li>Your invitation will appear automatically in the app</li>
        </ol>
      </div>

      <p style="font-size: 14px; color: #666; margin-top: 32px;">
        If the button above doesn't work, copy and paste this link into your browser:<br>
        <a href="{{ web_link }}" style="color: #667eea; word-break: break-all;">{{ web_link }}</a>
      </p>

      <p style="font-size: 13px; color: #999; margin-top: 24px; padding-top: 24px; border-top: 1px solid #eee;">
        This invitation was sent to {{ coach_email }}. If you didn't expect this invitation, you can safely ignore this email.
      </p>
    </div>

    <div class="footer">
      <p><strong>PlayerPath</strong></p>
      <p>Simplifying baseball video analysis for athletes and coaches</p>
      <p style="margin-top: 16px;">
        <a href="https://playerpath.app">Website</a> &bull;
        <a href="https://playerpath.app/support">Support</a> &bull;
        <a href="https://playerpath.app/privacy">Privacy</a>
      </p>
    </div>
  </div>
</body>
</html>
"""
