from html import escape

from promptfoundry.core.config import Settings


def license_email_subject(settings: Settings) -> str:
    return f"{settings.brand_name}: Your All-Access license key"


def license_email_html(settings: Settings, token: str) -> str:
    brand = escape(settings.brand_name)
    app_url = escape(settings.app_url, quote=True)
    support = escape(settings.support_email, quote=True)
    return f"""
  <div style="font-family:Inter,system-ui,-apple-system,Segoe UI,Roboto,Arial,sans-serif;line-height:1.6">
    <h2>{brand}: You're In</h2>
    <p>Thanks for subscribing to <strong>All-Access</strong>.</p>
    <p><strong>Your license key:</strong></p>
    <pre style="padding:12px;background:#f6f7f9;border-radius:8px;font-size:16px">{escape(token)}</pre>
    <ol>
      <li>Open the site: <a href="{app_url}">{app_url}</a></li>
      <li>Click <b>Unlock Pro</b>, paste your license, access granted.</li>
    </ol>
    <p>Need help? Reply here or email <a href="mailto:{support}">{support}</a>.</p>
    <hr/>
    <p style="font-size:12px;color:#666">Manage billing anytime via your Stripe receipt.</p>
  </div>"""
