"""
Building blocks of the generated library: industry overlays, goal templates
and hand-written flagship items. Editing these is how the catalog changes.
"""

DEFAULT_BUY_URL = "https://buy.stripe.com/fZudR89pEfa68sDgSs5Ne00"
CTA_LINK = "https://cal.com/you"

# Overlay fields become template variables; `key` labels the variant.
OVERLAYS = [
    {"key": "Home Services", "industry": "Home Services", "role": "Owner", "service": "installation",
     "city": "Naples, FL", "proof_point": "100+ jobs", "time_window": "15-minute",
     "tone": "confident, respectful, direct"},
    {"key": "eCommerce", "industry": "eCommerce", "role": "Owner", "service": "store optimization",
     "city": "Austin, TX", "proof_point": "conversion lift", "time_window": "15-minute",
     "tone": "confident, respectful, direct"},
    {"key": "B2B SaaS", "industry": "B2B SaaS", "role": "Founder", "service": "demo setup",
     "city": "NYC, NY", "proof_point": "ROI metric", "time_window": "20-minute",
     "tone": "pragmatic, concise"},
    {"key": "Agencies", "industry": "Agency", "role": "Principal", "service": "campaign build",
     "city": "Miami, FL", "proof_point": "client wins", "time_window": "20-minute",
     "tone": "credible, direct"},
    {"key": "Local Retail", "industry": "Local Retail", "role": "Owner", "service": "POS + marketing",
     "city": "Tampa, FL", "proof_point": "local refs", "time_window": "15-minute",
     "tone": "friendly, straight"},
]

TEMPLATES = [
    {
        "goal": "leadgen",
        "title": "Local Services — 75-Word Lead Gen",
        "tags": ["Universal", "LeadGen"],
        "channels": ["email", "dm", "sms"],
        "template": (
            "Write a {{channel}} outreach for a {{industry}} {{role}} offering {{service}} in {{city}}. "
            "Tone: {{tone}}. Include one proof ({{proof_point}}) and a single CTA to book a "
            "{{time_window}} using {{cta_link}}. Keep under {{word_limit}} words."
        ),
    },
    {
        "goal": "invoice",
        "title": "Operations — Overdue Invoice Follow-Up",
        "tags": ["Universal", "Finance"],
        "channels": ["email"],
        "template": (
            "Write a {{channel}} follow-up for Invoice {{invoice_number}} ({{amount}}) sent {{sent_date}}. "
            "Tone: {{tone}}. Include payment link {{cta_link}} and two optional call slots. "
            "Cap at {{word_limit}} words."
        ),
    },
    {
        "goal": "chargebacks",
        "title": "Merchant — Network-Safe Chargeback Letter",
        "tags": ["Universal", "Disputes"],
        "channels": ["email"],
        "template": (
            "Draft a representment for {{network}} {{reason_code}}. Include {{order_id}}, {{amount}}, "
            "{{order_date}} and evidence (IP/device, AVS/CVV, 3-D Secure, delivery, comms). "
            "Map evidence → criteria. Ask for reversal."
        ),
    },
    {
        "goal": "pricing",
        "title": "Pricing — Margin Impact Playbook",
        "tags": ["Universal", "Pricing"],
        "channels": ["landing"],
        "template": (
            "Given competitor prices and cost basis {{cost_basis}}, output top 10 price moves with "
            "estimated margin delta and risks. Prioritize."
        ),
    },
    {
        "goal": "landing",
        "title": "Landing — Value Prop & Hero",
        "tags": ["Universal", "Copy"],
        "channels": ["landing"],
        "template": (
            "For {{industry}} {{service}}, write a hero headline (≤10), subhead (≤18), three benefits, "
            "and a primary CTA label. Output compact JSON."
        ),
    },
]

# Flagship items, shipped as written.
STARTER = [
    {
        "category": "Chargebacks",
        "title": "Chargeback Win Kit — Visa 10.4 (Fraud)",
        "tags": ["Disputes", "Operations"],
        "price": 99,
        "prompt": (
            "Draft a Visa 10.4 representment for {{order_id}} {{amount}} {{order_date}}. Map evidence to "
            "10.4 criteria. Include: 3-D Secure data, AVS/CVV, IP/device, delivery proof, prior comms. "
            "Close with issuer guidance."
        ),
    },
    {
        "category": "Chargebacks",
        "title": "Chargeback Win Kit — Mastercard 4853",
        "tags": ["Disputes", "Operations"],
        "price": 99,
        "prompt": (
            "Draft a Mastercard 4853 representment for {{order_id}} {{amount}} {{order_date}}. Map evidence "
            "to 4853 documentation. Include identity/auth, usage logs, delivery, support thread, refund "
            "policy, terms consent."
        ),
    },
    {
        "category": "ClientReach",
        "title": "ClientReach — Overdue Invoice Nudge",
        "tags": ["ClientReach", "Cold Email"],
        "price": 49,
        "prompt": (
            "Follow-up for Invoice {{invoice_number}} ({{amount}}) sent {{sent_date}}. Include {{pay_url}} "
            "and two call slots. Tone: confident, respectful, direct. Keep to {{word_limit}} words."
        ),
    },
    {
        "category": "Ops",
        "title": "Ops — SOP Writer",
        "tags": ["Operations"],
        "price": 59,
        "prompt": (
            "Turn a process description into an SOP with Roles, Tools, Steps, QA checks, and Risks. "
            "Output Markdown. Ask for missing inputs before drafting."
        ),
    },
]

# Left as placeholders in generated bodies for manual fill.
MANUAL_FIELDS = (
    "sent_date",
    "amount",
    "invoice_number",
    "cost_basis",
    "network",
    "reason_code",
    "order_id",
    "order_date",
)
