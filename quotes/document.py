from datetime import datetime, timedelta
from html import escape
from typing import List, Optional, Tuple

from .models import QuoteItem, QuoteTotals

COMPANY_NAME = "DripTech"
COMPANY_TAGLINE = "Irrigation Solutions"
COMPANY_ADDRESS = "Nairobi Industrial Area, Kenya"
COMPANY_PHONE = "+254 700 123 456"
COMPANY_EMAIL = "info@driptech.co.ke"
COMPANY_WEBSITE = "www.driptech.co.ke"

QUOTE_VALIDITY_DAYS = 30

TERMS_AND_CONDITIONS = [
    f"This quotation is valid for {QUOTE_VALIDITY_DAYS} days from the date of issue.",
    "Prices are in Kenyan Shillings (KSh) and include delivery within Nairobi.",
    "Installation services include system setup, testing, and basic training.",
    "All products come with manufacturer's warranty as specified.",
    "Payment terms: 50% deposit, 50% on completion.",
    "Project timeline will be confirmed upon order confirmation.",
]

STYLES = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 800px; margin: 0 auto; padding: 20px; }
    .letterhead { display: flex; justify-content: space-between; border-bottom: 2px solid #2563eb; padding-bottom: 16px; }
    .letterhead h1 { color: #2563eb; margin: 0; }
    .section { margin: 24px 0; }
    table { width: 100%; border-collapse: collapse; }
    th, td { padding: 10px; border-bottom: 1px solid #e2e8f0; text-align: left; }
    td.num, th.num { text-align: right; }
    .totals { width: 320px; margin-left: auto; }
    .totals .grand { font-size: 18px; font-weight: bold; }
    .terms { font-size: 13px; color: #64748b; }
    .footer { text-align: center; color: #64748b; border-top: 1px solid #e2e8f0; padding-top: 16px; }
"""


def format_money(amount: float, currency: str = "KSH") -> str:
    symbol = "KSh" if currency.upper() == "KSH" else currency
    return f"{symbol} {amount:,.2f}"


def format_date(value: Optional[datetime]) -> str:
    if not value:
        return ""
    return value.strftime("%d/%m/%Y")


def _text(value) -> str:
    return escape(str(value)) if value is not None else ""


def project_detail_rows(quote) -> List[Tuple[str, object]]:
    return [
        ("Type", quote.project_type),
        ("Area Size", quote.area_size),
        ("Crop Type", quote.crop_type),
        ("Location", quote.location),
        ("Water Source", quote.water_source),
        ("Distance to Farm", quote.distance_to_farm),
        ("Number of Beds", quote.number_of_beds),
        ("Soil Type", quote.soil_type),
        ("Budget Range", quote.budget_range),
        ("Timeline", quote.timeline),
    ]


def _detail_row(label: str, value) -> str:
    if value in (None, ""):
        return ""
    return f"<p><strong>{label}:</strong> {_text(value)}</p>"


def _items_rows(quote, items: List[QuoteItem]) -> str:
    currency = quote.currency or "KSH"
    if not items:
        return (
            "<tr>"
            f"<td><strong>{_text(quote.project_type)} Irrigation System</strong><br>"
            f"<small>Complete irrigation system design and installation for {_text(quote.area_size)}</small></td>"
            "<td class=\"num\">1</td><td class=\"num\">TBD</td><td class=\"num\">TBD</td>"
            "</tr>"
        )

    rows = []
    for item in items:
        rows.append(
            "<tr>"
            f"<td><strong>{_text(item.name)}</strong><br><small>{_text(item.description)}</small></td>"
            f"<td class=\"num\">{item.quantity:g} {_text(item.unit)}</td>"
            f"<td class=\"num\">{format_money(item.unit_price, currency)}</td>"
            f"<td class=\"num\">{format_money(item.total, currency)}</td>"
            "</tr>"
        )
    return "\n".join(rows)


def render_quote_document(quote, items: List[QuoteItem], totals: QuoteTotals) -> str:
    """
    Render the quotation as a standalone HTML page. Used for on-screen display,
    printing and as the email body. All customer-supplied text is escaped.
    """
    currency = quote.currency or "KSH"
    issued = quote.created_at or datetime.utcnow()
    valid_until = issued + timedelta(days=QUOTE_VALIDITY_DAYS)

    project_details = "".join(_detail_row(label, value) for label, value in project_detail_rows(quote))

    requirements = ""
    if quote.requirements:
        requirements = (
            "<div class=\"section\"><h3>Project Requirements</h3>"
            f"<p>{_text(quote.requirements)}</p></div>"
        )

    terms = "".join(f"<li>{escape(term)}</li>" for term in TERMS_AND_CONDITIONS)

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Quotation {_text(quote.id)} - {COMPANY_NAME}</title>
  <style>{STYLES}</style>
</head>
<body>
<div class="container">
  <div class="letterhead">
    <div>
      <h1>{COMPANY_NAME}</h1>
      <p>{COMPANY_TAGLINE}</p>
      <p>{COMPANY_ADDRESS}<br>Phone: {COMPANY_PHONE}<br>Email: {COMPANY_EMAIL}<br>Website: {COMPANY_WEBSITE}</p>
    </div>
    <div>
      <h2>QUOTATION</h2>
      <p><strong>Quote #:</strong> {_text(quote.id)}</p>
      <p><strong>Date:</strong> {format_date(issued)}</p>
      <p><strong>Valid Until:</strong> {format_date(valid_until)}</p>
    </div>
  </div>

  <div class="section">
    <h3>Bill To</h3>
    <p><strong>{_text(quote.customer_name)}</strong></p>
    <p>{_text(quote.customer_email)}</p>
    <p>{_text(quote.customer_phone)}</p>
    {_detail_row("Address", quote.customer_address)}
  </div>

  <div class="section">
    <h3>Project Details</h3>
    {project_details}
  </div>

  {requirements}

  <div class="section">
    <h3>Quote Items</h3>
    <table>
      <thead>
        <tr><th>Description</th><th class="num">Quantity</th><th class="num">Unit Price</th><th class="num">Total</th></tr>
      </thead>
      <tbody>
{_items_rows(quote, items)}
      </tbody>
    </table>
  </div>

  <div class="section totals">
    <table>
      <tr><td>Subtotal:</td><td class="num">{format_money(totals.subtotal, currency)}</td></tr>
      <tr><td>VAT (16%):</td><td class="num">{format_money(totals.vat, currency)}</td></tr>
      <tr class="grand"><td>Total:</td><td class="num">{format_money(totals.final_total, currency)}</td></tr>
    </table>
  </div>

  <div class="section terms">
    <h3>Terms and Conditions</h3>
    <ul>{terms}</ul>
  </div>

  <div class="footer">
    <p>Thank you for considering {COMPANY_NAME} for your irrigation needs.</p>
    <p>For any questions regarding this quotation, please contact us at {COMPANY_PHONE}</p>
  </div>
</div>
</body>
</html>
"""
