from datetime import timedelta

from fpdf import FPDF

from pdf.utils.text_utils import sanitize_text, truncate
from quotes.document import (
    COMPANY_ADDRESS,
    COMPANY_EMAIL,
    COMPANY_NAME,
    COMPANY_PHONE,
    COMPANY_TAGLINE,
    COMPANY_WEBSITE,
    QUOTE_VALIDITY_DAYS,
    TERMS_AND_CONDITIONS,
    format_date,
    format_money,
    project_detail_rows,
)

BLUE = (37, 99, 235)


def _money(amount, currency):
    return sanitize_text(format_money(amount, currency))


def _label_value(pdf, x, label, value, label_w=30):
    pdf.set_x(x)
    pdf.set_font('Helvetica', 'B', 8)
    pdf.set_text_color(80, 80, 80)
    pdf.cell(label_w, 5, label, 0, 0)
    pdf.set_font('Helvetica', '', 8)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 5, truncate(value, 45), 0, 1)


def build_quote_pdf(quote, items, totals):
    """Lay out a quotation on a single A4 flow, mirroring the HTML document."""
    pdf = FPDF()
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    currency = quote.currency or "KSH"

    # ==================== HEADER: LETTERHEAD ====================
    pdf.set_font('Helvetica', 'B', 18)
    pdf.set_text_color(*BLUE)
    pdf.cell(100, 9, COMPANY_NAME, 0, 0, 'L')

    pdf.set_font('Helvetica', 'B', 16)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 9, 'QUOTATION', 0, 1, 'R')

    pdf.set_font('Helvetica', '', 7)
    pdf.set_text_color(120, 120, 120)
    pdf.cell(0, 4, COMPANY_TAGLINE, 0, 1, 'L')
    pdf.cell(0, 3, COMPANY_ADDRESS, 0, 1, 'L')
    pdf.cell(0, 3, f'Tel: {COMPANY_PHONE} | {COMPANY_EMAIL} | {COMPANY_WEBSITE}', 0, 1, 'L')
    pdf.ln(3)
    pdf.set_draw_color(*BLUE)
    pdf.line(10, pdf.get_y(), 200, pdf.get_y())
    pdf.ln(5)

    # ==================== DOCUMENT INFO & CUSTOMER (TWO COLUMNS) ====================
    left_x = 10
    right_x = 110
    start_y = pdf.get_y()

    issued = quote.created_at
    pdf.set_xy(left_x, start_y)
    _label_value(pdf, left_x, 'Quote #:', quote.id)
    _label_value(pdf, left_x, 'Date:', format_date(issued))
    if issued:
        _label_value(pdf, left_x, 'Valid Until:', format_date(issued + timedelta(days=QUOTE_VALIDITY_DAYS)))
    left_end = pdf.get_y()

    pdf.set_xy(right_x, start_y)
    _label_value(pdf, right_x, 'Bill To:', quote.customer_name, label_w=20)
    _label_value(pdf, right_x, 'Email:', quote.customer_email, label_w=20)
    _label_value(pdf, right_x, 'Phone:', quote.customer_phone, label_w=20)
    if quote.customer_address:
        _label_value(pdf, right_x, 'Address:', quote.customer_address, label_w=20)

    pdf.set_y(max(left_end, pdf.get_y()) + 4)

    # ==================== PROJECT DETAILS ====================
    pdf.set_font('Helvetica', 'B', 10)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 6, 'Project Details', 0, 1, 'L')

    for label, value in project_detail_rows(quote):
        if value not in (None, ""):
            _label_value(pdf, left_x, f"{label}:", value)

    if quote.requirements:
        pdf.ln(2)
        pdf.set_font('Helvetica', 'B', 8)
        pdf.cell(0, 5, 'Requirements:', 0, 1, 'L')
        pdf.set_font('Helvetica', '', 8)
        pdf.multi_cell(0, 4, sanitize_text(quote.requirements.strip()), border=0, align='L')

    pdf.ln(4)

    # ==================== ITEMS TABLE ====================
    pdf.set_font('Helvetica', 'B', 10)
    pdf.cell(0, 6, 'Quote Items', 0, 1, 'L')

    pdf.set_fill_color(245, 245, 245)
    pdf.set_draw_color(220, 220, 220)
    pdf.set_font('Helvetica', 'B', 7)
    pdf.set_text_color(60, 60, 60)
    pdf.cell(85, 6, 'DESCRIPTION', 1, 0, 'L', True)
    pdf.cell(30, 6, 'QUANTITY', 1, 0, 'C', True)
    pdf.cell(35, 6, 'UNIT PRICE', 1, 0, 'R', True)
    pdf.cell(40, 6, 'TOTAL', 1, 1, 'R', True)

    pdf.set_font('Helvetica', '', 7)
    pdf.set_text_color(30, 30, 30)

    if not items:
        pdf.cell(85, 5, truncate(f'{quote.project_type} Irrigation System', 55), 1, 0, 'L')
        pdf.cell(30, 5, '1', 1, 0, 'C')
        pdf.cell(35, 5, 'TBD', 1, 0, 'R')
        pdf.cell(40, 5, 'TBD', 1, 1, 'R')

    row_color = True
    for item in items:
        pdf.set_fill_color(*((252, 252, 252) if row_color else (255, 255, 255)))
        pdf.cell(85, 5, truncate(item.name or 'Item', 55), 1, 0, 'L', True)
        pdf.cell(30, 5, truncate(f'{item.quantity:g} {item.unit}', 20), 1, 0, 'C', True)
        pdf.cell(35, 5, _money(item.unit_price, currency), 1, 0, 'R', True)
        pdf.cell(40, 5, _money(item.total, currency), 1, 1, 'R', True)
        if item.description:
            pdf.set_font('Helvetica', 'I', 6)
            pdf.set_text_color(110, 110, 110)
            pdf.cell(190, 4, truncate(item.description, 120), 'LRB', 1, 'L', True)
            pdf.set_font('Helvetica', '', 7)
            pdf.set_text_color(30, 30, 30)
        row_color = not row_color

    pdf.ln(6)

    # ==================== TOTALS ====================
    summary_x = 120
    pdf.set_font('Helvetica', '', 8)
    pdf.set_text_color(60, 60, 60)

    pdf.set_x(summary_x)
    pdf.cell(45, 5, 'Subtotal:', 0, 0, 'L')
    pdf.cell(35, 5, _money(totals.subtotal, currency), 0, 1, 'R')

    pdf.set_x(summary_x)
    pdf.cell(45, 5, 'VAT (16%):', 0, 0, 'L')
    pdf.cell(35, 5, _money(totals.vat, currency), 0, 1, 'R')

    pdf.set_draw_color(200, 200, 200)
    pdf.line(summary_x, pdf.get_y() + 1, 200, pdf.get_y() + 1)
    pdf.ln(3)

    pdf.set_x(summary_x)
    pdf.set_font('Helvetica', 'B', 11)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(45, 7, 'TOTAL:', 0, 0, 'L')
    pdf.cell(35, 7, _money(totals.final_total, currency), 0, 1, 'R')

    pdf.ln(8)

    # ==================== TERMS ====================
    pdf.set_font('Helvetica', 'B', 9)
    pdf.cell(0, 5, 'Terms and Conditions', 0, 1, 'L')
    pdf.set_font('Helvetica', '', 7)
    pdf.set_text_color(100, 100, 100)
    for term in TERMS_AND_CONDITIONS:
        pdf.cell(0, 4, sanitize_text(f'- {term}'), 0, 1, 'L')

    # ==================== FOOTER ====================
    pdf.ln(8)
    pdf.set_font('Helvetica', 'I', 7)
    pdf.set_text_color(150, 150, 150)
    pdf.cell(0, 4, f'Thank you for considering {COMPANY_NAME} for your irrigation needs.', 0, 1, 'C')
    pdf.cell(0, 4, f'Questions about this quotation? Call {COMPANY_PHONE}', 0, 1, 'C')

    return pdf
