import io

from pdf.utils.layout_utils import build_quote_pdf


def create_quote_pdf(quote, items, totals):
    """Generate PDF bytes for a quote."""
    pdf = build_quote_pdf(quote, items, totals)
    return io.BytesIO(bytes(pdf.output()))
