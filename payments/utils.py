from io import BytesIO
from xml.sax.saxutils import escape

from django.conf import settings
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

CURRENCY = "Rs."


def generate_receipt_pdf(booking):
    """
    Render a payment receipt for a paid booking.

    Returns ``(filename, pdf_bytes)``.
    """
    receipt_no = f"RCPT-{booking.booking_id}"
    details = booking.user_details or {}
    address = details.get("address") or {}

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=24,
        leftMargin=24,
        topMargin=24,
        bottomMargin=24,
        title=receipt_no,
    )

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="Right", alignment=TA_RIGHT))
    styles.add(ParagraphStyle(name="CenterBlock", alignment=1, fontSize=11, leading=16, spaceAfter=12))

    elements = []

    # -------------------------
    # HEADER
    # -------------------------
    header_table = Table(
        [[
            Paragraph(f'<font size="16"><b>{settings.BUSINESS_NAME}</b></font>', styles["Normal"]),
            Paragraph(f"Email: {settings.DEFAULT_FROM_EMAIL}", styles["Right"]),
        ]],
        colWidths=[280, 250],
    )
    header_table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
    ]))
    elements.append(header_table)
    elements.append(Spacer(1, 12))

    paid_on = timezone.localtime(booking.payment_date) if booking.payment_date else timezone.localtime()
    elements.append(Paragraph(
        f"""
        <b>PAYMENT RECEIPT</b><br/>
        Receipt No: {receipt_no}<br/>
        Date: {paid_on.strftime('%d-%m-%Y')}
        """,
        styles["CenterBlock"],
    ))
    elements.append(Spacer(1, 12))

    # -------------------------
    # BILL TO
    # -------------------------
    bill_left = f"""
    <b>Received From</b><br/>
    {escape(details.get('fullName') or '')}<br/>
    {escape(details.get('phone') or '')} {escape(details.get('email') or '')}
    """
    bill_right = ""
    if any(address.values()):
        bill_right = f"""
    <b>Address</b><br/>
    {escape(address.get('street') or '')}<br/>
    {escape(address.get('city') or '')} {escape(address.get('state') or '')} - {escape(address.get('pincode') or '')}
    """

    bill_table = Table(
        [[Paragraph(bill_left, styles["Normal"]), Paragraph(bill_right, styles["Right"])]],
        colWidths=[280, 250],
    )
    bill_table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    elements.append(bill_table)
    elements.append(Spacer(1, 14))

    # -------------------------
    # SERVICE TABLE
    # -------------------------
    items_table = Table(
        [
            ["#", "Booking", "Service", "Amount"],
            [1, booking.booking_id, Paragraph(escape(booking.service_name), styles["Normal"]), f"{CURRENCY} {booking.service_fee:.2f}"],
        ],
        colWidths=[30, 120, 250, 90],
        repeatRows=1,
    )
    items_table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONT", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (3, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 14))

    # -------------------------
    # TOTALS
    # -------------------------
    totals_table = Table(
        [
            ["Payment Method", booking.get_payment_method_display()],
            ["Transaction ID", booking.transaction_id or "-"],
            ["TOTAL PAID", f"{CURRENCY} {booking.service_fee:.2f}"],
        ],
        colWidths=[380, 110],
    )
    totals_table.setStyle(TableStyle([
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("FONT", (0, 2), (-1, 2), "Helvetica-Bold"),
        ("LINEABOVE", (0, 2), (-1, 2), 0.75, colors.black),
        ("TOPPADDING", (0, 2), (-1, 2), 6),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
    ]))
    elements.append(totals_table)
    elements.append(Spacer(1, 20))

    elements.append(Paragraph("This is a computer generated receipt.", styles["Normal"]))

    doc.build(elements)
    return f"{receipt_no}.pdf", buffer.getvalue()
