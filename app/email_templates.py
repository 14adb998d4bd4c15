"""
MJML Email Templates
All transactional emails are MJML for responsive, cross-client rendering
"""

from decimal import Decimal
from html import escape
from typing import Optional

# App theme colors
THEME = {
    "primary": "#f97316",
    "primary_dark": "#ea580c",
    "primary_light": "#ffedd5",
    "background": "#f8fafc",
    "card_bg": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "success": "#16a34a",
    "warning": "#f59e0b",
    "danger": "#ef4444",
}

APP_NAME = "Petshop ERP"


def format_currency(amount) -> str:
    """R$ 1.234,56"""
    value = Decimal(amount or 0).quantize(Decimal("0.01"))
    formatted = f"{value:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"R$ {formatted}"


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 40px 0 40px">
          <mj-column>
            <mj-text font-size="20px" font-weight="700" color="{THEME['primary_dark']}" padding="0 0 24px 0">
              {APP_NAME}
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 32px 0" />
          </mj-column>
        </mj-section>

        <!-- Main Content -->
        <mj-section background-color="#ffffff" padding="0 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <!-- Footer -->
        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              This is an automated message from {APP_NAME}. Please do not reply.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def appointment_details_block(
    pet_name: str, service_name: str, date_label: str, start: str, end: str, staff_name: Optional[str]
) -> str:
    staff_line = f"<br/>Professional: {escape(staff_name)}" if staff_name else ""
    return f"""
    <mj-text padding="16px 0" container-background-color="{THEME['primary_light']}">
      Pet: <strong>{escape(pet_name)}</strong><br/>
      Service: <strong>{escape(service_name)}</strong><br/>
      Date: {date_label}<br/>
      Time: {start} - {end}{staff_line}
    </mj-text>
    """


def appointment_confirmation_template(
    client_name: str,
    pet_name: str,
    service_name: str,
    date_label: str,
    start: str,
    end: str,
    staff_name: Optional[str] = None,
) -> str:
    """Sent when an appointment is booked"""
    content = f"""
    <mj-text>
      Hi {escape(client_name)},
    </mj-text>

    <mj-text>
      Your appointment has been scheduled. Here are the details:
    </mj-text>

    {appointment_details_block(pet_name, service_name, date_label, start, end, staff_name)}

    <mj-text color="{THEME['text_muted']}" font-size="14px">
      Need to reschedule? Contact us as soon as possible.
    </mj-text>
    """

    return get_base_template(
        title="Appointment Scheduled",
        preview_text=f"{pet_name} is booked for {date_label} at {start}",
        content_sections=content,
    )


def appointment_completed_template(
    client_name: str, pet_name: str, service_name: str, date_label: str, start: str, end: str
) -> str:
    content = f"""
    <mj-text>
      Hi {escape(client_name)},
    </mj-text>

    <mj-text>
      The <strong>{escape(service_name)}</strong> for <strong>{escape(pet_name)}</strong>
      on {date_label} ({start} - {end}) is complete. Thank you for trusting us!
    </mj-text>
    """

    return get_base_template(
        title="Service Completed",
        preview_text=f"{pet_name}'s {service_name} is complete",
        content_sections=content,
    )


def appointment_cancelled_template(
    client_name: str, pet_name: str, service_name: str, date_label: str, start: str, end: str
) -> str:
    content = f"""
    <mj-text>
      Hi {escape(client_name)},
    </mj-text>

    <mj-text>
      The appointment below has been <strong style="color: {THEME['danger']};">cancelled</strong>:
    </mj-text>

    {appointment_details_block(pet_name, service_name, date_label, start, end, None)}

    <mj-text color="{THEME['text_muted']}" font-size="14px">
      If this was a mistake, get in touch to book a new time.
    </mj-text>
    """

    return get_base_template(
        title="Appointment Cancelled",
        preview_text=f"Appointment for {pet_name} on {date_label} was cancelled",
        content_sections=content,
    )


def sale_items_table(items: list[dict]) -> str:
    """items: [{"name", "quantity", "unit_price", "total"}]"""
    rows = "".join(
        f"""
        <tr style="border-bottom: 1px solid {THEME['border']};">
          <td style="padding: 8px 0;">{escape(item['name'])}</td>
          <td style="padding: 8px 0; text-align: center;">{item['quantity']}</td>
          <td style="padding: 8px 0; text-align: right;">{format_currency(item['unit_price'])}</td>
          <td style="padding: 8px 0; text-align: right;">{format_currency(item['total'])}</td>
        </tr>
        """
        for item in items
    )
    return f"""
    <mj-table font-size="14px" color="{THEME['text_secondary']}" padding="16px 0">
      <tr style="border-bottom: 2px solid {THEME['border']}; text-align: left;">
        <th style="padding: 8px 0;">Product</th>
        <th style="padding: 8px 0; text-align: center;">Qty</th>
        <th style="padding: 8px 0; text-align: right;">Unit price</th>
        <th style="padding: 8px 0; text-align: right;">Total</th>
      </tr>
      {rows}
    </mj-table>
    """


def sale_confirmation_template(
    client_name: str,
    sale_id: int,
    items: list[dict],
    discount,
    total,
    payment_method: str,
) -> str:
    """Purchase receipt with an items table"""
    discount_line = ""
    if Decimal(discount or 0) > 0:
        discount_line = f"Discount: {format_currency(discount)}<br/>"

    content = f"""
    <mj-text>
      Hi {escape(client_name)},
    </mj-text>

    <mj-text>
      Thank you for your purchase! Here is your receipt for order #{sale_id}.
    </mj-text>

    {sale_items_table(items)}

    <mj-text align="right">
      {discount_line}
      <strong style="font-size: 18px; color: {THEME['text_primary']};">Total: {format_currency(total)}</strong><br/>
      <span style="color: {THEME['text_muted']}; font-size: 14px;">Paid with: {payment_method.replace('_', ' ')}</span>
    </mj-text>
    """

    return get_base_template(
        title="Purchase Confirmed",
        preview_text=f"Order #{sale_id} - {format_currency(total)}",
        content_sections=content,
    )


def sale_cancelled_template(client_name: str, sale_id: int, total) -> str:
    content = f"""
    <mj-text>
      Hi {escape(client_name)},
    </mj-text>

    <mj-text>
      Your order <strong>#{sale_id}</strong> totalling {format_currency(total)} has been
      <strong style="color: {THEME['danger']};">cancelled</strong>.
    </mj-text>

    <mj-text color="{THEME['text_muted']}" font-size="14px">
      If you were charged, the refund will follow the original payment method.
    </mj-text>
    """

    return get_base_template(
        title="Order Cancelled",
        preview_text=f"Order #{sale_id} was cancelled",
        content_sections=content,
    )


def password_reset_template(user_name: str, reset_link: str, expires_minutes: int) -> str:
    """Password reset MJML template"""
    content = f"""
    <mj-text>
      Hi {escape(user_name)},
    </mj-text>

    <mj-text>
      We received a request to reset your password. Click the button below to
      create a new one. This link expires in {expires_minutes} minutes.
    </mj-text>

    <mj-text font-size="13px" color="{THEME['text_muted']}">
      If you didn't request this, you can safely ignore this email. Your password won't be changed.
    </mj-text>
    """

    return get_base_template(
        title="Reset Your Password",
        preview_text=f"Reset your {APP_NAME} password",
        content_sections=content,
        cta_url=reset_link,
        cta_label="Reset Password",
    )
