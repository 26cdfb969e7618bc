import resend
import os
from urllib.parse import quote
from dotenv import load_dotenv

load_dotenv()

RESEND_API_KEY = os.getenv("RESEND_API_KEY")
MAIL_FROM = os.getenv("MAIL_FROM", "Pixel Studio <noreply@pixelstudio.it>")
STUDIO_EMAIL = os.getenv("STUDIO_EMAIL", "info@cophouse.com")


class ResendMailer:
    def __init__(self, api_key: str, sender: str, studio_email: str):
        self.api_key = api_key
        self.sender = sender
        self.studio_email = studio_email

    def send(self, to: str, subject: str, html: str, cc: str = None):
        resend.api_key = self.api_key
        params = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if cc:
            params["cc"] = [cc]
        return resend.Emails.send(params)


def create_mailer():
    if not RESEND_API_KEY:
        raise RuntimeError("RESEND_API_KEY is not configured")
    return ResendMailer(RESEND_API_KEY, MAIL_FROM, STUDIO_EMAIL)


def send_booking_confirmation_email(mailer: ResendMailer, booking_data: dict):
    try:
        start_time = booking_data["start_time"]
        end_time = booking_data["end_time"]
        booking_date = start_time.strftime("%d/%m/%Y")
        booking_time = start_time.strftime("%H:%M")
        shooting_type = booking_data.get("shooting_type") or "Non specificato"

        start_str = start_time.strftime("%Y%m%dT%H%M%S")
        end_str = end_time.strftime("%Y%m%dT%H%M%S")
        event_title = "Shooting - Pixel Studio"
        event_details = f"Tipo: {shooting_type}\nDurata: {booking_data['duration']}h"
        calendar_url = f"https://calendar.google.com/calendar/render?action=TEMPLATE&text={quote(event_title)}&dates={start_str}/{end_str}&ctz=Europe/Rome&details={quote(event_details)}"
        html_content = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px">
  <h2 style="color: #222">Prenotazione Confermata</h2>
  <p>Ciao {booking_data["customer_name"]},</p>
  <p>La tua prenotazione presso Pixel Studio è stata confermata:</p>
  <ul>
    <li><strong>Data:</strong> {booking_date}</li>
    <li><strong>Ora:</strong> {booking_time}</li>
    <li><strong>Durata:</strong> {booking_data["duration"]}h</li>
    <li><strong>Tipo:</strong> {shooting_type}</li>
  </ul>
  <p>
    <a href="{calendar_url}"
       style="display: inline-block; background: #222; color: #fff;
              padding: 8px 12px; text-decoration: none; border-radius: 6px">
      📅 Aggiungi a Google Calendar
    </a>
  </p>
  <p>Ti aspettiamo in studio!</p>
  <p>Pixel Studio<br>{mailer.studio_email}</p>
</div>
        """
        result = mailer.send(
            to=booking_data["customer_email"],
            cc=mailer.studio_email,
            subject="Conferma Prenotazione - Pixel Studio",
            html=html_content,
        )
        if result and "id" in result:
            print(
                f"Confirmation email sent to {booking_data['customer_email']}, email id: {result['id']}"
            )
            return {"success": True, "email_id": result["id"]}
        else:
            print(f"Confirmation email for booking {booking_data['id']} was not accepted")
            return {"success": False, "error": "Invalid response from mail provider"}
    except Exception as e:
        print(f"Unexpected error while sending confirmation email: {e}")
        return {"success": False, "error": f"Unexpected error: {e}"}
