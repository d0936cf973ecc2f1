import logging
from html import escape

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from config import SENDGRID_API_KEY, FROM_EMAIL

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, content: str) -> bool:
    if not SENDGRID_API_KEY or not FROM_EMAIL:
        logger.info("SendGrid not configured, skipping email to %s", to_email)
        return False
    try:
        message = Mail(
            from_email=FROM_EMAIL,
            to_emails=to_email,
            subject=subject,
            html_content=content,
        )
        sg = SendGridAPIClient(SENDGRID_API_KEY)
        sg.send(message)
        return True
    except Exception:
        logger.exception("Error sending email to %s", to_email)
        return False


def send_application_ack(record) -> bool:
    if record.application_type == "Job":
        applied_for = f'the position "<strong>{escape(record.job_title)}</strong>"'
        subject = f"Thank you for applying - {record.job_title}"
    else:
        applied_for = "an internship"
        subject = "Thank you for your internship application"

    content = f"""
    <p>Hi {escape(record.name)},</p>
    <p>Thank you for applying for {applied_for}. We have received your application and will review it shortly.</p>
    <br>
    <p>Best regards,</p>
    <p><strong>The Recruitment Team</strong></p>
    """
    return send_email(record.email, subject, content)
