import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from flask import current_app

def send_email(to: str, subject: str, html: str):
    if not current_app.config.get("MAIL_ENABLED", True):
        current_app.logger.info(f"Mail disabled, skipping '{subject}' to {to}")
        return

    msg = EmailMessage()
    msg["From"] = f"{current_app.config['EMAIL_FROM_NAME']} <{current_app.config['EMAIL_FROM_ADDRESS']}>"
    msg["To"] = to
    msg["Subject"] = subject
    msg["Reply-To"] = current_app.config["EMAIL_FROM_ADDRESS"]
    msg["Message-ID"] = make_msgid(domain=current_app.config["EMAIL_FROM_ADDRESS"].split("@")[-1])

    msg.set_content("Dette er en automatisk melding. Vennligst se HTML-versjonen.")
    msg.add_alternative(html, subtype="html")

    current_app.logger.debug(
        f"Connecting to SMTP {current_app.config['SMTP_HOST']}:{current_app.config['SMTP_PORT']}"
    )

    try:
        with smtplib.SMTP_SSL(
            current_app.config["SMTP_HOST"],
            current_app.config["SMTP_PORT"]
        ) as server:
            server.login(
                current_app.config["EMAIL_FROM_ADDRESS"],
                current_app.config["SMTP_PASSWORD"]
            )
            server.send_message(msg)
            current_app.logger.info(f"Email sent successfully to {to}")
    except Exception as e:
        current_app.logger.error(f"Failed to send email to {to}: {e}")
        raise
