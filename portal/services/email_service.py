import threading
from flask import current_app, render_template
from datetime import datetime
from portal.utils.mailer import send_email

COMPANY_NAME = "Nebadon Encryption"


def _dispatch(description, to, subject, template, **context):
    """Render and send one email without letting a failure reach the caller.

    With NOTIFY_ASYNC the send runs on a daemon thread with its own app context.
    """
    app = current_app._get_current_object()
    context.setdefault("company_name", COMPANY_NAME)
    context.setdefault("year", datetime.utcnow().year)

    def run():
        with app.app_context():
            try:
                html = render_template(template, **context)
                send_email(to=to, subject=subject, html=html)
            except Exception as e:
                app.logger.error(f"Failed to send {description} email to {to}: {e}")

    if not to:
        app.logger.warning(f"No recipient for {description} email, skipping")
        return

    if app.config.get("NOTIFY_ASYNC", True):
        threading.Thread(target=run, daemon=True).start()
    else:
        run()


def send_submission_received_email(submission):
    _dispatch(
        "submission received",
        submission.email,
        "Vi har mottatt prosjektforespørselen din",
        "emails/submission_received.html",
        client_name=submission.client_name,
        project_id=submission.id,
        budget=submission.budget,
    )


def send_status_changed_email(submission, status, comment=None):
    _dispatch(
        "status changed",
        submission.email,
        f"Prosjektstatus oppdatert: {status.label}",
        "emails/status_changed.html",
        client_name=submission.client_name,
        project_id=submission.id,
        status_label=status.label,
        comment=comment,
    )


def send_delivery_ready_email(submission):
    _dispatch(
        "delivery ready",
        submission.email,
        "Prosjektet ditt er levert",
        "emails/delivery_ready.html",
        client_name=submission.client_name,
        project_id=submission.id,
        delivery_link=submission.delivery_link,
        delivery_description=submission.delivery_description,
    )


def send_new_message_email(to, submission, message):
    _dispatch(
        "new message",
        to,
        f"Ny melding om prosjekt #{submission.id}",
        "emails/new_message.html",
        client_name=submission.client_name,
        project_id=submission.id,
        sender=message.sender,
        text=message.text,
    )
