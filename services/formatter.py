from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape

from schemas.contact_us import ContactSubmission, SubmissionMetadata


@dataclass(frozen=True)
class ContactEmail:
    subject: str
    text: str
    html: str
    reply_to: str


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing ``Z``."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_subject(submission: ContactSubmission, site_name: str) -> str:
    return f"{site_name} Inquiry — {submission.name}"


def build_text_body(submission: ContactSubmission, metadata: SubmissionMetadata, site_name: str) -> str:
    heading = f"New inquiry from the {site_name} website"
    return "\n".join([
        heading,
        "-" * len(heading),
        f"Name: {submission.name}",
        f"Email: {submission.email}",
        "",
        "Message:",
        submission.message,
        "",
        f"Sent at: {format_timestamp(metadata.sent_at)}",
        f"IP: {metadata.client_ip}",
        f"User-Agent: {metadata.user_agent or 'unknown'}",
    ])


def build_html_body(submission: ContactSubmission, metadata: SubmissionMetadata, site_name: str) -> str:
    return f"""
    <h2>New inquiry from the {escape(site_name)} website</h2>
    <p><strong>Name:</strong> {escape(submission.name)}<br/>
       <strong>Email:</strong> {escape(submission.email)}</p>
    <p><strong>Message:</strong></p>
    <pre style="white-space:pre-wrap; font-family:Inter,system-ui,Arial; background:#f7f2ee; padding:12px; border-radius:10px; border:1px solid #e8d7cc;">{escape(submission.message)}</pre>
    <p style="color:#6b625c; font-size:12px;">
      Sent at {format_timestamp(metadata.sent_at)} • IP {escape(metadata.client_ip)} • UA {escape(metadata.user_agent or "unknown")}
    </p>
    """


def build_contact_email(submission: ContactSubmission, metadata: SubmissionMetadata, site_name: str) -> ContactEmail:
    """Render one submission as a subject plus matching plain-text and HTML bodies.

    User-supplied values are HTML-escaped in the HTML body only; the text body
    carries them verbatim. Replies go straight back to the submitter.
    """
    return ContactEmail(
        subject=build_subject(submission, site_name),
        text=build_text_body(submission, metadata, site_name),
        html=build_html_body(submission, metadata, site_name),
        reply_to=submission.email,
    )
