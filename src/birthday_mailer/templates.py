from __future__ import annotations

import html as html_lib

from birthday_mailer.models import ComposedMessage, EventKind

CONTAINER_STYLE = (
    "font-family: Arial, sans-serif; max-width: 600px; margin: 20px auto; "
    "border: 1px solid #D5DBDB; border-radius: 8px; overflow: hidden; "
    "box-shadow: 0 4px 8px rgba(0,0,0,0.1); background-color: #F2F4F6;"
)
HEADER_STYLE = "background-color: #3498DB; color: white; padding: 20px; text-align: center;"
CONTENT_STYLE = "padding: 30px; line-height: 1.6; color: #2C3E50;"
FOOTER_STYLE = (
    "background-color: #EAECEE; color: #888; padding: 15px; "
    "text-align: center; font-size: 12px;"
)

SUBJECT_TEMPLATES = {
    EventKind.BIRTHDAY: "🎂 It's {person_name}'s Birthday Today!",
    EventKind.ADVANCE: "📅 Upcoming Birthday: {person_name}",
    EventKind.MILESTONE: "🚀 1000-Day Milestone: {person_name} is {days} days old!",
}

TITLE_TEMPLATES = {
    EventKind.BIRTHDAY: "🥳 It's Party Time! 🥳",
    EventKind.ADVANCE: "🎈 Birthday Reminder 🎈",
    EventKind.MILESTONE: "🎉 Milestone Alert! 🎉",
}

MESSAGE_TEMPLATES = {
    EventKind.BIRTHDAY: (
        "Today is the day! Wish <strong>{person_name}</strong> a very happy birthday "
        "and make their day special."
    ),
    EventKind.ADVANCE: (
        "Heads up! <strong>{person_name}</strong>'s birthday is just around the corner "
        "on {date}. Time to get the confetti ready!"
    ),
    EventKind.MILESTONE: (
        "Today <strong>{person_name}</strong> has been alive for exactly "
        "<strong>{days}</strong> days! How amazing is that?"
    ),
}

BODY_TEMPLATE = (
    '<div style="{container_style}">'
    '<div style="{header_style}"><h1>{title}</h1></div>'
    '<div style="{content_style}">'
    "<p>Hi there,</p>"
    "<p>{message}</p>"
    "<p>Best,</p>"
    "<p>Your Friendly Birthday Bot 🤖</p>"
    "</div>"
    '<div style="{footer_style}">'
    "<p>This is an automated reminder. You can't reply to this email.</p>"
    "</div>"
    "</div>"
)


def day_month(value: str) -> str:
    """Return the ``D/M`` part of a ``D/M`` or ``D/M/Y`` date string."""
    return "/".join(value.split("/")[:2])


def compose(
    name: str,
    kind: EventKind,
    payload: str | int | None = None,
    *,
    escape_html: bool = False,
) -> ComposedMessage:
    """Build the subject line and HTML body for one notification.

    Values are interpolated verbatim unless ``escape_html`` is set, so names
    from an untrusted source should only be used with escaping enabled.
    """
    kind = EventKind(kind)
    upcoming = day_month(str(payload)) if payload is not None else ""
    fields = {
        "person_name": name,
        "days": "" if payload is None else str(payload),
        "date": upcoming,
    }
    subject = SUBJECT_TEMPLATES[kind].format(**fields)

    # Subject lines are plain text, only the body needs escaping.
    if escape_html:
        fields = {key: html_lib.escape(value) for key, value in fields.items()}
    body = BODY_TEMPLATE.format(
        container_style=CONTAINER_STYLE,
        header_style=HEADER_STYLE,
        content_style=CONTENT_STYLE,
        footer_style=FOOTER_STYLE,
        title=TITLE_TEMPLATES[kind],
        message=MESSAGE_TEMPLATES[kind].format(**fields),
    )
    return ComposedMessage(subject=subject, html=body)
