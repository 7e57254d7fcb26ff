# src/cli/formatters.py

"""Text formats for activity link lists (blog, Bligence, JSON, plain)."""

import json

from src.models.activity import Activity

FORMATS: tuple[str, ...] = ("markdown", "html", "bligence", "json", "simple")


def _markdown(activities: list[Activity]) -> str:
    out = "## Top Activities\n\n"
    for i, act in enumerate(activities, 1):
        out += f"### {i}. {act.title}\n"
        if act.rating:
            reviews = (
                f" ({act.review_count} reviews)" if act.review_count else ""
            )
            out += f"⭐ {act.rating}{reviews}\n"
        if act.price:
            out += f"💰 From ${act.price}\n"
        out += f"🔗 [Book Now]({act.url})\n\n"
    return out


def _html(activities: list[Activity]) -> str:
    out = '<div class="gyg-activities">\n'
    for act in activities:
        out += '  <div class="activity">\n'
        if act.image_url:
            out += f'    <img src="{act.image_url}" alt="{act.title}" />\n'
        out += f"    <h3>{act.title}</h3>\n"
        if act.rating:
            out += f'    <span class="rating">⭐ {act.rating}</span>\n'
        if act.price:
            out += f'    <span class="price">From ${act.price}</span>\n'
        out += (
            f'    <a href="{act.url}" class="btn" target="_blank" '
            'rel="nofollow sponsored">Book Now</a>\n'
        )
        out += "  </div>\n"
    out += "</div>"
    return out


def _bligence(activities: list[Activity]) -> str:
    out = "AFFILIATE LINKS FOR BLIGENCE:\n\n"
    for i, act in enumerate(activities, 1):
        out += f"Link {i}: {act.title}\n"
        out += f"URL: {act.url}\n"
        out += (
            f'Anchor text suggestions: "Book {act.title}", '
            '"Reserve your spot", "Get tickets"\n\n'
        )
    return out


def _simple(activities: list[Activity]) -> str:
    return "\n\n".join(
        f"{i}. {act.title}\n   {act.url}"
        for i, act in enumerate(activities, 1)
    )


def format_activities(activities: list[Activity], fmt: str = "markdown") -> str:
    """Render *activities* in *fmt*; unknown formats get the plain list."""
    if fmt == "markdown":
        return _markdown(activities)
    if fmt == "html":
        return _html(activities)
    if fmt == "bligence":
        return _bligence(activities)
    if fmt == "json":
        return json.dumps(
            [a.to_dict() for a in activities], ensure_ascii=False, indent=2
        )
    return _simple(activities)
