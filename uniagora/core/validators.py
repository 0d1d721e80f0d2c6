"""
Client-facing input checks shared by the signup, profile and listing forms.
"""

import re
import time
from typing import Optional

from uniagora.config import settings

PHONE_PATTERN = re.compile(r"[0-9]{11}")

MIN_PASSWORD_LENGTH = 6
MIN_POST_CONTENT_LENGTH = 10
MIN_COMMENT_LENGTH = 2
MIN_REVIEW_COMMENT_LENGTH = 5

VERIFICATION_STATUSES = ("unverified", "pending", "verified")

SERVICE_CATEGORIES = [
    "Graphic Design",
    "Writing & Translation",
    "Tutoring & Lessons",
    "Tech & Programming",
    "Photography & Video",
    "Fashion & Style",
    "Food & Groceries",
    "Beauty & Care",
    "Repairs & Maintenance",
]

FORUM_CATEGORIES = ["General", "Academic", "Freelancing", "Events", "Market Talk"]


def is_valid_phone(phone: str) -> bool:
    """Exactly 11 digits, local format (e.g. 08012345678)."""
    return bool(PHONE_PATTERN.fullmatch(phone or ""))


def format_phone_number(phone: str) -> str:
    """08012345678 -> +2348012345678"""
    formatted = phone
    if formatted.startswith("0"):
        formatted = formatted[1:]
    return f"{settings.phone_country_prefix}{formatted}"


def display_phone_number(phone: Optional[str]) -> str:
    """Inverse of format_phone_number, for pre-filling the edit form."""
    if not phone:
        return ""
    prefix = settings.phone_country_prefix
    if phone.startswith(prefix):
        return "0" + phone[len(prefix):]
    return phone


def storage_file_name(filename: str, now_ms: Optional[int] = None) -> str:
    """<epoch ms>-<original name with whitespace replaced>"""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    name = re.sub(r"\s", "_", filename or "upload")
    return f"{timestamp}-{name}"
