from supabase import Client
from uniagora.modules.contact.schemas import ContactCreate
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit(self, contact_data: ContactCreate) -> None:
        """Store a help request / report for the admin inbox"""
        if not contact_data.name.strip() or not contact_data.message.strip():
            raise HTTPException(status_code=400, detail="Name and message are required.")
        try:
            self.supabase.table("contact_submissions").insert({
                "name": contact_data.name,
                "email": contact_data.email,
                "subject": contact_data.subject,
                "message": contact_data.message,
            }).execute()
            logger.info(f"Contact submission received ({contact_data.subject})")
        except Exception as e:
            logger.error(f"Submission error: {e}")
            raise HTTPException(status_code=500, detail="Failed to send message. Please try again.")
