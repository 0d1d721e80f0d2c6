from fastapi import APIRouter, Depends
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.contact.schemas import ContactCreate
from uniagora.modules.contact.service import ContactService
from supabase import Client

router = APIRouter(prefix="/contact", tags=["contact"])


def get_contact_service(supabase: Client = Depends(get_user_supabase)) -> ContactService:
    return ContactService(supabase)


@router.post("", status_code=201)
async def submit_contact(
    contact_data: ContactCreate,
    service: ContactService = Depends(get_contact_service)
):
    """Public contact form"""
    service.submit(contact_data)
    return {"message": "Message sent successfully"}
