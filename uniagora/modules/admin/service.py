from supabase import Client
from uniagora.modules.admin.schemas import AdminStats
from uniagora.modules.profiles.schemas import ProfileResponse
from uniagora.modules.profiles.service import embedded_profile
from uniagora.modules.services.schemas import ServiceResponse
from uniagora.modules.community.schemas import PostResponse
from uniagora.modules.contact.schemas import ContactResponse
from uniagora.core.filters import filter_rows
from uniagora.core.validators import VERIFICATION_STATUSES
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        query = self.supabase.table(table).select("*", count="exact", head=True)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        return query.execute().count or 0

    def _select_all(self, table: str, columns: str = "*") -> List[Dict[str, Any]]:
        try:
            result = self.supabase.table(table)\
                .select(columns)\
                .order("created_at", desc=True)\
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error fetching {table}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load {table}.")

    def _delete(self, table: str, row_id: str, label: str) -> bool:
        try:
            result = self.supabase.table(table)\
                .delete()\
                .eq("id", row_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        logger.info(f"Admin deleted {table} row {row_id}")
        return True

    def get_stats(self) -> AdminStats:
        """Platform totals for the admin overview"""
        try:
            return AdminStats(
                total_users=self._count("profiles"),
                pending_verifications=self._count("profiles", {"verification_status": "pending"}),
                total_services=self._count("services"),
                total_forum_posts=self._count("community_posts"),
            )
        except Exception as e:
            logger.error(f"Error fetching admin stats: {e}")
            return AdminStats()

    # Users

    def list_users(self, search: Optional[str] = None, status: Optional[str] = None) -> List[ProfileResponse]:
        """All profiles, newest first, filtered by name/university and verification status"""
        if status and status != "all" and status not in VERIFICATION_STATUSES:
            raise HTTPException(status_code=400, detail=f"Unknown verification status: {status}")
        rows = filter_rows(self._select_all("profiles"), search, ("full_name", "university"))
        if status and status != "all":
            rows = [r for r in rows if r.get("verification_status") == status]
        return [ProfileResponse(**r) for r in rows]

    def toggle_verification(self, user_id: str) -> ProfileResponse:
        """verified -> unverified, anything else -> verified"""
        try:
            current = self.supabase.table("profiles")\
                .select("verification_status")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
            if not current or not current.data:
                raise HTTPException(status_code=404, detail="User not found")
            new_status = "unverified" if current.data.get("verification_status") == "verified" else "verified"
            result = self.supabase.table("profiles")\
                .update({"verification_status": new_status})\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")
            logger.info(f"Profile {user_id} verification set to {new_status}")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    # Services

    def list_services(self, search: Optional[str] = None) -> List[ServiceResponse]:
        rows = filter_rows(
            self._select_all("services", "*, profiles(full_name)"),
            search,
            ("title", "category", "profiles.full_name"),
        )
        return [ServiceResponse(**{**r, "profiles": embedded_profile(r)}) for r in rows]

    def toggle_featured(self, service_id: str) -> ServiceResponse:
        try:
            current = self.supabase.table("services")\
                .select("is_featured")\
                .eq("id", service_id)\
                .maybe_single()\
                .execute()
            if not current or not current.data:
                raise HTTPException(status_code=404, detail="Service not found")
            result = self.supabase.table("services")\
                .update({"is_featured": not current.data.get("is_featured", False)})\
                .eq("id", service_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Service not found")
            return ServiceResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_service(self, service_id: str) -> bool:
        return self._delete("services", service_id, "Service")

    # Forum

    def list_posts(self, search: Optional[str] = None) -> List[PostResponse]:
        rows = filter_rows(
            self._select_all("community_posts", "*, profiles(full_name)"),
            search,
            ("title", "content", "category", "profiles.full_name"),
        )
        return [PostResponse(**{**r, "profiles": embedded_profile(r)}) for r in rows]

    def delete_post(self, post_id: str) -> bool:
        return self._delete("community_posts", post_id, "Post")

    # Contact inbox

    def list_contact_submissions(self, search: Optional[str] = None) -> List[ContactResponse]:
        rows = filter_rows(
            self._select_all("contact_submissions"),
            search,
            ("name", "email", "subject", "message"),
        )
        return [ContactResponse(**r) for r in rows]

    def delete_contact_submission(self, submission_id: str) -> bool:
        return self._delete("contact_submissions", submission_id, "Submission")
