from supabase import Client
from uniagora.modules.services.schemas import (
    ServiceCreate, ServiceUpdate, ServiceResponse, ServiceDetailResponse,
    ReviewCreate, ReviewResponse
)
from uniagora.modules.profiles.service import embedded_profile
from uniagora.core.filters import filter_rows
from uniagora.core.validators import MIN_REVIEW_COMMENT_LENGTH
from typing import List, Optional, Dict, Any, Tuple
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

LISTING_OWNER_COLUMNS = "*, profiles(full_name, verification_status, image_url)"
DETAIL_OWNER_COLUMNS = "*, profiles(id, full_name, phone_number, university, verification_status, image_url)"
REVIEW_COLUMNS = "*, profiles(full_name, image_url)"
SEARCH_FIELDS = ("title", "description", "category")


def aggregate_ratings(rows: List[Dict[str, Any]]) -> Dict[str, Tuple[float, int]]:
    """service_id -> (average rating, review count)"""
    totals: Dict[str, List[int]] = {}
    for row in rows:
        entry = totals.setdefault(row["service_id"], [0, 0])
        entry[0] += row["rating"]
        entry[1] += 1
    return {
        service_id: (round(total / count, 1), count)
        for service_id, (total, count) in totals.items()
    }


class MarketplaceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _to_service(self, row: Dict[str, Any], ratings: Dict[str, Tuple[float, int]]) -> ServiceResponse:
        average, count = ratings.get(row["id"], (None, 0))
        data = {**row, "profiles": embedded_profile(row), "average_rating": average, "review_count": count}
        return ServiceResponse(**data)

    def _ratings_for(self, service_ids: List[str]) -> Dict[str, Tuple[float, int]]:
        if not service_ids:
            return {}
        try:
            result = self.supabase.table("service_reviews")\
                .select("service_id, rating")\
                .in_("service_id", service_ids)\
                .execute()
            return aggregate_ratings(result.data or [])
        except Exception as e:
            # Listings still render without ratings
            logger.error(f"Error fetching ratings: {e}")
            return {}

    def list_services(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        featured_first: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[ServiceResponse]:
        """Marketplace listing, newest first"""
        try:
            query = self.supabase.table("services").select(LISTING_OWNER_COLUMNS)
            if category and category != "All":
                query = query.eq("category", category)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Error fetching services: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        rows = filter_rows(result.data or [], search, SEARCH_FIELDS)
        if featured_first:
            # stable sort keeps newest-first inside each group
            rows = sorted(rows, key=lambda r: not r.get("is_featured", False))
        rows = rows[offset:offset + limit]
        ratings = self._ratings_for([r["id"] for r in rows])
        return [self._to_service(r, ratings) for r in rows]

    def list_user_services(self, user_id: str) -> List[ServiceResponse]:
        """A freelancer's own listings"""
        try:
            result = self.supabase.table("services")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []
            ratings = self._ratings_for([r["id"] for r in rows])
            return [self._to_service(r, ratings) for r in rows]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_service(self, service_id: str) -> ServiceDetailResponse:
        """Listing with owner contact details and reviews"""
        try:
            result = self.supabase.table("services")\
                .select(DETAIL_OWNER_COLUMNS)\
                .eq("id", service_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Service not found")

        reviews = self.list_reviews(service_id)
        count = len(reviews)
        average = round(sum(r.rating for r in reviews) / count, 1) if count else None
        row = result.data
        return ServiceDetailResponse(**{
            **row,
            "profiles": embedded_profile(row),
            "average_rating": average,
            "review_count": count,
            "reviews": reviews,
        })

    def ensure_freelancer(self, user_id: str) -> None:
        try:
            result = self.supabase.table("profiles")\
                .select("is_freelancer")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data or not result.data.get("is_freelancer"):
            raise HTTPException(
                status_code=403,
                detail="Unauthorized: You must be a freelancer to create a service."
            )

    def create_service(self, user_id: str, service_data: ServiceCreate, image_url: Optional[str] = None) -> ServiceResponse:
        """Create a listing owned by user_id"""
        self.ensure_freelancer(user_id)
        try:
            result = self.supabase.table("services").insert({
                "user_id": user_id,
                "title": service_data.title,
                "category": service_data.category,
                "description": service_data.description,
                "price_range": service_data.price_range,
                "image_url": image_url,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create service")

            logger.info(f"User {user_id} created service {result.data[0]['id']}")
            return ServiceResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_service(
        self, service_id: str, user_id: str, service_data: ServiceUpdate, image_url: Optional[str] = None
    ) -> ServiceResponse:
        """Update a listing; only the owner's row matches"""
        update_data = {}
        if service_data.title:
            update_data["title"] = service_data.title
        if service_data.category:
            update_data["category"] = service_data.category
        if service_data.description is not None:
            update_data["description"] = service_data.description
        if service_data.price_range is not None:
            update_data["price_range"] = service_data.price_range
        if image_url:
            update_data["image_url"] = image_url
        if not update_data:
            raise HTTPException(status_code=400, detail="Nothing to update")
        try:
            result = self.supabase.table("services")\
                .update(update_data)\
                .eq("id", service_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Service not found")

            return ServiceResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_service(self, service_id: str, user_id: str) -> bool:
        """Delete own listing"""
        try:
            result = self.supabase.table("services")\
                .delete()\
                .eq("id", service_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Service not found")
        return True

    def list_reviews(self, service_id: str) -> List[ReviewResponse]:
        """Reviews for a listing, newest first"""
        try:
            result = self.supabase.table("service_reviews")\
                .select(REVIEW_COLUMNS)\
                .eq("service_id", service_id)\
                .order("created_at", desc=True)\
                .execute()
            return [
                ReviewResponse(**{**r, "profiles": embedded_profile(r)})
                for r in (result.data or [])
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_review(self, service_id: str, user_id: str, review_data: ReviewCreate) -> ReviewResponse:
        """One review per (service, user); the store enforces uniqueness"""
        comment = review_data.comment.strip()
        if len(comment) < MIN_REVIEW_COMMENT_LENGTH:
            raise HTTPException(status_code=400, detail="Comment must be at least 5 characters.")
        try:
            result = self.supabase.table("service_reviews").insert({
                "service_id": service_id,
                "user_id": user_id,
                "rating": review_data.rating,
                "comment": comment,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit review")

            return ReviewResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "duplicate" in error_message.lower() or "23505" in error_message:
                raise HTTPException(status_code=400, detail="You have already reviewed this service.")
            logger.error(f"Error submitting review: {error_message}")
            raise HTTPException(status_code=500, detail="Could not submit review.")
