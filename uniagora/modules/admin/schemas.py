from pydantic import BaseModel


class AdminStats(BaseModel):
    total_users: int = 0
    pending_verifications: int = 0
    total_services: int = 0
    total_forum_posts: int = 0
