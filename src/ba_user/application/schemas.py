"""Pydantic schemas for ba_user API requests and responses."""

from pydantic import Field

from src.ba_analytics.domain.models import UserStats
from src.ba_common.datetime_utils import iso_or_none
from src.ba_common.schemas import CamelModel
from src.ba_user.domain.models import UserProfile


class SocialLinks(CamelModel):
    twitter: str | None = Field(None, max_length=200)
    instagram: str | None = Field(None, max_length=200)
    website: str | None = Field(None, max_length=500)


class UpdateProfileRequest(CamelModel):
    bio: str | None = Field(None, max_length=1000)
    avatar: str | None = Field(None, max_length=500)
    banner: str | None = Field(None, max_length=500)
    social: SocialLinks | None = None


class UpdateCreatorRequest(CamelModel):
    """Flat creator-page form; maps onto the profile fields it shares."""

    bio: str | None = Field(None, max_length=1000)
    website: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=200)
    instagram: str | None = Field(None, max_length=200)

    def to_profile_request(self) -> UpdateProfileRequest:
        links = self.model_dump(include={"website", "twitter", "instagram"}, exclude_none=True)
        return UpdateProfileRequest(
            bio=self.bio,
            social=SocialLinks(**links) if links else None,
        )


class UserStatsOut(CamelModel):
    nfts_created: int
    nfts_owned: int
    total_sales: int
    followers: int
    following: int


class UserProfileOut(CamelModel):
    address: str
    bio: str
    avatar: str
    banner: str
    social: dict[str, str]
    verified: bool
    stats: UserStatsOut
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_domain(cls, p: UserProfile, stats: UserStats) -> "UserProfileOut":
        return cls(
            address=p.address,
            bio=p.bio,
            avatar=p.avatar,
            banner=p.banner,
            social=dict(p.social),
            verified=p.verified,
            stats=UserStatsOut(
                nfts_created=stats.nfts_created,
                nfts_owned=stats.nfts_owned,
                total_sales=stats.total_sales,
                followers=stats.followers,
                following=stats.following,
            ),
            created_at=iso_or_none(p.created_at),
            updated_at=iso_or_none(p.updated_at),
        )
