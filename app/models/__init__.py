from app.models.user import User
from app.models.gig import Gig
from app.models.band_member import BandMember, GigBandMember

__all__ = [
    "User",
    "Gig",
    "BandMember",
    "GigBandMember",
]
