"""W3C Verifiable Presentation secured as an SD-JWT."""

from ..constants import MIMETYPE_VP_SD_JWT, ClaimFormat
from ..models.presentation import Presentation
from .base import BaseSdJwtDocument
from .decode import DecodedSdJwt


class SdJwtVerifiablePresentation(BaseSdJwtDocument):
    """A `vp+sd-jwt` presentation and the presentation its claims describe."""

    MIMETYPE = MIMETYPE_VP_SD_JWT
    CLAIM_FORMAT = ClaimFormat.SD_JWT_W3C_VP
    TYP = "vp+sd-jwt"
    CYT = "vp"

    def __init__(self, sd_jwt: DecodedSdJwt):
        """Initialize the presentation, validating the disclosed claims."""
        super().__init__(sd_jwt)
        self.presentation = Presentation.deserialize(
            sd_jwt.pretty_claims, validate=True
        )
