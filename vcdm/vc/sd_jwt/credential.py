"""W3C Verifiable Credential secured as an SD-JWT."""

from ..constants import MIMETYPE_VC_SD_JWT, ClaimFormat
from ..models.credential import Credential
from .base import BaseSdJwtDocument
from .decode import DecodedSdJwt


class SdJwtVerifiableCredential(BaseSdJwtDocument):
    """A `vc+sd-jwt` credential and the credential its disclosed claims describe."""

    MIMETYPE = MIMETYPE_VC_SD_JWT
    CLAIM_FORMAT = ClaimFormat.SD_JWT_W3C_VC
    TYP = "vc+sd-jwt"
    CYT = "vc"

    def __init__(self, sd_jwt: DecodedSdJwt):
        """Initialize the credential, validating the disclosed claims.

        Raises:
            FieldError: If the claims do not decode as a credential
            ModelValidationError: If the decoded credential is not valid

        """
        super().__init__(sd_jwt)
        self.credential = Credential.deserialize(sd_jwt.pretty_claims, validate=True)
