"""W3C Verifiable Credentials Data Model 2.0 and SD-JWT constants."""

from enum import Enum

CREDENTIALS_CONTEXT_V2_URL = "https://www.w3.org/ns/credentials/v2"

VERIFIABLE_CREDENTIAL_TYPE = "VerifiableCredential"
VERIFIABLE_PRESENTATION_TYPE = "VerifiablePresentation"
ENVELOPED_VERIFIABLE_CREDENTIAL_TYPE = "EnvelopedVerifiableCredential"
ENVELOPED_VERIFIABLE_PRESENTATION_TYPE = "EnvelopedVerifiablePresentation"

MIMETYPE_VC_SD_JWT = "application/vc+sd-jwt"
MIMETYPE_VP_SD_JWT = "application/vp+sd-jwt"

DATA_URI_SCHEME = "data:"


class ClaimFormat(Enum):
    """Serialization formats of secured credentials and presentations."""

    SD_JWT_W3C_VC = "vc+sd-jwt"
    SD_JWT_W3C_VP = "vp+sd-jwt"
