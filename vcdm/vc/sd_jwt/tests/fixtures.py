"""Unsigned SD-JWTs built from plain claims, for tests."""

import json

from ....utils.encoding import bytes_to_b64, dict_to_b64
from ...constants import CREDENTIALS_CONTEXT_V2_URL
from ..hasher import default_hasher

VC_HEADER = {"alg": "ES256", "typ": "vc+sd-jwt", "cyt": "vc"}
VP_HEADER = {"alg": "ES256", "typ": "vp+sd-jwt", "cyt": "vp"}
SIGNATURE = "c2lnbmF0dXJl"


def make_disclosure(*elements, alg: str = "sha-256"):
    """Return an encoded disclosure and its digest."""
    encoded = bytes_to_b64(json.dumps(list(elements)).encode(), urlsafe=True, pad=False)
    digest = bytes_to_b64(default_hasher(encoded, alg), urlsafe=True, pad=False)
    return encoded, digest


def make_sd_jwt(payload, disclosures=(), header=None, key_binding_jwt: str = ""):
    """Assemble a compact SD-JWT; the signature is a placeholder."""
    header = VC_HEADER if header is None else header
    jwt = ".".join([dict_to_b64(header), dict_to_b64(payload), SIGNATURE])
    return "~".join([jwt, *disclosures, key_binding_jwt])


NAME_DISCLOSURE, NAME_DIGEST = make_disclosure(
    "2GLC42sKQveCfGfryNRN9w", "name", "Alice"
)
DEGREE_DISCLOSURE, DEGREE_DIGEST = make_disclosure("eluV5Og3gSNII8EYnsxA_A", "Bachelor")
_, HIDDEN_DIGEST = make_disclosure("6Ij7tM-a5iVPGboS5tmvVA", "birthDate", "1990-01-01")

CREDENTIAL_PAYLOAD = {
    "@context": [CREDENTIALS_CONTEXT_V2_URL],
    "id": "http://university.example/credentials/3732",
    "type": ["VerifiableCredential", "ExampleDegreeCredential"],
    "issuer": "did:example:76e12ec712ebc6f1c221ebfeb1f",
    "validFrom": "2010-01-01T00:00:00Z",
    "credentialSubject": {
        "id": "did:example:ebfeb1f712ebc6f1c276e12ec21",
        "_sd": [NAME_DIGEST, HIDDEN_DIGEST],
    },
    "degrees": [{"...": DEGREE_DIGEST}, "Master"],
    "_sd_alg": "sha-256",
}

CREDENTIAL_CLAIMS = {
    "@context": [CREDENTIALS_CONTEXT_V2_URL],
    "id": "http://university.example/credentials/3732",
    "type": ["VerifiableCredential", "ExampleDegreeCredential"],
    "issuer": "did:example:76e12ec712ebc6f1c221ebfeb1f",
    "validFrom": "2010-01-01T00:00:00Z",
    "credentialSubject": {
        "id": "did:example:ebfeb1f712ebc6f1c276e12ec21",
        "name": "Alice",
        "_sd": [HIDDEN_DIGEST],
    },
    "degrees": ["Bachelor", "Master"],
}

CREDENTIAL_SD_JWT = make_sd_jwt(
    CREDENTIAL_PAYLOAD, [NAME_DISCLOSURE, DEGREE_DISCLOSURE]
)

PRESENTATION_PAYLOAD = {
    "@context": [CREDENTIALS_CONTEXT_V2_URL],
    "type": ["VerifiablePresentation"],
    "holder": "did:example:ebfeb1f712ebc6f1c276e12ec21",
    "verifiableCredential": [
        {
            "@context": CREDENTIALS_CONTEXT_V2_URL,
            "id": f"data:application/vc+sd-jwt,{CREDENTIAL_SD_JWT}",
            "type": "EnvelopedVerifiableCredential",
        }
    ],
}

PRESENTATION_SD_JWT = make_sd_jwt(PRESENTATION_PAYLOAD, header=VP_HEADER)
