from unittest import TestCase

import pytest

from ....config.settings import SD_JWT_HASH_ALG, SD_JWT_STRICT_DISCLOSURES
from ...error import (
    DigestResolutionError,
    InvalidHeaderAssertionError,
    MalformedSdJwtError,
)
from ..decode import Disclosure, assert_header_claim, decode_sd_jwt
from ..hasher import default_hasher
from .fixtures import (
    CREDENTIAL_CLAIMS,
    CREDENTIAL_PAYLOAD,
    CREDENTIAL_SD_JWT,
    DEGREE_DIGEST,
    DEGREE_DISCLOSURE,
    HIDDEN_DIGEST,
    NAME_DIGEST,
    NAME_DISCLOSURE,
    SIGNATURE,
    make_disclosure,
    make_sd_jwt,
)


def decode(compact, **kwargs):
    return decode_sd_jwt(compact, typ="vc+sd-jwt", cyt="vc", **kwargs)


class TestDecodeSdJwt(TestCase):
    def test_decode(self):
        decoded = decode(CREDENTIAL_SD_JWT)
        assert decoded.compact == CREDENTIAL_SD_JWT
        assert decoded.header["typ"] == "vc+sd-jwt"
        assert decoded.payload == CREDENTIAL_PAYLOAD
        assert decoded.signature == SIGNATURE
        assert decoded.key_binding_jwt is None
        assert decoded.pretty_claims == CREDENTIAL_CLAIMS
        assert [d.digest for d in decoded.disclosures] == [NAME_DIGEST, DEGREE_DIGEST]

    def test_disclosures(self):
        name, degree = decode(CREDENTIAL_SD_JWT).disclosures
        assert isinstance(name, Disclosure)
        assert name.key == "name" and name.value == "Alice"
        assert not name.is_array_element
        assert name.encoded == NAME_DISCLOSURE
        assert degree.is_array_element
        assert degree.to_list() == ["eluV5Og3gSNII8EYnsxA_A", "Bachelor"]

    def test_undisclosed_digests_stay_opaque(self):
        compact = make_sd_jwt(CREDENTIAL_PAYLOAD, [NAME_DISCLOSURE])
        claims = decode(compact).pretty_claims
        assert claims["credentialSubject"]["_sd"] == [HIDDEN_DIGEST]
        assert claims["degrees"] == [{"...": DEGREE_DIGEST}, "Master"]

    def test_unreferenced_disclosure_ignored(self):
        stray, _ = make_disclosure("c2FsdA", "stray", True)
        compact = make_sd_jwt(CREDENTIAL_PAYLOAD, [NAME_DISCLOSURE, stray])
        claims = decode(compact).pretty_claims
        assert "stray" not in claims
        assert "stray" not in claims["credentialSubject"]

    def test_unreferenced_disclosure_strict(self):
        stray, _ = make_disclosure("c2FsdA", "stray", True)
        compact = make_sd_jwt(CREDENTIAL_PAYLOAD, [NAME_DISCLOSURE, stray])
        with pytest.raises(DigestResolutionError) as excinfo:
            decode(compact, settings={SD_JWT_STRICT_DISCLOSURES: True})
        assert stray in str(excinfo.value)

    def test_nested_disclosures(self):
        street, street_digest = make_disclosure("c2FsdDE", "street", "Main St")
        address, address_digest = make_disclosure(
            "c2FsdDI", "address", {"_sd": [street_digest], "country": "DE"}
        )
        payload = {"credentialSubject": {"_sd": [address_digest]}}
        claims = decode(make_sd_jwt(payload, [address, street])).pretty_claims
        assert claims == {
            "credentialSubject": {"address": {"country": "DE", "street": "Main St"}}
        }

    def test_recursive_array_disclosure(self):
        inner, inner_digest = make_disclosure("c2FsdDE", "inner")
        outer, outer_digest = make_disclosure("c2FsdDI", [{"...": inner_digest}])
        payload = {"nested": [{"...": outer_digest}]}
        claims = decode(make_sd_jwt(payload, [outer, inner])).pretty_claims
        assert claims == {"nested": [["inner"]]}

    def test_hash_alg(self):
        name, name_digest = make_disclosure("c2FsdA", "name", "Alice", alg="sha-512")
        payload = {"_sd": [name_digest], "_sd_alg": "sha-512"}
        assert decode(make_sd_jwt(payload, [name])).pretty_claims == {"name": "Alice"}

        payload = {"_sd": [name_digest]}
        claims = decode(
            make_sd_jwt(payload, [name]), settings={SD_JWT_HASH_ALG: "sha-512"}
        ).pretty_claims
        assert claims == {"name": "Alice"}

    def test_unsupported_hash_alg(self):
        payload = {"_sd": [NAME_DIGEST], "_sd_alg": "md5"}
        with pytest.raises(DigestResolutionError):
            decode(make_sd_jwt(payload, [NAME_DISCLOSURE]))

    def test_custom_hasher(self):
        calls = []

        def hasher(data, alg):
            calls.append(alg)
            return default_hasher(data, alg)

        decoded = decode(CREDENTIAL_SD_JWT, hasher=hasher)
        assert decoded.pretty_claims == CREDENTIAL_CLAIMS
        assert calls == ["sha-256", "sha-256"]

    def test_key_binding_jwt(self):
        compact = make_sd_jwt(
            CREDENTIAL_PAYLOAD, [NAME_DISCLOSURE], key_binding_jwt="a.b.c"
        )
        assert decode(compact).key_binding_jwt == "a.b.c"

    def test_without_disclosure_separator(self):
        jwt = make_sd_jwt({"name": "Alice"}).rstrip("~")
        decoded = decode(jwt)
        assert decoded.pretty_claims == {"name": "Alice"}
        assert decoded.disclosures == []

    def test_header_assertions(self):
        for header in (
            {"alg": "ES256", "typ": "jwt"},
            {"typ": "vc+sd-jwt", "cyt": "vp"},
        ):
            with pytest.raises(InvalidHeaderAssertionError):
                decode(make_sd_jwt({"name": "Alice"}, header=header))

        decoded = decode(make_sd_jwt({"name": "Alice"}, header={"alg": "ES256"}))
        assert decoded.pretty_claims == {"name": "Alice"}

    def test_assert_header_claim(self):
        assert_header_claim({}, "typ", "vc+sd-jwt")
        assert_header_claim({"typ": "anything"}, "typ", None)
        with pytest.raises(InvalidHeaderAssertionError) as excinfo:
            assert_header_claim({"typ": "jwt"}, "typ", "vc+sd-jwt")
        assert excinfo.value.header == "typ"
        assert "jwt" in str(excinfo.value)

    def test_malformed(self):
        header, payload, _ = CREDENTIAL_SD_JWT.split("~")[0].split(".")
        for compact in (
            "",
            "abc~",
            f"{header}.{payload}~",
            f"{header}.{payload}.sig.extra~",
            f"{header}.!!!.sig~",
            f"{header}.WzFd.sig~",
            f"{header}.{payload}.sig~~",
            f"{header}.{payload}.sig~bm90IGpzb24~",
            f"{header}.{payload}.sig~WyJvbmx5Il0~",
        ):
            with pytest.raises(MalformedSdJwtError):
                decode(compact)
        with pytest.raises(MalformedSdJwtError):
            decode(None)

    def test_repeated_digest(self):
        payload = {"_sd": [NAME_DIGEST], "subject": {"_sd": [NAME_DIGEST]}}
        with pytest.raises(DigestResolutionError):
            decode(make_sd_jwt(payload, [NAME_DISCLOSURE]))

    def test_repeated_disclosure(self):
        payload = {"_sd": [NAME_DIGEST]}
        with pytest.raises(DigestResolutionError):
            decode(make_sd_jwt(payload, [NAME_DISCLOSURE, NAME_DISCLOSURE]))

    def test_claim_disclosed_twice(self):
        payload = {"name": "Bob", "_sd": [NAME_DIGEST]}
        with pytest.raises(DigestResolutionError):
            decode(make_sd_jwt(payload, [NAME_DISCLOSURE]))

    def test_disclosure_kind_mismatch(self):
        with pytest.raises(DigestResolutionError):
            decode(make_sd_jwt({"_sd": [DEGREE_DIGEST]}, [DEGREE_DISCLOSURE]))
        with pytest.raises(DigestResolutionError):
            decode(make_sd_jwt({"list": [{"...": NAME_DIGEST}]}, [NAME_DISCLOSURE]))

    def test_serialize(self):
        serialized = decode(CREDENTIAL_SD_JWT).serialize()
        assert serialized["compact"] == CREDENTIAL_SD_JWT
        assert serialized["pretty_claims"] == CREDENTIAL_CLAIMS
        assert serialized["disclosures"][0] == [
            "2GLC42sKQveCfGfryNRN9w",
            "name",
            "Alice",
        ]
        assert "key_binding_jwt" not in serialized
