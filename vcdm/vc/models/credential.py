"""Verifiable Credential 2.0 model and schema."""

from datetime import datetime
from typing import Dict, List, Optional, Union

from marshmallow import INCLUDE, ValidationError
from pytz import utc

from ...models.base import (
    BaseModel,
    BaseModelSchema,
    check,
    collect_nested_errors,
)
from ...models.fields import (
    ContextField,
    SingleOrArrayField,
    StrField,
    StrOrModelField,
    StrOrStrListField,
    coerce_single_or_array,
    coerce_str_or_model,
)
from ...models.valid import (
    CredentialContext,
    RFC3339DateTime,
    TypeIncludes,
    Uri,
    as_list,
)
from ..constants import CREDENTIALS_CONTEXT_V2_URL, VERIFIABLE_CREDENTIAL_TYPE
from .credential_status import CredentialStatus
from .credential_subject import CredentialSubject
from .data_schema import DataSchema
from .evidence import Evidence
from .issuer import Issuer, issuer_errors
from .localized_value import LocalizedValue
from .refresh_service import RefreshService
from .terms_of_use import TermsOfUse

# (attribute, document key) of the one-or-many sub-entities
NESTED_FIELDS = (
    ("credential_subject", "credentialSubject"),
    ("status", "credentialStatus"),
    ("credential_schema", "credentialSchema"),
    ("refresh_service", "refreshService"),
    ("terms_of_use", "termsOfUse"),
    ("evidence", "evidence"),
)


def to_rfc3339(date: Union[str, datetime, None]) -> Optional[str]:
    """Render a datetime as an RFC3339 string, assuming UTC when it is naive."""
    if isinstance(date, datetime):
        if not date.tzinfo:
            date = utc.localize(date)
        date = date.isoformat()
    return date


class Credential(BaseModel):
    """Verifiable Credential 2.0 claims, before or after securing.

    Keys this model does not declare are kept in `properties` and written back
    on serialization, so a decoded credential round-trips without loss.

    See https://www.w3.org/TR/vc-data-model-2.0/#credentials
    """

    class Meta:
        """Credential metadata."""

        schema_class = "CredentialSchema"

    def __init__(
        self,
        context: Optional[Union[str, dict, List[Union[str, dict]]]] = None,
        id: Optional[str] = None,
        type: Optional[Union[str, List[str]]] = None,
        name=None,
        description=None,
        issuer: Optional[Union[str, dict, Issuer]] = None,
        credential_subject=None,
        valid_from: Optional[Union[str, datetime]] = None,
        valid_until: Optional[Union[str, datetime]] = None,
        status=None,
        credential_schema=None,
        refresh_service=None,
        terms_of_use=None,
        evidence=None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the Credential instance.

        Sub-entities may be given as mappings or as model instances; mappings are
        decoded into their models. Nothing is validated until `validate` is called.
        """
        self._context = [CREDENTIALS_CONTEXT_V2_URL] if context is None else context
        self._id = id
        self._type = [VERIFIABLE_CREDENTIAL_TYPE] if type is None else type
        self.name = self._coerce_localized(name, "name")
        self.description = self._coerce_localized(description, "description")
        self._issuer = (
            None
            if issuer is None
            else coerce_str_or_model(issuer, Issuer, owner="Credential", field="issuer")
        )
        self._valid_from = to_rfc3339(valid_from)
        self._valid_until = to_rfc3339(valid_until)

        self._credential_subject = self._coerce_nested(
            credential_subject, CredentialSubject, "credentialSubject"
        )
        self.status = self._coerce_nested(status, CredentialStatus, "credentialStatus")
        self.credential_schema = self._coerce_nested(
            credential_schema, DataSchema, "credentialSchema"
        )
        self.refresh_service = self._coerce_nested(
            refresh_service, RefreshService, "refreshService"
        )
        self.terms_of_use = self._coerce_nested(terms_of_use, TermsOfUse, "termsOfUse")
        self.evidence = self._coerce_nested(evidence, Evidence, "evidence")
        self.properties = dict(properties or {})

    @staticmethod
    def _coerce_nested(value, model: type, field: str):
        if value is None:
            return None
        return coerce_single_or_array(
            value, model, allow_empty=True, owner="Credential", field=field
        )

    @staticmethod
    def _coerce_localized(value, field: str):
        if value is None:
            return None
        return coerce_single_or_array(
            value,
            LocalizedValue,
            allow_empty=True,
            allow_string=True,
            owner="Credential",
            field=field,
        )

    @property
    def context(self):
        """Getter for context."""
        return self._context

    @context.setter
    def context(self, context: Union[str, List[Union[str, dict]]]):
        """Setter for context.

        First item must be credentials v2 url
        """
        CredentialContext(CREDENTIALS_CONTEXT_V2_URL)(context)

        self._context = context

    @property
    def contexts(self) -> List[Union[str, dict]]:
        """Getter for context, always as an array."""
        return as_list(self._context)

    def add_context(self, context: Union[str, dict]):
        """Add a context to this credential."""
        self._context = self.contexts + [context]

    @property
    def context_urls(self) -> List[str]:
        """Getter for context urls."""
        return [context for context in self.contexts if isinstance(context, str)]

    @property
    def type(self) -> Union[str, List[str]]:
        """Getter for type."""
        return self._type

    @type.setter
    def type(self, type: Union[str, List[str]]):
        """Setter for type.

        Must include VerifiableCredential
        """
        TypeIncludes(VERIFIABLE_CREDENTIAL_TYPE)(type)

        self._type = type

    def add_type(self, type: str):
        """Add a type to this credential."""
        self._type = as_list(self._type) + [type]

    @property
    def id(self):
        """Getter for id."""
        return self._id

    @id.setter
    def id(self, id: Union[str, None]):
        """Setter for id."""
        if id:
            uri_validator = Uri()
            uri_validator(id)

        self._id = id

    @property
    def issuer(self) -> Union[str, Issuer, None]:
        """Getter for issuer."""
        return self._issuer

    @issuer.setter
    def issuer(self, issuer: Union[str, dict, Issuer]):
        """Setter for issuer."""
        issuer = coerce_str_or_model(issuer, Issuer, owner="Credential", field="issuer")
        errors = issuer_errors(issuer)
        if errors:
            raise ValidationError(errors)

        self._issuer = issuer

    @property
    def issuer_id(self) -> Optional[str]:
        """Getter for issuer id."""
        if not self._issuer:
            return None
        elif isinstance(self._issuer, str):
            return self._issuer

        return self._issuer.id

    @issuer_id.setter
    def issuer_id(self, issuer_id: str):
        """Setter for issuer id."""
        uri_validator = Uri()
        uri_validator(issuer_id)

        # Use simple string variant if possible
        if not self._issuer or isinstance(self._issuer, str):
            self._issuer = issuer_id
        else:
            self._issuer.id = issuer_id

    @property
    def credential_subject(self):
        """Getter for credential subject."""
        return self._credential_subject

    @credential_subject.setter
    def credential_subject(self, credential_subject):
        """Setter for credential subject."""
        self._credential_subject = coerce_single_or_array(
            credential_subject,
            CredentialSubject,
            owner="Credential",
            field="credentialSubject",
        )

    @property
    def credential_subject_ids(self) -> List[str]:
        """Getter for credential subject ids."""
        return [
            subject.id
            for subject in as_list(self._credential_subject)
            if subject.id is not None
        ]

    @property
    def credential_schema_ids(self) -> List[str]:
        """Getter for credential schema ids."""
        return [schema.id for schema in as_list(self.credential_schema)]

    @property
    def valid_from(self):
        """Getter for valid from date."""
        return self._valid_from

    @valid_from.setter
    def valid_from(self, date: Union[str, datetime, None]):
        """Setter for valid from date."""
        self._valid_from = to_rfc3339(date)

    @property
    def valid_until(self):
        """Getter for valid until date."""
        return self._valid_until

    @valid_until.setter
    def valid_until(self, date: Union[str, datetime, None]):
        """Setter for valid until date."""
        self._valid_until = to_rfc3339(date)

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by document field path."""
        errors = {}
        check(
            errors,
            "@context",
            CredentialContext(CREDENTIALS_CONTEXT_V2_URL),
            self._context,
        )
        if self._id is not None:
            check(errors, "id", Uri(), self._id)
        check(errors, "type", TypeIncludes(VERIFIABLE_CREDENTIAL_TYPE), self._type)

        if self._issuer is None:
            errors["issuer"] = ["issuer is required"]
        else:
            errors.update(issuer_errors(self._issuer))

        if self._credential_subject is None:
            errors["credentialSubject"] = ["credentialSubject is required"]

        for key, value in (
            ("validFrom", self._valid_from),
            ("validUntil", self._valid_until),
        ):
            if value is not None:
                check(errors, key, RFC3339DateTime(), value)

        for attr, key in NESTED_FIELDS:
            value = getattr(self, attr)
            if value == []:
                errors.setdefault(key, []).append("must contain at least one entry")
            collect_nested_errors(errors, key, value)

        return errors


class CredentialSchema(BaseModelSchema):
    """Verifiable Credential 2.0 schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = Credential

    context = ContextField(
        data_key="@context",
        required=False,
        metadata={
            "description": "The JSON-LD context of the credential",
            "example": [CREDENTIALS_CONTEXT_V2_URL],
        },
    )
    id = StrField(
        required=False,
        metadata={
            "description": "The ID of the credential",
            "example": "http://university.example/credentials/1872",
        },
    )
    type = StrOrStrListField(
        required=False,
        metadata={
            "description": "The type of the credential",
            "example": [VERIFIABLE_CREDENTIAL_TYPE, "ExampleAlumniCredential"],
        },
    )
    name = SingleOrArrayField(
        LocalizedValue,
        allow_empty=True,
        allow_string=True,
        required=False,
        metadata={"description": "Name of the credential, plain or localized"},
    )
    description = SingleOrArrayField(
        LocalizedValue,
        allow_empty=True,
        allow_string=True,
        required=False,
        metadata={"description": "Description of the credential, plain or localized"},
    )
    issuer = StrOrModelField(
        Issuer,
        required=True,
        metadata={
            "description": (
                "The JSON-LD Verifiable Credential Issuer. Either string of object"
                " with id field."
            ),
            "example": "did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH",
        },
    )
    credential_subject = SingleOrArrayField(
        CredentialSubject,
        data_key="credentialSubject",
        required=True,
        metadata={"description": "One or more credential subjects"},
    )
    valid_from = StrField(
        data_key="validFrom",
        required=False,
        metadata={
            "description": "The earliest moment the credential is valid",
            "example": RFC3339DateTime.EXAMPLE,
        },
    )
    valid_until = StrField(
        data_key="validUntil",
        required=False,
        metadata={
            "description": "The latest moment the credential is valid",
            "example": RFC3339DateTime.EXAMPLE,
        },
    )
    status = SingleOrArrayField(
        CredentialStatus,
        data_key="credentialStatus",
        required=False,
        metadata={"description": "One or more credential status entries"},
    )
    credential_schema = SingleOrArrayField(
        DataSchema,
        data_key="credentialSchema",
        required=False,
        metadata={"description": "One or more data schemas of the credential"},
    )
    refresh_service = SingleOrArrayField(
        RefreshService,
        data_key="refreshService",
        required=False,
        metadata={"description": "One or more refresh services"},
    )
    terms_of_use = SingleOrArrayField(
        TermsOfUse,
        data_key="termsOfUse",
        required=False,
        metadata={"description": "One or more terms of use"},
    )
    evidence = SingleOrArrayField(
        Evidence,
        required=False,
        metadata={"description": "One or more pieces of evidence"},
    )
