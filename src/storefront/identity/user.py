"""User aggregate — a registered shopper and their default shipping details."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from storefront.domain import storefront
from storefront.utils.sequence import next_id

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

_FORBIDDEN_EMAIL_CHARS = (" ", "\t", "\n", ";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def is_valid_email(email: str) -> bool:
    """Structural email check: one @, non-empty parts, a dotted domain."""
    if not email or any(char in email for char in _FORBIDDEN_EMAIL_CHARS):
        return False
    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        return False
    return all(not (label.startswith("-") or label.endswith("-")) for label in domain_part.split("."))


@storefront.aggregate
class User:
    """A person who can log in, fill a cart and place orders.

    Email is stored exactly as registered and compared case-sensitively.
    Only the password hash is kept; the plaintext never reaches the aggregate.
    """

    id: Integer(identifier=True)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    address: String(max_length=255)
    city: String(max_length=100)
    zip_code: String(max_length=20)
    created_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, email, password_hash, first_name, last_name, address=None, city=None, zip_code=None):
        return cls(
            id=next_id("users"),
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            address=address,
            city=city,
            zip_code=zip_code,
            created_at=datetime.now(UTC),
        )

    def update_profile(
        self,
        first_name=_UNSET,
        last_name=_UNSET,
        address=_UNSET,
        city=_UNSET,
        zip_code=_UNSET,
    ):
        """Apply a partial profile update; omitted fields keep their value."""
        if first_name is not _UNSET:
            if not first_name:
                raise ValidationError({"first_name": ["First name cannot be blank"]})
            self.first_name = first_name
        if last_name is not _UNSET:
            if not last_name:
                raise ValidationError({"last_name": ["Last name cannot be blank"]})
            self.last_name = last_name
        if address is not _UNSET:
            self.address = address
        if city is not _UNSET:
            self.city = city
        if zip_code is not _UNSET:
            self.zip_code = zip_code
