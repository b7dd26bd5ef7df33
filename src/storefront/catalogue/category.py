"""Category aggregate — static reference data for browsing the catalogue."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String

from storefront.domain import storefront
from storefront.utils.sequence import next_id, reserve


@storefront.aggregate
class Category:
    id: Integer(identifier=True)
    name: String(required=True, max_length=100, sanitize=False)
    slug: String(required=True, max_length=100)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not re.match(r"^[a-z0-9-]+$", self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase letters, numbers, and hyphens"]})

    @classmethod
    def create(cls, name, slug, category_id=None):
        """Create a category. An explicit ``category_id`` is reserved in the sequence."""
        if category_id is None:
            category_id = next_id("categories")
        else:
            reserve("categories", category_id)
        return cls(id=category_id, name=name, slug=slug)
