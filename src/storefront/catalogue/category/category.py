"""Category aggregate root for grouping products."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    name = String(required=True, max_length=100)
    description = Text()
    slug = String(required=True, max_length=200, unique=True)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumerics separated by single hyphens"]})

    @classmethod
    def create(cls, name, slug, description=None, is_active=True):
        now = datetime.now(UTC)
        return cls(
            name=name,
            slug=slug,
            description=description,
            is_active=True if is_active is None else is_active,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, name=None, slug=None, description=None, is_active=None):
        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = slug
        if description is not None:
            self.description = description
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now(UTC)
