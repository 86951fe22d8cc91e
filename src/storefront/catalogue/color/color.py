"""Color aggregate — the fixed color attribute products point at."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront

_HEX_CODE = re.compile(r"^#[0-9A-Fa-f]{6}$")


@storefront.aggregate
class Color:
    name = String(required=True, max_length=50, unique=True)
    hex_code = String(required=True, max_length=7)
    created_at = DateTime()

    @invariant.post
    def hex_code_must_be_rgb(self):
        if self.hex_code and not _HEX_CODE.match(self.hex_code):
            raise ValidationError({"hex_code": ["Hex code must look like #RRGGBB"]})

    @classmethod
    def create(cls, name, hex_code):
        return cls(name=name, hex_code=hex_code, created_at=datetime.now(UTC))

    def update_details(self, name=None, hex_code=None):
        if name is not None:
            self.name = name
        if hex_code is not None:
            self.hex_code = hex_code
