# common/serializers.py

"""
SHARED SERIALIZER HELPERS

The storefront client posts camelCase keys (customerId, productId, ...) while
the API speaks snake_case. CamelCaseAliasMixin maps the declared aliases onto
their snake_case field names before validation; snake_case input wins when a
payload carries both.
"""

from __future__ import annotations

from collections.abc import Mapping


class CamelCaseAliasMixin:
    field_aliases: dict[str, str] = {}

    def to_internal_value(self, data):
        if isinstance(data, Mapping) and self.field_aliases:
            remapped = dict(data.items())
            for alias, field_name in self.field_aliases.items():
                if alias in remapped:
                    value = remapped.pop(alias)
                    remapped.setdefault(field_name, value)
            data = remapped
        return super().to_internal_value(data)
