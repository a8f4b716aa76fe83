"""Run configuration.

RunConfig is a Pydantic model shared by the graph builder and the
orchestrator. Record stores are configured on their own.
"""

from __future__ import annotations

from pydantic import BaseModel


class RunConfig(BaseModel):
    """Configuration for a resolution-and-creation run.

    Attributes:
        strict_placeholders: Raise PlaceholderError on unknown ``{...}`` tokens
            instead of leaving them literal.
        id_field: Field name treated as the record identifier when a
            referenced handle does not carry it, so ``use_ref(alias, id_field, ...)``
            copies the handle id.
    """

    strict_placeholders: bool = False
    id_field: str = "Id"
