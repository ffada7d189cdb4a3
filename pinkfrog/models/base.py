from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for tool payloads: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ToolResult(CamelModel):
    """Outcome shared by every tool.

    I/O problems are carried here as data instead of being raised:

    * ``"ok"`` – the operation did everything it was asked to.
    * ``"partial"`` – it finished, but some steps were skipped; see ``warnings``.
    * ``"failed"`` – nothing useful was produced; see ``message``.
    """

    success: bool = True
    status: Literal["ok", "partial", "failed"] = "ok"
    message: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    def fail(self, message: str):
        self.success = False
        self.status = "failed"
        self.message = message
        return self

    def warn(self, warning: str):
        self.warnings.append(warning)
        if self.status == "ok":
            self.status = "partial"
        return self
