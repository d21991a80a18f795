"""Session models for the edit session state machine."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .core import JsonPath


class EditMode(str, Enum):
    """Modes of an edit session."""

    VIEWING = "viewing"
    EDITING = "editing"


class SessionState(BaseModel):
    """Snapshot of an edit session for renderers and logging."""

    model_config = ConfigDict(frozen=True)

    mode: EditMode = Field(EditMode.VIEWING, description="Current session mode")
    draft_text: str = Field("", description="Text shown in the editor or viewer pane")
    error: Optional[str] = Field(None, description="Human-readable error from the last save")
    path: Optional[JsonPath] = Field(None, description="Selected path, None when nothing is selected")
    path_text: Optional[str] = Field(None, description="Display form of the selected path")

    @property
    def active(self) -> bool:
        return self.path is not None
